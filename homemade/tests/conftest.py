"""
Shared fixtures.

The full ``zipcodes`` table is swapped for a small one so distances and
rankings in the tests are easy to reason about.
"""
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from homemade.locations.zip_table import build_zip_frame, reset_zip_table, set_zip_table

# Same shape as zipcodes.list_all() records
ZIP_RECORDS = [
    {"zip_code": "87501", "city": "SANTA FE", "state": "NM", "lat": "35.6870", "long": "-105.9378"},
    {"zip_code": "87505", "city": "SANTA FE", "state": "NM", "lat": "35.6197", "long": "-105.8692"},
    {"zip_code": "87506", "city": "SANTA FE", "state": "NM", "lat": "35.8190", "long": "-105.9810"},
    {"zip_code": "87507", "city": "SANTA FE", "state": "NM", "lat": "35.6380", "long": "-106.0490"},
    {"zip_code": "87574", "city": "TESUQUE", "state": "NM", "lat": "35.7500", "long": "-105.9200"},
    {"zip_code": "87102", "city": "ALBUQUERQUE", "state": "NM", "lat": "35.0820", "long": "-106.6480"},
    {"zip_code": "87104", "city": "ALBUQUERQUE", "state": "NM", "lat": "35.1050", "long": "-106.6720"},
    {"zip_code": "80202", "city": "DENVER", "state": "CO", "lat": "39.7530", "long": "-104.9990"},
    {"zip_code": "80203", "city": "DENVER", "state": "CO", "lat": "39.7310", "long": "-104.9820"},
    {"zip_code": "80204", "city": "DENVER", "state": "CO", "lat": "39.7340", "long": "-105.0260"},
    {"zip_code": "95316", "city": "DENAIR", "state": "CA", "lat": "37.5440", "long": "-120.7910"},
    {"zip_code": "78701", "city": "AUSTIN", "state": "TX", "lat": "30.2710", "long": "-97.7420"},
    {"zip_code": "78702", "city": "AUSTIN", "state": "TX", "lat": "30.2630", "long": "-97.7140"},
    {"zip_code": "77950", "city": "AUSTWELL", "state": "TX", "lat": "28.3900", "long": "-96.8420"},
    {"zip_code": "10001", "city": "NEW YORK", "state": "NY", "lat": "40.7506", "long": "-73.9970"},
    # Unusable rows, dropped on load
    {"zip_code": "87999", "city": "", "state": "NM", "lat": "35.0", "long": "-106.0"},
    {"zip_code": "87998", "city": "NOWHERE", "state": "NM", "lat": "", "long": "-106.0"},
]

set_zip_table(build_zip_frame(ZIP_RECORDS))

from homemade.app import app  # noqa: E402
from homemade.listings.seed import reset_demo_data  # noqa: E402


@pytest.fixture(autouse=True)
def demo_data():
    set_zip_table(build_zip_frame(ZIP_RECORDS))
    reset_demo_data()
    yield
    reset_zip_table()


@pytest.fixture
def client():
    # Fresh client per test: seeded user ids change on every reset
    return TestClient(app)
