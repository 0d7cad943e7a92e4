from __future__ import annotations

import numpy as np

from homemade.locations.zip_table import (
    build_zip_frame,
    clean_zip,
    get_zip_table,
    haversine_miles,
    lookup_zip,
    nearest_zip,
    zips_for_city,
    zips_within_radius,
)


def test_clean_zip_accepts_plus_four():
    assert clean_zip("87505") == "87505"
    assert clean_zip(" 87505-1234 ") == "87505"


def test_clean_zip_rejects_other_text():
    assert clean_zip("8750") is None
    assert clean_zip("Santa Fe") is None
    assert clean_zip("") is None
    assert clean_zip(None) is None


def test_build_zip_frame_normalises_records():
    df = build_zip_frame([
        {"zip_code": "501", "city": "HOLTSVILLE", "state": "ny", "lat": "40.81", "long": "-73.04"},
    ])
    row = df.iloc[0]
    assert row["zip"] == "00501"
    assert row["city"] == "Holtsville"
    assert row["state"] == "NY"
    assert row["city_lower"] == "holtsville"


def test_build_zip_frame_drops_unusable_rows():
    df = get_zip_table()
    assert "87999" not in df["zip"].tolist()  # no city
    assert "87998" not in df["zip"].tolist()  # no latitude
    assert len(df) == 15


def test_build_zip_frame_empty():
    df = build_zip_frame([])
    assert df.empty
    assert "zip" in df.columns


def test_lookup_zip():
    entry = lookup_zip("87505-0001")
    assert entry["city"] == "Santa Fe"
    assert entry["state"] == "NM"
    assert isinstance(entry["lat"], float)


def test_lookup_zip_unknown():
    assert lookup_zip("99999") is None
    assert lookup_zip("not a zip") is None


def test_zips_for_city():
    assert zips_for_city("santa fe", "nm") == ["87501", "87505", "87506", "87507"]
    assert zips_for_city("Santa Fe", "CO") == []


def test_haversine_miles_known_distance():
    # Santa Fe 87501 to Albuquerque 87102 is roughly 58 miles
    d = haversine_miles(35.6870, -105.9378, np.array([35.0820]), np.array([-106.6480]))
    assert 55 < d[0] < 62


def test_haversine_miles_zero_for_same_point():
    d = haversine_miles(35.0, -106.0, np.array([35.0]), np.array([-106.0]))
    assert d[0] == 0.0


def test_zips_within_radius_nearest_first():
    zips = zips_within_radius("87501", 25)
    assert zips[0] == "87501"
    assert zips[1] == "87574"
    assert set(zips) == {"87501", "87505", "87506", "87507", "87574"}


def test_zips_within_radius_small_radius():
    assert zips_within_radius("87501", 5) == ["87501", "87574"]


def test_zips_within_radius_reaches_albuquerque():
    assert "87102" in zips_within_radius("87501", 100)


def test_zips_within_radius_unknown_zip():
    assert zips_within_radius("99999", 25) == []


def test_nearest_zip():
    entry = nearest_zip(35.69, -105.94, 15)
    assert entry["zip"] == "87501"


def test_nearest_zip_too_far():
    assert nearest_zip(0.0, 0.0, 15) is None
