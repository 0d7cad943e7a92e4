from __future__ import annotations

import re
from typing import Any, Iterable

import numpy as np
import pandas as pd
import zipcodes

EARTH_RADIUS_MILES = 3958.8

ZIP_COLUMNS = ["zip", "city", "state", "lat", "lon"]

_ZIP_RE = re.compile(r"^\s*(\d{5})(?:-\d{4})?\s*$")

_table: pd.DataFrame | None = None


def clean_zip(value: str | None) -> str | None:
    """Return the 5-digit zip from ``"87505"`` or ``"87505-1234"``, else ``None``."""
    if not value:
        return None
    match = _ZIP_RE.match(str(value))
    return match.group(1) if match else None


def build_zip_frame(records: Iterable[dict[str, Any]]) -> pd.DataFrame:
    """Normalise raw ``zipcodes`` records into the canonical zip table."""
    raw = pd.DataFrame(list(records))
    if raw.empty:
        return pd.DataFrame(columns=ZIP_COLUMNS + ["city_lower"])

    df = pd.DataFrame()
    df["zip"] = raw["zip_code"].astype(str).str.strip().str.zfill(5)
    df["city"] = raw["city"].fillna("").astype(str).str.strip().str.title()
    df["state"] = raw["state"].fillna("").astype(str).str.strip().str.upper()
    df["lat"] = pd.to_numeric(raw["lat"], errors="coerce")
    df["lon"] = pd.to_numeric(raw["long"], errors="coerce")

    df = df[(df["city"] != "") & (df["state"] != "")]
    df = df.dropna(subset=["lat", "lon"])
    df = df.drop_duplicates(subset="zip").sort_values("zip").reset_index(drop=True)

    # Lowercase city for case-insensitive lookup
    df["city_lower"] = df["city"].str.lower()
    return df


def get_zip_table() -> pd.DataFrame:
    """Return the in-memory zip table, building it on first call."""
    global _table
    if _table is None:
        _table = build_zip_frame(zipcodes.list_all())
    return _table


def set_zip_table(df: pd.DataFrame) -> None:
    global _table
    _table = df


def reset_zip_table() -> None:
    global _table
    _table = None


def _row_to_entry(row: pd.Series) -> dict[str, Any]:
    return {
        "zip": row["zip"],
        "city": row["city"],
        "state": row["state"],
        "lat": float(row["lat"]),
        "lon": float(row["lon"]),
    }


def lookup_zip(value: str | None) -> dict[str, Any] | None:
    zip_code = clean_zip(value)
    if zip_code is None:
        return None
    df = get_zip_table()
    rows = df.loc[df["zip"] == zip_code]
    if rows.empty:
        return None
    return _row_to_entry(rows.iloc[0])


def zips_for_city(city: str, state: str | None = None) -> list[str]:
    """All zips for a city, optionally limited to one state."""
    df = get_zip_table()
    mask = df["city_lower"] == city.strip().lower()
    if state:
        mask = mask & (df["state"] == state.upper())
    return df.loc[mask, "zip"].tolist()


def haversine_miles(lat: float, lon: float, lats: np.ndarray, lons: np.ndarray) -> np.ndarray:
    """Great-circle distance in miles from one point to many."""
    lat1 = np.radians(lat)
    lon1 = np.radians(lon)
    lat2 = np.radians(np.asarray(lats, dtype=float))
    lon2 = np.radians(np.asarray(lons, dtype=float))
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2) ** 2
    return 2 * EARTH_RADIUS_MILES * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))


def zips_within_radius(zip_code: str, miles: float) -> list[str]:
    """Zips whose centroid lies within *miles* of *zip_code*, nearest first.

    The centre zip itself is included. An unknown zip gives ``[]``.
    """
    centre = lookup_zip(zip_code)
    if centre is None:
        return []
    df = get_zip_table()
    distances = haversine_miles(centre["lat"], centre["lon"], df["lat"].to_numpy(), df["lon"].to_numpy())
    within = np.flatnonzero(distances <= miles)
    order = within[np.argsort(distances[within], kind="stable")]
    return df["zip"].to_numpy()[order].tolist()


def nearest_zip(lat: float, lon: float, max_miles: float) -> dict[str, Any] | None:
    """The zip row closest to a coordinate, or ``None`` if none is within *max_miles*."""
    df = get_zip_table()
    if df.empty:
        return None
    distances = haversine_miles(lat, lon, df["lat"].to_numpy(), df["lon"].to_numpy())
    idx = int(np.argmin(distances))
    if distances[idx] > max_miles:
        return None
    return _row_to_entry(df.iloc[idx])
