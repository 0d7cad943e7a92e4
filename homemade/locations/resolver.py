"""
Free-text location resolution.

Turns what a buyer types into the "Where" box into the set of zips a search
should cover. Accepted shapes:

- ``87505`` / ``87505-1234``
- ``Santa Fe, NM`` / ``Santa Fe NM`` / ``Santa Fe, New Mexico``
- ``Santa Fe`` (state picked by zip count)
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .states import normalize_state
from .zip_table import clean_zip, get_zip_table, haversine_miles, lookup_zip


@dataclass(frozen=True)
class ResolvedLocation:
    label: str
    city: str | None
    state: str | None
    zips: list[str] = field(default_factory=list)
    center_zip: str | None = None
    lat: float | None = None
    lon: float | None = None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None


def _resolve_zip(zip_code: str) -> ResolvedLocation:
    entry = lookup_zip(zip_code)
    if entry is None:
        # Unknown to the table but still a valid exact-match filter.
        return ResolvedLocation(label=zip_code, city=None, state=None, zips=[zip_code], center_zip=zip_code)
    return ResolvedLocation(
        label=zip_code,
        city=entry["city"],
        state=entry["state"],
        zips=[zip_code],
        center_zip=zip_code,
        lat=entry["lat"],
        lon=entry["lon"],
    )


def _resolve_city(city: str, state: str | None) -> ResolvedLocation | None:
    df = get_zip_table()
    mask = df["city_lower"] == city.strip().lower()
    if state:
        mask = mask & (df["state"] == state)
    rows = df.loc[mask]
    if rows.empty:
        return None

    if not state:
        counts = rows.groupby("state").size().reset_index(name="n")
        counts = counts.sort_values(["n", "state"], ascending=[False, True])
        state = counts.iloc[0]["state"]
        rows = rows.loc[rows["state"] == state]

    # Centre on the zip nearest the mean of the city's zip centroids
    lats = rows["lat"].to_numpy()
    lons = rows["lon"].to_numpy()
    distances = haversine_miles(float(lats.mean()), float(lons.mean()), lats, lons)
    centre = rows.iloc[int(distances.argmin())]

    display_city = rows.iloc[0]["city"]
    return ResolvedLocation(
        label=f"{display_city}, {state}",
        city=display_city,
        state=state,
        zips=rows["zip"].tolist(),
        center_zip=centre["zip"],
        lat=float(centre["lat"]),
        lon=float(centre["lon"]),
    )


def resolve_location(text: str | None) -> ResolvedLocation | None:
    """Resolve a zip or city string, or return ``None`` when it matches nothing."""
    if not text:
        return None
    cleaned = " ".join(text.split())
    if not cleaned:
        return None

    zip_code = clean_zip(cleaned)
    if zip_code:
        return _resolve_zip(zip_code)
    if cleaned.replace("-", "").isdigit():
        return None

    if "," in cleaned:
        city_part, state_part = (p.strip() for p in cleaned.rsplit(",", 1))
        state = normalize_state(state_part)
        if state and city_part:
            return _resolve_city(city_part, state)
        return _resolve_city(city_part or state_part, None)

    # "Santa Fe NM", "Santa Fe New Mexico", "Washington District of Columbia"
    tokens = cleaned.split(" ")
    for width in (3, 2, 1):
        if len(tokens) <= width:
            continue
        state = normalize_state(" ".join(tokens[-width:]))
        if state:
            resolved = _resolve_city(" ".join(tokens[:-width]), state)
            if resolved:
                return resolved

    return _resolve_city(cleaned, None)
