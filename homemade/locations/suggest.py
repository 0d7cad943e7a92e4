from __future__ import annotations

import logging

from .cache import cache_get, cache_set
from .config import DEFAULT_LOCATION_CONFIG, LocationConfig
from .zip_table import get_zip_table

logger = logging.getLogger(__name__)


def suggest_locations(
    query: str | None,
    limit: int | None = None,
    config: LocationConfig = DEFAULT_LOCATION_CONFIG,
) -> list[dict[str, str]]:
    """
    Rank unique city/state pairs matching a partial city name or zip prefix.

    Cities with more zip codes are larger, so they rank first: typing "den"
    puts Denver, CO (many zips) above Denair, CA (one zip). Ties are broken
    alphabetically by city, then by lowest zip.
    """
    # Same normalisation as the cache key, so a cached answer never differs
    q = " ".join((query or "").split())
    if len(q) < config.min_query_length:
        return []
    limit = limit or config.suggestion_limit

    cached = cache_get(q, limit, config)
    if cached is not None:
        return cached

    df = get_zip_table()
    if q.isdigit():
        mask = df["zip"].str.startswith(q)
    else:
        mask = df["city_lower"].str.startswith(q.lower())
    matches = df.loc[mask]

    if matches.empty:
        cache_set(q, limit, [])
        return []

    # Table is sorted by zip, so "first" is the lowest zip of each city.
    grouped = (
        matches.groupby(["city_lower", "state"], sort=False)
        .agg(city=("city", "first"), zip=("zip", "first"), zip_count=("zip", "size"))
        .reset_index()
        .sort_values(["zip_count", "city_lower", "zip"], ascending=[False, True, True], kind="stable")
    )

    results = [
        {
            "label": f"{row.city}, {row.state}",
            "city": row.city,
            "state": row.state,
            "zip": row.zip,
        }
        for row in grouped.head(limit).itertuples(index=False)
    ]
    logger.debug("Location suggestions for %r: %d of %d groups", q, len(results), len(grouped))

    cache_set(q, limit, results)
    return results
