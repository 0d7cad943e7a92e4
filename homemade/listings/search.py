"""
Listing search.

Responsibilities:
- Filter listings by seller, active flag, free text and location.
- Exact mode: listings inside a zip or a resolved city.
- Nearby mode: listings within a radius of the location, minus the exact area.
- Category fallback: when nothing in the whole radius matches the text,
  suggest listings in the categories the text points at.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import pandas as pd

from ..analytics.store import record_event
from ..exceptions import InvalidInputError
from ..locations.config import DEFAULT_LOCATION_CONFIG, LocationConfig
from ..locations.resolver import ResolvedLocation, resolve_location
from ..locations.zip_table import clean_zip, zips_within_radius
from .categories import categorize
from .models import Listing, ListingSearchParams
from .store import get_profile_by_user, list_listings

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    listings: list[Listing] = field(default_factory=list)
    # None when category suggestions were not requested
    suggestions: list[Listing] | None = None


_FRAME_FIELDS = {
    "id", "seller_id", "title", "description", "city", "state", "zip_code",
    "category", "is_active", "created_at",
}


def _listings_frame(listings: list[Listing]) -> pd.DataFrame:
    df = pd.DataFrame([listing.model_dump(include=_FRAME_FIELDS) for listing in listings])
    df["is_active"] = df["is_active"].astype(bool)
    df["title_lower"] = df["title"].fillna("").str.lower()
    df["description_lower"] = df["description"].fillna("").str.lower()
    df["city_lower"] = df["city"].fillna("").str.lower()
    df["state"] = df["state"].fillna("")
    df["zip_code"] = df["zip_code"].fillna("")
    df["category"] = df["category"].fillna("")
    return df


def _text_mask(df: pd.DataFrame, q: str | None) -> pd.Series:
    if not q:
        return pd.Series(True, index=df.index)
    needle = q.lower()
    return df["title_lower"].str.contains(needle, regex=False) | df[
        "description_lower"
    ].str.contains(needle, regex=False)


def _location_mask(df: pd.DataFrame, location: str, resolved: ResolvedLocation | None) -> pd.Series:
    """Listings inside a typed location: its zips, or its city and state by name."""
    if resolved is None:
        # Not in the zip table; fall back to what sellers typed.
        text = " ".join(location.split()).lower()
        return (df["city_lower"] == text) | (df["zip_code"] == text)

    mask = df["zip_code"].isin(resolved.zips)
    # A typed zip stays a single-zip filter; a typed city also matches by name
    if resolved.city and resolved.state and resolved.label != resolved.center_zip:
        mask = mask | ((df["city_lower"] == resolved.city.lower()) & (df["state"] == resolved.state))
    return mask


def _none(df: pd.DataFrame) -> pd.Series:
    return pd.Series(False, index=df.index)


def _ordered(df: pd.DataFrame, mask: pd.Series, by_id: dict[str, Listing]) -> list[Listing]:
    rows = df.loc[mask].sort_values("created_at", ascending=False, kind="stable")
    return [by_id[listing_id] for listing_id in rows["id"]]


def _suggestion_categories(df: pd.DataFrame, q: str, text_mask: pd.Series) -> list[str]:
    """Categories implied by the query text, then by listings matching it anywhere."""
    categories = categorize(q)
    matched = df.loc[text_mask & (df["category"] != ""), "category"]
    for category in matched.value_counts().index:
        if category not in categories:
            categories.append(category)
    return categories


def search_listings(
    params: ListingSearchParams,
    current_user: dict | None = None,
    config: LocationConfig = DEFAULT_LOCATION_CONFIG,
) -> SearchResult:
    start_time = time.time()
    nearby_mode = params.nearby or bool(params.near_zip)
    want_suggestions = params.suggest_category and nearby_mode and bool(params.q)

    if params.nearby and not params.location and not params.near_zip:
        raise InvalidInputError("A location is required for a nearby search")

    result = SearchResult(suggestions=[] if want_suggestions else None)
    all_listings = list_listings()
    if not all_listings:
        return _finish(result, params, nearby_mode, start_time, fallback=False)

    df = _listings_frame(all_listings)
    by_id = {listing.id: listing for listing in all_listings}

    # --- Hard filters ---
    mask = pd.Series(True, index=df.index)
    if params.seller_id:
        seller_id = params.seller_id
        if seller_id == "current":
            profile = get_profile_by_user(current_user["id"]) if current_user else None
            if profile is None:
                return _finish(result, params, nearby_mode, start_time, fallback=False)
            seller_id = profile.id
        mask = mask & (df["seller_id"] == seller_id)

    if params.only_active:
        mask = mask & df["is_active"]

    text_mask = _text_mask(df, params.q)
    resolved = resolve_location(params.location) if params.location else None

    # --- Exact area ---
    # zipCode and location both narrow it when sent together
    if params.zip_code or params.location:
        exact_area = pd.Series(True, index=df.index)
        if params.zip_code:
            exact_area = exact_area & (df["zip_code"] == (clean_zip(params.zip_code) or params.zip_code))
        if params.location:
            exact_area = exact_area & _location_mask(df, params.location, resolved)
    else:
        exact_area = pd.Series(not nearby_mode, index=df.index)

    if not nearby_mode:
        result.listings = _ordered(df, mask & exact_area & text_mask, by_id)
        return _finish(result, params, nearby_mode, start_time, fallback=False)

    # --- Nearby area ---
    radius = params.radius or config.default_radius_miles
    centre_zip = clean_zip(params.near_zip) if params.near_zip else (resolved.center_zip if resolved else None)
    radius_zips = zips_within_radius(centre_zip, radius) if centre_zip else []
    if not radius_zips:
        logger.debug("No zips within %s mi of %r", radius, centre_zip)
        return _finish(result, params, nearby_mode, start_time, fallback=False)

    if params.exclude_zip:
        exact_area = exact_area | (df["zip_code"] == (clean_zip(params.exclude_zip) or params.exclude_zip))
    in_radius = df["zip_code"].isin(radius_zips)
    result.listings = _ordered(df, mask & in_radius & ~exact_area & text_mask, by_id)

    # --- Category fallback ---
    fallback = False
    if want_suggestions:
        anything_matched = bool((mask & (in_radius | exact_area) & text_mask).any())
        if not anything_matched:
            fallback = True
            categories = _suggestion_categories(df, params.q, text_mask)
            if categories:
                rank = {c: i for i, c in enumerate(categories)}
                candidates = df.loc[
                    mask & df["is_active"] & (in_radius | exact_area) & df["category"].isin(categories)
                ].copy()
                candidates["_rank"] = candidates["category"].map(rank)
                candidates = candidates.sort_values(
                    ["_rank", "created_at"], ascending=[True, False], kind="stable"
                ).head(config.category_suggestion_limit)
                result.suggestions = [by_id[i] for i in candidates["id"]]
            logger.info(
                "No listings match %r near %s; suggesting categories %s",
                params.q, centre_zip, categories,
            )

    return _finish(result, params, nearby_mode, start_time, fallback=fallback)


def _finish(
    result: SearchResult,
    params: ListingSearchParams,
    nearby_mode: bool,
    start_time: float,
    fallback: bool,
) -> SearchResult:
    elapsed_ms = round((time.time() - start_time) * 1000, 1)
    record_event("search", {
        "location": params.location or params.near_zip or params.zip_code,
        "query": params.q,
        "mode": "nearby" if nearby_mode else "exact",
        "results_returned": len(result.listings),
        "suggestions_returned": len(result.suggestions or []),
        "category_fallback": fallback,
        "response_time_ms": elapsed_ms,
    })
    return result
