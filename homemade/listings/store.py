from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from .categories import categorize
from .models import Listing, ListingCreate, ListingUpdate, SellerProfile

_profiles: dict[str, SellerProfile] = {}
_listings: dict[str, Listing] = {}


def _new_id() -> str:
    return uuid.uuid4().hex


# ── Seller profiles ──────────────────────────────────────────────────────


def create_profile(user_id: str, **fields: Any) -> SellerProfile:
    profile = SellerProfile(id=_new_id(), user_id=user_id, **fields)
    _profiles[profile.id] = profile
    return profile


def get_profile(profile_id: str) -> SellerProfile | None:
    return _profiles.get(profile_id)


def get_profile_by_user(user_id: str) -> SellerProfile | None:
    for profile in _profiles.values():
        if profile.user_id == user_id:
            return profile
    return None


# ── Listings ─────────────────────────────────────────────────────────────


def create_listing(
    seller: SellerProfile,
    data: ListingCreate,
    created_at: datetime | None = None,
) -> Listing:
    """Store a new listing for *seller*.

    Blank location fields fall back to the seller profile's location, and a
    missing category is inferred from the title and description.
    """
    fields = data.model_dump()
    if not fields["category"]:
        inferred = categorize(f"{data.title} {data.description or ''}")
        fields["category"] = inferred[0] if inferred else None
    fields["city"] = fields["city"] or seller.city
    fields["state"] = fields["state"] or seller.state
    fields["zip_code"] = fields["zip_code"] or seller.zip_code

    listing = Listing(
        id=_new_id(),
        seller_id=seller.id,
        created_at=created_at or datetime.now(timezone.utc),
        **fields,
    )
    _listings[listing.id] = listing
    return listing


def get_listing(listing_id: str) -> Listing | None:
    return _listings.get(listing_id)


def list_listings() -> list[Listing]:
    return list(_listings.values())


def update_listing(listing_id: str, data: ListingUpdate) -> Listing | None:
    existing = _listings.get(listing_id)
    if existing is None:
        return None
    changes = data.model_dump(exclude_unset=True)
    # Required columns cannot be cleared by sending null
    for required in ("title", "price", "listing_date", "pickup_time", "is_active"):
        if changes.get(required, "") is None:
            changes.pop(required)
    updated = existing.model_copy(update=changes)
    _listings[listing_id] = updated
    return updated


def delete_listing(listing_id: str) -> bool:
    return _listings.pop(listing_id, None) is not None


def clear_store() -> None:
    _listings.clear()
    _profiles.clear()
