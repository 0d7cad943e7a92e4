from __future__ import annotations

from ..auth.users import get_user
from .models import (
    Listing,
    ListingDetail,
    ListingOut,
    SellerContact,
    SellerSummary,
    UserName,
)
from .store import get_profile

_UNKNOWN_SELLER = "Unknown seller"


def _seller_name(seller_id: str) -> str:
    profile = get_profile(seller_id)
    user = get_user(profile.user_id) if profile else None
    return user["name"] if user else _UNKNOWN_SELLER


def to_listing_out(listing: Listing) -> ListingOut:
    return ListingOut(
        **listing.model_dump(),
        seller=SellerSummary(user=UserName(name=_seller_name(listing.seller_id))),
    )


def to_listing_detail(listing: Listing) -> ListingDetail:
    """Listing with the seller's public contact details."""
    profile = get_profile(listing.seller_id)
    contact = profile.model_dump(exclude={"id", "user_id"}) if profile else {}
    return ListingDetail(
        **listing.model_dump(),
        seller=SellerContact(**contact, user=UserName(name=_seller_name(listing.seller_id))),
    )
