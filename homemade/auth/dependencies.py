"""
FastAPI dependencies reading the signed session cookie.

The session holds the payload returned by ``authenticate``:
``{"id", "name", "email", "role"}``.
"""
from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from ..exceptions import ForbiddenError, NotFoundError
from ..listings.models import Listing, SellerProfile
from ..listings.store import get_listing, get_profile, get_profile_by_user


def get_current_user(request: Request) -> dict | None:
    return request.session.get("user")


def require_user(user: dict | None = Depends(get_current_user)) -> dict:
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_admin(user: dict = Depends(require_user)) -> dict:
    if user.get("role") != "admin":
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def require_seller_profile(user: dict = Depends(require_user)) -> SellerProfile:
    """The logged-in user's seller profile; 404 if they have none."""
    profile = get_profile_by_user(user["id"])
    if profile is None:
        raise NotFoundError("Seller profile")
    return profile


def require_owned_listing(listing_id: str, user: dict = Depends(require_user)) -> Listing:
    """The listing named in the path, if the logged-in user's profile owns it."""
    listing = get_listing(listing_id)
    if listing is None:
        raise NotFoundError("Listing")
    seller = get_profile(listing.seller_id)
    if seller is None or seller.user_id != user["id"]:
        raise ForbiddenError()
    return listing
