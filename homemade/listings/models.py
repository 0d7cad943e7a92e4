from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from ..locations.states import normalize_state
from ..locations.zip_table import clean_zip
from .categories import normalize_category


class CamelModel(BaseModel):
    """Base model speaking the browser client's camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Stored records ───────────────────────────────────────────────────────


class SellerProfile(CamelModel):
    id: str
    user_id: str
    bio: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    contact_email: str | None = None
    profile_picture_url: str | None = None


class Listing(CamelModel):
    id: str
    seller_id: str
    title: str
    description: str | None = None
    price: float
    image_url: str | None = None
    listing_date: datetime
    pickup_time: datetime
    pickup_location: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    category: str | None = None
    serving_description: str | None = None
    is_active: bool = True
    created_at: datetime


# ── Responses ────────────────────────────────────────────────────────────


class UserName(CamelModel):
    name: str


class SellerSummary(CamelModel):
    user: UserName


class SellerContact(CamelModel):
    bio: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    phone: str | None = None
    contact_email: str | None = None
    profile_picture_url: str | None = None
    user: UserName


class ListingOut(Listing):
    seller: SellerSummary


class ListingDetail(Listing):
    seller: SellerContact


class ListingSearchResponse(CamelModel):
    listings: list[ListingOut]
    suggestions: list[ListingOut]


class LocationSuggestion(CamelModel):
    label: str
    city: str
    state: str
    zip: str


# ── Requests ─────────────────────────────────────────────────────────────


def check_url(value: str | None) -> str | None:
    if value is None or value == "":
        return None
    if not value.startswith(("http://", "https://")):
        raise ValueError("must be an http(s) URL")
    return value


def check_zip(value: str | None) -> str | None:
    if value is None or value.strip() == "":
        return None
    zip_code = clean_zip(value)
    if zip_code is None:
        raise ValueError("must be a 5-digit zip code")
    return zip_code


def check_state(value: str | None) -> str | None:
    if value is None or value.strip() == "":
        return None
    state = normalize_state(value)
    if state is None:
        raise ValueError("unknown state")
    return state


def check_category(value: str | None) -> str | None:
    if value is None or value.strip() == "":
        return None
    category = normalize_category(value)
    if category is None:
        raise ValueError("unknown category")
    return category


class ListingFields(CamelModel):
    """Optional listing fields shared by create and update requests."""

    description: str | None = None
    image_url: str | None = None
    pickup_location: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    category: str | None = None
    serving_description: str | None = None

    @field_validator("image_url")
    @classmethod
    def validate_image_url(cls, value: str | None) -> str | None:
        return check_url(value)

    @field_validator("zip_code")
    @classmethod
    def validate_zip_code(cls, value: str | None) -> str | None:
        return check_zip(value)

    @field_validator("state")
    @classmethod
    def validate_state(cls, value: str | None) -> str | None:
        return check_state(value)

    @field_validator("category")
    @classmethod
    def validate_category(cls, value: str | None) -> str | None:
        return check_category(value)


class ListingCreate(ListingFields):
    title: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., gt=0)
    listing_date: datetime
    pickup_time: datetime


class ListingUpdate(ListingFields):
    title: str | None = Field(default=None, min_length=1, max_length=200)
    price: float | None = Field(default=None, gt=0)
    listing_date: datetime | None = None
    pickup_time: datetime | None = None
    is_active: bool | None = None


class ListingSearchParams(BaseModel):
    seller_id: str | None = None
    only_active: bool = False
    zip_code: str | None = None
    location: str | None = None
    q: str | None = None
    nearby: bool = False
    near_zip: str | None = None
    radius: int | None = Field(default=None, ge=1, le=500)
    exclude_zip: str | None = None
    suggest_category: bool = False

    @field_validator("zip_code", "location", "q", "near_zip", "exclude_zip", "seller_id")
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        value = value.strip()
        return value or None
