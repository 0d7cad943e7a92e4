from __future__ import annotations

import os

from fastapi import Depends, FastAPI, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from .analytics.aggregator import compute_analytics
from .analytics.store import get_events, record_event
from .auth.dependencies import (
    get_current_user,
    require_admin,
    require_owned_listing,
    require_seller_profile,
    require_user,
)
from .auth.models import LoginRequest, RegisterRequest, RegisterResponse
from .auth.users import authenticate, register_user
from .exceptions import (
    HomemadeError,
    InvalidInputError,
    NotFoundError,
    homemade_exception_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from .geocode.client import GeocodeResult, reverse_geocode
from .listings.categories import CATEGORIES
from .listings.models import (
    Listing,
    ListingCreate,
    ListingDetail,
    ListingOut,
    ListingSearchParams,
    ListingSearchResponse,
    ListingUpdate,
    LocationSuggestion,
    SellerProfile,
)
from .listings.search import search_listings
from .listings.seed import seed_demo_data
from .listings.serializers import to_listing_detail, to_listing_out
from .listings.store import create_listing, delete_listing, get_listing, update_listing
from .locations.cache import get_cache_stats
from .locations.suggest import suggest_locations
from .locations.zip_table import lookup_zip

app = FastAPI(title="HomeMade API", version="1.0.0")
app.add_middleware(
    SessionMiddleware,
    secret_key=os.environ.get("SESSION_SECRET", "homemade-secret-change-in-production"),
)
app.add_exception_handler(HomemadeError, homemade_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

if os.environ.get("HOMEMADE_SEED_DEMO", "1") != "0":
    seed_demo_data()


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/categories")
def categories() -> list[str]:
    return list(CATEGORIES)


@app.get("/api/location-suggestions", response_model=list[LocationSuggestion])
def location_suggestions(q: str | None = None) -> list[LocationSuggestion]:
    results = suggest_locations(q)
    record_event("location_suggest", {"query": q, "results_returned": len(results)})
    return [LocationSuggestion(**r) for r in results]


@app.get("/api/geocode", response_model=GeocodeResult)
def geocode(lat: str | None = None, lon: str | None = None) -> GeocodeResult:
    if not lat or not lon:
        raise InvalidInputError("Latitude and longitude are required")
    try:
        lat_value, lon_value = float(lat), float(lon)
    except ValueError:
        raise InvalidInputError("Latitude and longitude must be numbers")
    return reverse_geocode(lat_value, lon_value)


# ── Listings ─────────────────────────────────────────────────────────────


@app.get("/api/listings", response_model=None)
def listings(
    request: Request,
    seller_id: str | None = Query(default=None, alias="sellerId"),
    only_active: bool = Query(default=False, alias="onlyActive"),
    zip_code: str | None = Query(default=None, alias="zipCode"),
    location: str | None = None,
    q: str | None = None,
    nearby: bool = False,
    near_zip: str | None = Query(default=None, alias="nearZip"),
    radius: int | None = Query(default=None, ge=1, le=500),
    exclude_zip: str | None = Query(default=None, alias="excludeZip"),
    suggest_category: bool = Query(default=False, alias="suggestCategory"),
) -> list[ListingOut] | ListingSearchResponse:
    params = ListingSearchParams(
        seller_id=seller_id,
        only_active=only_active,
        zip_code=zip_code,
        location=location,
        q=q,
        nearby=nearby,
        near_zip=near_zip,
        radius=radius,
        exclude_zip=exclude_zip,
        suggest_category=suggest_category,
    )
    result = search_listings(params, current_user=get_current_user(request))
    found = [to_listing_out(listing) for listing in result.listings]
    if result.suggestions is None:
        return found
    return ListingSearchResponse(
        listings=found,
        suggestions=[to_listing_out(listing) for listing in result.suggestions],
    )


@app.post("/api/listings", response_model=ListingOut, status_code=201)
def create_listing_endpoint(
    body: ListingCreate,
    profile: SellerProfile = Depends(require_seller_profile),
) -> ListingOut:
    return to_listing_out(create_listing(profile, body))


@app.get("/api/listings/{listing_id}", response_model=ListingDetail)
def listing_detail(listing_id: str) -> ListingDetail:
    listing = get_listing(listing_id)
    if listing is None:
        raise NotFoundError("Listing")
    return to_listing_detail(listing)


@app.put("/api/listings/{listing_id}", response_model=ListingOut)
def update_listing_endpoint(
    body: ListingUpdate,
    listing: Listing = Depends(require_owned_listing),
) -> ListingOut:
    return to_listing_out(update_listing(listing.id, body))


@app.delete("/api/listings/{listing_id}")
def delete_listing_endpoint(listing: Listing = Depends(require_owned_listing)) -> dict:
    delete_listing(listing.id)
    return {"message": "Listing deleted"}


# ── Auth endpoints ───────────────────────────────────────────────────────


@app.post("/api/auth/register", response_model=RegisterResponse, status_code=201)
def register(body: RegisterRequest) -> RegisterResponse:
    city, state = body.city, body.state
    if body.zip_code and not (city and state):
        known = lookup_zip(body.zip_code)
        if known:
            city, state = city or known["city"], state or known["state"]
    user = register_user(
        body.name,
        body.email,
        body.password,
        phone=body.phone,
        contact_email=body.contact_email,
        city=city,
        state=state,
        zip_code=body.zip_code,
    )
    return RegisterResponse(message="User created successfully", user_id=user["id"])


@app.post("/api/auth/login")
def login(body: LoginRequest, request: Request) -> dict:
    user = authenticate(body.email, body.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    request.session["user"] = user
    return {"status": "ok", "user": user}


@app.post("/api/auth/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


@app.get("/api/auth/me")
def auth_me(user: dict = Depends(require_user)) -> dict:
    return user


# ── Admin endpoints ──────────────────────────────────────────────────────


@app.get("/api/analytics")
def analytics(user: dict = Depends(require_admin)) -> dict:
    return compute_analytics(get_events())


@app.get("/api/cache/stats")
def cache_stats(user: dict = Depends(require_admin)) -> dict:
    return get_cache_stats()
