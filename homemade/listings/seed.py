"""
Demo data: Santa Fe home cooks plus a few neighbours near and far.

Loaded on app start so search has something to find.
"""
from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from ..analytics.store import clear_events
from ..auth.users import clear_users, create_user, hash_password
from ..locations.cache import clear_cache
from .models import ListingCreate, ListingUpdate
from .store import clear_store, create_listing, get_profile_by_user, update_listing

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "password123"
ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin123"

_hash_cache: dict[str, str] = {}


def _hashed(plain: str) -> str:
    # bcrypt is slow on purpose; hash each demo password once per process
    if plain not in _hash_cache:
        _hash_cache[plain] = hash_password(plain)
    return _hash_cache[plain]


SELLERS: list[dict[str, Any]] = [
    {
        "name": "Maria Garcia",
        "email": "maria@example.com",
        "bio": "Born and raised in Santa Fe. Traditional New Mexican dishes from my abuelita's recipes.",
        "city": "Santa Fe", "state": "NM", "zip_code": "87505",
        "phone": "(505) 555-0101", "contact_email": "maria.homecook@example.com",
    },
    {
        "name": "James Whitehorse",
        "email": "james@example.com",
        "bio": "Former restaurant chef now cooking from home. Smoked meats and green chile everything.",
        "city": "Santa Fe", "state": "NM", "zip_code": "87501",
        "phone": "(505) 555-0202", "contact_email": "james.cooks@example.com",
    },
    {
        "name": "Priya Patel",
        "email": "priya@example.com",
        "bio": "Authentic Indian flavors in Santa Fe, made fresh with local ingredients when possible.",
        "city": "Santa Fe", "state": "NM", "zip_code": "87505",
        "phone": "(505) 555-0303",
    },
    {
        "name": "Rosa Montoya",
        "email": "rosa@example.com",
        "bio": "Tamale queen of Santa Fe! Fresh tamales every weekend.",
        "city": "Santa Fe", "state": "NM", "zip_code": "87505",
        "phone": "(505) 555-0404", "contact_email": "rosa.tamales@example.com",
    },
    {
        "name": "Elena Ortiz",
        "email": "elena@example.com",
        "bio": "Weekend baker up the road in Tesuque.",
        "city": "Tesuque", "state": "NM", "zip_code": "87574",
        "phone": "(505) 555-0505",
    },
    {
        "name": "Marcus Reed",
        "email": "marcus@example.com",
        "bio": "Albuquerque pitmaster and red chile devotee.",
        "city": "Albuquerque", "state": "NM", "zip_code": "87102",
    },
]

# (seller email, listing fields, pickup day offset)
LISTINGS: list[tuple[str, dict[str, Any], int]] = [
    ("maria@example.com", {
        "title": "Green Chile Enchiladas (Dozen)",
        "description": "Handmade corn tortillas filled with cheese and smothered in roasted Hatch green chile sauce.",
        "price": 18.00, "category": "New Mexican", "serving_description": "Feeds 4",
    }, 1),
    ("maria@example.com", {
        "title": "Posole Rojo (Quart)",
        "description": "Traditional red posole with tender pork, hominy, and dried red chiles.",
        "price": 14.00, "category": "Soups & Stews",
    }, 1),
    ("maria@example.com", {
        "title": "Fresh Sopapillas (Half Dozen)",
        "description": "Light, fluffy fried dough pillows served with honey.",
        "price": 6.00, "category": "Desserts",
    }, 2),
    ("james@example.com", {
        "title": "Smoked Brisket Plate",
        "description": "12-hour smoked brisket with green chile mac and cheese and coleslaw.",
        "price": 22.00, "category": "BBQ",
    }, 1),
    ("james@example.com", {
        "title": "Green Chile Cheeseburgers (2-Pack)",
        "description": "Half-pound burgers topped with roasted Hatch green chile and pepper jack.",
        "price": 16.00, "category": "American",
    }, 2),
    ("james@example.com", {
        "title": "Holiday Pecan Pie",
        "description": "Preorders are closed for the season.",
        "price": 28.00, "category": "Desserts", "is_active": False,
    }, 5),
    ("priya@example.com", {
        "title": "Chicken Tikka Masala with Naan",
        "description": "Creamy tomato-based curry with tender marinated chicken and fresh garlic naan.",
        "price": 15.00, "category": "Indian",
    }, 1),
    ("priya@example.com", {
        "title": "Vegetable Samosas (6 pieces)",
        "description": "Crispy pastry filled with spiced potatoes and peas, with tamarind and mint chutneys.",
        "price": 10.00, "category": "Indian",
    }, 2),
    ("priya@example.com", {
        "title": "Mango Lassi (Large)",
        "description": "Refreshing yogurt-based mango drink.",
        "price": 5.00, "category": "Drinks",
    }, 2),
    ("rosa@example.com", {
        "title": "Red Chile Pork Tamales (Dozen)",
        "description": "Slow-cooked shredded pork in red chile sauce wrapped in fresh masa and corn husks.",
        "price": 24.00, "category": "Mexican",
    }, 6),
    ("rosa@example.com", {
        "title": "Green Chile & Cheese Tamales (Dozen)",
        "description": "Roasted green chile and Monterey Jack cheese in fresh masa. Vegetarian-friendly!",
        "price": 22.00, "category": "Mexican",
    }, 6),
    ("rosa@example.com", {
        "title": "Sweet Corn Tamales (Half Dozen)",
        "description": "Sweet corn masa with a hint of cinnamon. A dessert tamale the whole family will love.",
        "price": 12.00, "category": "Desserts",
    }, 6),
    ("elena@example.com", {
        "title": "Biscochitos (Two Dozen)",
        "description": "Anise and cinnamon shortbread cookies, the New Mexico state cookie.",
        "price": 14.00, "category": "Desserts",
    }, 3),
    ("elena@example.com", {
        "title": "Sourdough Loaf",
        "description": "Naturally leavened country bread, baked Saturday morning.",
        "price": 9.00, "category": "Baked Goods",
    }, 3),
    ("marcus@example.com", {
        "title": "Carne Adovada (Quart)",
        "description": "Pork slow-braised in red chile, ready for burritos.",
        "price": 17.00, "category": "New Mexican",
    }, 2),
    ("marcus@example.com", {
        "title": "Pulled Pork Sandwiches (4-Pack)",
        "description": "Hickory smoked pork shoulder on brioche buns.",
        "price": 20.00, "category": "BBQ",
    }, 2),
]


def seed_demo_data(now: datetime | None = None) -> None:
    """Create the demo sellers, an admin account and their listings."""
    now = now or datetime.now(timezone.utc)
    created_base = now - timedelta(days=1)

    create_user("Admin", ADMIN_EMAIL, _hashed(ADMIN_PASSWORD), role="admin")

    user_ids: dict[str, str] = {}
    for seller in SELLERS:
        fields = dict(seller)
        user = create_user(fields.pop("name"), fields.pop("email"), _hashed(DEMO_PASSWORD), **fields)
        user_ids[seller["email"]] = user["id"]

    for index, (email, fields, day_offset) in enumerate(LISTINGS):
        profile = get_profile_by_user(user_ids[email]) if email in user_ids else None
        if profile is None:
            logger.warning("Skipping demo listing for unknown seller %s", email)
            continue
        fields = dict(fields)
        is_active = fields.pop("is_active", True)
        listing_day = (now + timedelta(days=day_offset)).replace(hour=10, minute=0, second=0, microsecond=0)
        data = ListingCreate(
            listing_date=listing_day,
            pickup_time=listing_day.replace(hour=17),
            **fields,
        )
        listing = create_listing(profile, data, created_at=created_base + timedelta(minutes=index))
        if not is_active:
            update_listing(listing.id, ListingUpdate(is_active=False))

    logger.info("Seeded %d sellers and %d listings", len(SELLERS), len(LISTINGS))


def reset_demo_data() -> None:
    """Drop everything held in memory and seed again."""
    clear_store()
    clear_users()
    clear_events()
    clear_cache()
    seed_demo_data()
