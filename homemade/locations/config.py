from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


@dataclass(frozen=True)
class LocationConfig:
    default_radius_miles: int = int(os.getenv("HOMEMADE_DEFAULT_RADIUS_MILES", "25"))
    max_radius_miles: int = 500
    suggestion_limit: int = int(os.getenv("HOMEMADE_SUGGESTION_LIMIT", "6"))
    min_query_length: int = 2
    category_suggestion_limit: int = int(os.getenv("HOMEMADE_CATEGORY_SUGGESTION_LIMIT", "12"))
    suggest_cache_ttl: int = int(os.getenv("HOMEMADE_SUGGEST_CACHE_TTL", "300"))


DEFAULT_LOCATION_CONFIG = LocationConfig()
