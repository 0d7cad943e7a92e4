from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class GeocodeConfig:
    bigdatacloud_url: str = "https://api.bigdatacloud.net/data/reverse-geocode-client"
    nominatim_url: str = "https://nominatim.openstreetmap.org/reverse"
    user_agent: str = "HomeMade-App/1.0"
    timeout: float = float(os.getenv("GEOCODE_TIMEOUT", "5"))
    enabled: bool = _env_flag("GEOCODE_ENABLED", "true")
    local_fallback_miles: float = float(os.getenv("GEOCODE_LOCAL_FALLBACK_MILES", "15"))


DEFAULT_GEOCODE_CONFIG = GeocodeConfig()
