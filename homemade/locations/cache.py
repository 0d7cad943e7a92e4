"""TTL cache for location autocomplete results, keyed by normalised query."""
from __future__ import annotations

import time
from typing import Any

from .config import DEFAULT_LOCATION_CONFIG, LocationConfig

_cache: dict[tuple[str, int], dict[str, Any]] = {}
_hits: int = 0
_misses: int = 0


def _make_key(query: str, limit: int) -> tuple[str, int]:
    return (" ".join(query.lower().split()), limit)


def cache_get(
    query: str,
    limit: int,
    config: LocationConfig = DEFAULT_LOCATION_CONFIG,
) -> list[dict[str, str]] | None:
    global _hits, _misses
    key = _make_key(query, limit)
    entry = _cache.get(key)
    if entry and time.time() - entry["created_at"] < config.suggest_cache_ttl:
        _hits += 1
        return entry["value"]
    if entry:
        del _cache[key]
    _misses += 1
    return None


def cache_set(query: str, limit: int, value: list[dict[str, str]]) -> None:
    _cache[_make_key(query, limit)] = {"value": value, "created_at": time.time()}


def get_cache_stats() -> dict:
    total = _hits + _misses
    return {
        "size": len(_cache),
        "hits": _hits,
        "misses": _misses,
        "hit_rate": round(_hits / total * 100, 1) if total > 0 else 0.0,
    }


def clear_cache() -> None:
    global _hits, _misses
    _cache.clear()
    _hits = 0
    _misses = 0
