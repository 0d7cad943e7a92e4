from __future__ import annotations

from collections import Counter
from typing import Any

from ..locations.cache import get_cache_stats


def _rate(part: int, total: int) -> float:
    return round(part / total * 100, 1) if total else 0.0


def compute_analytics(events: list[dict[str, Any]]) -> dict[str, Any]:
    searches = [e for e in events if e["type"] == "search"]
    total = len(searches)

    # Average response time
    times = [s["response_time_ms"] for s in searches if "response_time_ms" in s]
    avg_time = round(sum(times) / len(times), 1) if times else 0.0

    # Top locations
    loc_counter: Counter[str] = Counter()
    for s in searches:
        if s.get("location"):
            loc_counter[s["location"]] += 1
    top_locations = [{"name": n, "count": c} for n, c in loc_counter.most_common(10)]

    # Top queries, case-folded so "Tamales" and "tamales" count together
    query_counter: Counter[str] = Counter()
    for s in searches:
        if s.get("query"):
            query_counter[s["query"].strip().lower()] += 1
    top_queries = [{"name": n, "count": c} for n, c in query_counter.most_common(10)]

    mode_usage = dict(Counter(s.get("mode", "exact") for s in searches))

    zero_results = sum(
        1 for s in searches
        if not s.get("results_returned") and not s.get("suggestions_returned")
    )
    fallbacks = sum(1 for s in searches if s.get("category_fallback"))

    location_suggest = [e for e in events if e["type"] == "location_suggest"]

    return {
        "total_searches": total,
        "avg_response_time_ms": avg_time,
        "top_locations": top_locations,
        "top_queries": top_queries,
        "mode_usage": mode_usage,
        "zero_result_rate": _rate(zero_results, total),
        "category_fallback_rate": _rate(fallbacks, total),
        "location_suggest_requests": len(location_suggest),
        "suggest_cache": get_cache_stats(),
    }
