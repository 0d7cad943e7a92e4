from __future__ import annotations

from homemade.analytics.aggregator import compute_analytics
from homemade.analytics.store import clear_events, get_events, record_event
from homemade.listings.seed import ADMIN_EMAIL, ADMIN_PASSWORD


def _login_admin(c):
    c.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})


def test_compute_analytics_empty():
    body = compute_analytics([])
    assert body["total_searches"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["zero_result_rate"] == 0.0
    assert body["top_locations"] == []


def test_compute_analytics_aggregates():
    clear_events()
    record_event("search", {
        "location": "Santa Fe", "query": "Tamales", "mode": "exact",
        "results_returned": 3, "suggestions_returned": 0,
        "category_fallback": False, "response_time_ms": 4.0,
    })
    record_event("search", {
        "location": "Santa Fe", "query": "tamales", "mode": "nearby",
        "results_returned": 0, "suggestions_returned": 0,
        "category_fallback": False, "response_time_ms": 2.0,
    })
    record_event("search", {
        "location": "87501", "query": "brownies", "mode": "nearby",
        "results_returned": 0, "suggestions_returned": 3,
        "category_fallback": True, "response_time_ms": 3.0,
    })
    record_event("location_suggest", {"query": "san", "results_returned": 1})

    body = compute_analytics(get_events())
    assert body["total_searches"] == 3
    assert body["avg_response_time_ms"] == 3.0
    assert body["top_locations"][0] == {"name": "Santa Fe", "count": 2}
    assert body["top_queries"][0] == {"name": "tamales", "count": 2}
    assert body["mode_usage"] == {"exact": 1, "nearby": 2}
    assert body["zero_result_rate"] == 33.3
    assert body["category_fallback_rate"] == 33.3
    assert body["location_suggest_requests"] == 1


def test_analytics_endpoint_tracks_searches(client):
    client.get("/api/listings", params={"location": "Santa Fe"})
    client.get("/api/listings", params={"location": "Santa Fe", "nearby": "true"})
    client.get("/api/location-suggestions", params={"q": "sa"})
    _login_admin(client)
    resp = client.get("/api/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_searches"] == 2
    assert body["mode_usage"] == {"exact": 1, "nearby": 1}
    assert body["top_locations"] == [{"name": "Santa Fe", "count": 2}]
    assert body["location_suggest_requests"] == 1
    assert body["suggest_cache"]["misses"] == 1


def test_event_buffer_is_bounded():
    clear_events()
    for i in range(10_005):
        record_event("search", {"query": str(i)})
    events = get_events()
    assert len(events) == 10_000
    assert events[0]["query"] == "5"
