from __future__ import annotations

from homemade.listings.categories import CATEGORIES, categorize, normalize_category


def test_categorize_plural_keyword():
    assert categorize("brownies") == ["Desserts"]


def test_categorize_ribs_is_bbq():
    assert categorize("ribs") == ["BBQ"]


def test_categorize_multi_word_keyword():
    assert categorize("carne adovada") == ["New Mexican"]


def test_categorize_ranks_by_hit_count():
    # tikka + masala + naan outweigh a single dessert keyword
    assert categorize("tikka masala with naan and a cookie") == ["Indian", "Desserts"]


def test_categorize_category_name_first():
    assert categorize("desserts")[0] == "Desserts"


def test_categorize_no_partial_words():
    # "pie" must not match inside "piece"
    assert "Desserts" not in categorize("a piece of bread")


def test_categorize_unknown():
    assert categorize("xyzzy") == []
    assert categorize("") == []
    assert categorize(None) == []


def test_normalize_category():
    assert normalize_category("bbq") == "BBQ"
    assert normalize_category(" soups & stews ") == "Soups & Stews"
    assert normalize_category("Fusion") is None


def test_categories_endpoint(client):
    resp = client.get("/api/categories")
    assert resp.status_code == 200
    assert resp.json() == CATEGORIES
