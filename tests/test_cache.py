from app.core import cache as cache_module
from app.core.cache import TTLCache, tool_key


def test_set_and_get():
    cache = TTLCache()
    cache.set("a", 1)

    assert cache.get("a") == 1
    assert cache.get("missing") is None
    assert len(cache) == 1


def test_entries_expire(monkeypatch):
    now = [1000.0]
    monkeypatch.setattr(cache_module, "monotonic", lambda: now[0])
    cache = TTLCache(default_ttl_seconds=10)
    cache.set("a", 1)

    now[0] += 9
    assert cache.get("a") == 1
    now[0] += 2
    assert cache.get("a") is None
    assert len(cache) == 0


def test_non_positive_ttl_is_not_stored():
    cache = TTLCache()
    cache.set("a", 1, ttl_seconds=0)

    assert cache.get("a") is None


def test_capacity_evicts_soonest_expiring():
    cache = TTLCache(max_items=2)
    cache.set("short", 1, ttl_seconds=5)
    cache.set("long", 2, ttl_seconds=50)
    cache.set("medium", 3, ttl_seconds=20)

    assert cache.get("short") is None
    assert cache.get("long") == 2
    assert cache.get("medium") == 3


def test_invalidate_and_clear():
    cache = TTLCache()
    cache.set("a", 1)
    cache.set("b", 2)

    cache.invalidate("a")
    assert cache.get("a") is None
    cache.clear()
    assert len(cache) == 0


def test_tool_key_normalises_names():
    assert tool_key("details", "  Katalon   Studio ") == tool_key("details", "katalon studio")
    assert tool_key("details", "Cypress") != tool_key("analysis", "Cypress")
