"""In-memory result cache: expiry and size bound."""
from furniture_search.cache import InMemoryCache
from furniture_search.engine import SearchEngine
from furniture_search.models import SearchRequest


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_get_drops_expired_entry():
    """An entry past its ttl reads as a miss and is removed."""
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    cache.set("a", {"v": 1}, ttl=5)

    assert cache.get("a") == {"v": 1}
    clock.now = 6
    assert cache.get("a") is None
    assert len(cache) == 0


def test_set_purges_expired_entries():
    """Writing a new key sweeps out every entry that has already expired."""
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    cache.set("old-1", {}, ttl=1)
    cache.set("old-2", {}, ttl=1)
    cache.set("fresh", {}, ttl=100)

    clock.now = 10
    cache.set("new", {}, ttl=1)

    assert len(cache) == 2
    assert cache.get("fresh") == {}
    assert cache.get("old-1") is None


def test_maxsize_evicts_oldest_insert():
    """Past the bound the earliest written key goes first."""
    cache = InMemoryCache(clock=FakeClock(), maxsize=2)
    cache.set("a", {"v": 1}, ttl=60)
    cache.set("b", {"v": 2}, ttl=60)
    cache.set("c", {"v": 3}, ttl=60)

    assert len(cache) == 2
    assert cache.get("a") is None
    assert cache.get("c") == {"v": 3}


def test_rewriting_a_key_refreshes_its_position():
    """Overwriting a key moves it to the newest slot."""
    cache = InMemoryCache(clock=FakeClock(), maxsize=2)
    cache.set("a", {"v": 1}, ttl=60)
    cache.set("b", {"v": 2}, ttl=60)
    cache.set("a", {"v": 10}, ttl=60)
    cache.set("c", {"v": 3}, ttl=60)

    assert cache.get("b") is None
    assert cache.get("a") == {"v": 10}


def test_many_short_lived_searches_do_not_accumulate(catalog):
    """Expired search results are gone once the next search stores its own."""
    clock = FakeClock()
    cache = InMemoryCache(clock=clock)
    engine = SearchEngine(catalog, cache=cache, cache_ttl=1)

    for n in range(500):
        engine.search(SearchRequest(text=f"chair {n}"), smart_mode=True)
    assert len(cache) == 500

    clock.now = 10_000
    engine.search(SearchRequest(text="sofa"), smart_mode=True)

    assert len(cache) == 1
