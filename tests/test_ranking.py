"""Sort, filter and truncate ordering."""
from furniture_search.models import CatalogItem, FurnitureCategory, PriceRange, SearchRequest
from furniture_search.ranking import ScoredCandidate, rank, rank_candidates


def _item(item_id, price=100.0, category=FurnitureCategory.SEATING, available=True):
    return CatalogItem(id=item_id, display_name=item_id, price=price, category=category, is_available=available)


def _candidates(*scored):
    return [ScoredCandidate(item, score, position) for position, (item, score) in enumerate(scored)]


def test_sorts_by_score_and_keeps_catalog_order_on_ties():
    """Ranking sorts by score with catalog order breaking ties."""
    a, b, c, d = _item("a"), _item("b"), _item("c"), _item("d")
    candidates = _candidates((a, 10), (b, 30), (c, 10), (d, 30))

    assert [item.id for item in rank(candidates, SearchRequest(text="x"))] == ["b", "d", "a", "c"]


def test_zero_scores_never_survive():
    """Zero scores are dropped."""
    a, b = _item("a"), _item("b")

    assert [item.id for item in rank(_candidates((a, 0), (b, 1)), SearchRequest(text="x"))] == ["b"]


def test_truncation_happens_after_filters():
    """The result cap applies after filtering."""
    cheap_low = _item("cheap-low", price=50)
    pricey_high = _item("pricey-high", price=900)
    cheap_mid = _item("cheap-mid", price=60)
    candidates = _candidates((cheap_low, 5), (pricey_high, 50), (cheap_mid, 20))
    request = SearchRequest(text="x", price_range=PriceRange(max_price=100), max_results=1)

    assert [item.id for item in rank(candidates, request)] == ["cheap-mid"]


def test_price_bounds_are_inclusive():
    """Items priced at either bound pass the filter."""
    edge = _item("edge", price=100)
    request = SearchRequest(text="x", price_range=PriceRange(min_price=100, max_price=100))

    assert rank(_candidates((edge, 1)), request) == [edge]


def test_inverted_price_range_matches_nothing():
    """A minimum above the maximum matches nothing."""
    request = SearchRequest(text="x", price_range=PriceRange(min_price=500, max_price=100))

    assert rank(_candidates((_item("a", price=300), 1)), request) == []


def test_category_and_availability_filters():
    """Category and availability filters combine."""
    lamp = _item("lamp", category=FurnitureCategory.LIGHTING)
    sold_out = _item("sold-out", category=FurnitureCategory.LIGHTING, available=False)
    chair = _item("chair")
    candidates = _candidates((lamp, 3), (sold_out, 2), (chair, 1))

    by_category = rank(candidates, SearchRequest(text="x", category=FurnitureCategory.LIGHTING))
    available = rank(candidates, SearchRequest(text="x", available_only=True))

    assert [item.id for item in by_category] == ["lamp", "sold-out"]
    assert [item.id for item in available] == ["lamp", "chair"]


def test_rank_candidates_keeps_scores():
    """Scored candidates carry their scores through ranking."""
    a = _item("a")

    assert rank_candidates(_candidates((a, 2.5)), SearchRequest(text="x")) == [ScoredCandidate(a, 2.5, 0)]
