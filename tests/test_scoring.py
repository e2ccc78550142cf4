"""Relevance scoring signals."""
import pytest

from furniture_search.models import CatalogItem
from furniture_search.parser import parse_query
from furniture_search.scoring import basic_match, score_item, size_affinity
from furniture_search.taxonomy import SizeKeyword, Taxonomy


def _score(item, text, fuzzy=True):
    return score_item(item, parse_query(text, Taxonomy()), fuzzy)


def test_leather_sofa_name_tag_and_material_signals(two_item_catalog):
    """Name, tag and material signals add up."""
    sofa, chair = two_item_catalog

    # name 100 + tag 30 + material keyword 35
    assert _score(sofa, "leather") == pytest.approx(165)
    assert _score(chair, "leather") == 0


def test_description_and_general_terms(catalog):
    """Description and general terms contribute their weights."""
    dining_table = catalog[1]

    # name 100 + description 50 + tag 30 + general term 15
    assert _score(dining_table, "table") == pytest.approx(195)


def test_color_keyword_matches_primary_term_inside_tag():
    """A color keyword matches its term inside a tag."""
    item = CatalogItem(id="a", display_name="Accent Chair", tags=["light-blue"])

    assert _score(item, "navy") == pytest.approx(40)


def test_style_keyword_matches_related_tag():
    """A style keyword matches through a related tag."""
    item = CatalogItem(id="a", display_name="Armchair", tags=["comfort"])

    assert _score(item, "cozy") == pytest.approx(25)


def test_brand_match_requires_non_empty_brand():
    """An empty brand never matches."""
    branded = CatalogItem(id="a", display_name="Stool", brand="Nordic Home")
    unbranded = CatalogItem(id="b", display_name="Stool", brand=None)

    # brand 10 + general term 0
    assert _score(branded, "nordic", fuzzy=False) == pytest.approx(10)
    assert _score(unbranded, "nordic", fuzzy=False) == 0


def test_size_affinity_scales_with_distance():
    """Size affinity falls off with distance."""
    medium = SizeKeyword("medium", (), (1.5, 1.5, 1.5), 0.5)

    assert size_affinity((1.5, 1.5, 1.5), medium) == 1.0
    assert size_affinity((1.5, 1.5, 1.8), medium) == pytest.approx(0.4)
    assert size_affinity((1.0, 1.0, 1.0), medium) == 0.0


def test_zero_tolerance_only_accepts_exact_size():
    """Zero tolerance only rewards an exact size."""
    exact = SizeKeyword("exact", (), (1.0, 1.0, 1.0), 0.0)

    assert size_affinity((1.0, 1.0, 1.0), exact) == 1.0
    assert size_affinity((1.0, 1.0, 1.1), exact) == 0.0


def test_size_keyword_adds_weighted_signal():
    """A size keyword adds its weighted affinity."""
    item = CatalogItem(id="a", display_name="Ottoman", approximate_size=(1.5, 1.5, 1.8))

    assert _score(item, "standard", fuzzy=False) == pytest.approx(20 * 0.4)


def test_fuzzy_bonus_rescues_typos():
    """The fuzzy bonus scores near-miss names."""
    item = CatalogItem(id="a", display_name="Leather Sofa")

    assert _score(item, "lether sofo") == pytest.approx(5 * (1 - 2 / 12))
    assert _score(item, "lether sofo", fuzzy=False) == 0


def test_missing_fields_contribute_nothing():
    """Empty item fields add nothing."""
    item = CatalogItem(id="a", display_name=None, description=None, tags=None, brand=None)

    assert _score(item, "sofa") == 0


def test_blank_query_scores_zero(catalog):
    """A blank query scores zero."""
    assert all(_score(item, "") == 0 for item in catalog)


def test_basic_match_checks_name_description_and_tags(catalog):
    """Basic matching looks at name, description and tags."""
    matches = [item.display_name for item in catalog if basic_match(item, "Modern")]

    assert matches == ["Modern Chair", "Modern Floor Lamp", "Glass Coffee Table"]
    assert not basic_match(catalog[0], "")
