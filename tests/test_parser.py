"""Query parsing into taxonomy keywords and general terms."""
from furniture_search.parser import parse_query
from furniture_search.taxonomy import Taxonomy


def test_empty_input_yields_empty_query():
    """Blank input parses to an empty query."""
    parsed = parse_query("   ", Taxonomy())

    assert parsed.raw_text == ""
    assert parsed.is_empty
    assert parsed.general_terms == ()
    assert parsed.matched_colors == parsed.matched_materials == parsed.matched_styles == parsed.matched_sizes == ()


def test_tokens_are_classified_per_table():
    """Each token lands in the table that knows it."""
    parsed = parse_query("  Big  NAVY velvet sofa ", Taxonomy())

    assert parsed.raw_text == "big  navy velvet sofa"
    assert [entry.primary_term for entry in parsed.matched_sizes] == ["large"]
    assert [entry.primary_term for entry in parsed.matched_colors] == ["blue"]
    assert parsed.general_terms == ("velvet", "sofa")


def test_token_can_match_several_tables():
    """One token may match more than one table."""
    parsed = parse_query("oak", Taxonomy())

    assert [entry.primary_term for entry in parsed.matched_colors] == ["brown"]
    assert [entry.primary_term for entry in parsed.matched_materials] == ["wood"]
    assert parsed.general_terms == ()


def test_related_tags_are_not_lookup_terms():
    """Related tags are not looked up as keywords."""
    parsed = parse_query("soft", Taxonomy())

    assert [entry.primary_term for entry in parsed.matched_styles] == ["comfortable"]
    assert parsed.matched_materials == ()


def test_repeated_tokens_are_kept():
    """Repeated tokens are not collapsed."""
    parsed = parse_query("red red", Taxonomy())

    assert len(parsed.matched_colors) == 2
