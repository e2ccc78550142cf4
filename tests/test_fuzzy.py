"""Edit-distance similarity."""
import pytest

from furniture_search.fuzzy import FUZZY_THRESHOLD, edit_distance, fuzzy_match, similarity


def test_edit_distance_counts_unit_edits():
    """Insertions, deletions and substitutions each cost one."""
    assert edit_distance("kitten", "sitting") == 3
    assert edit_distance("", "abc") == 3
    assert edit_distance("sofa", "sofa") == 0


def test_similarity_of_two_empty_strings_is_zero():
    """Two empty strings are not similar."""
    assert similarity("", "") == 0.0


def test_similarity_ignores_case():
    """Case does not affect similarity."""
    assert similarity("Leather Sofa", "leather sofa") == 1.0


def test_similarity_scales_by_longest_string():
    """Distance is normalized by the longer string."""
    assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
    assert similarity("leather sofa", "leathr sofa") == pytest.approx(1 - 1 / 12)


def test_fuzzy_match_rejects_values_at_threshold():
    """A similarity equal to the threshold is not a match."""
    assert similarity("abcde", "abcxy") == pytest.approx(FUZZY_THRESHOLD)
    assert fuzzy_match("abcde", "abcxy") == 0.0


def test_fuzzy_match_keeps_values_above_threshold():
    """A similarity above the threshold matches."""
    assert fuzzy_match("leather sofa", "lether sofo") == pytest.approx(1 - 2 / 12)
