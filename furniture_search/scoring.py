"""Relevance scoring for catalog items.

Smart mode adds up independent signals:

* literal query inside the name (+100), description (+50), each tag (+30)
  or the brand (+10);
* taxonomy keywords whose terms appear inside any tag: color (+40),
  material (+35), style (+25);
* size keywords within tolerance of the item's bounding box, scaled by how
  close they are (up to +20);
* general query terms found in the name, description or tags (+15 each);
* an edit-distance bonus against the display name (up to +5).

Basic mode only checks whether the literal query occurs in the name,
description or a tag.
"""
from __future__ import annotations

import math
from typing import Iterable

from .fuzzy import fuzzy_match
from .models import CatalogItem
from .parser import ParsedQuery
from .taxonomy import KeywordEntry, SizeKeyword
from .utils import normalize_text

NAME_WEIGHT = 100.0
DESCRIPTION_WEIGHT = 50.0
TAG_WEIGHT = 30.0
COLOR_WEIGHT = 40.0
MATERIAL_WEIGHT = 35.0
STYLE_WEIGHT = 25.0
SIZE_WEIGHT = 20.0
GENERAL_WEIGHT = 15.0
BRAND_WEIGHT = 10.0
FUZZY_WEIGHT = 5.0


def _keyword_hits_tags(entry: KeywordEntry, tags: Iterable[str]) -> bool:
    terms = entry.match_terms
    return any(term in tag for tag in tags for term in terms)


def size_affinity(item_size: Iterable[float], keyword: SizeKeyword) -> float:
    """Return 0..1 closeness of ``item_size`` to the keyword's size.

    A zero tolerance only accepts an exact size.
    """
    distance = math.dist(tuple(item_size), keyword.approximate_size)
    if distance > keyword.tolerance:
        return 0.0
    if keyword.tolerance == 0:
        return 1.0
    return 1.0 - distance / keyword.tolerance


def score_item(item: CatalogItem, query: ParsedQuery, fuzzy_enabled: bool = True) -> float:
    text = query.raw_text
    if not text:
        return 0.0

    name = normalize_text(item.display_name)
    description = normalize_text(item.description)
    brand = normalize_text(item.brand)
    tags = item.tags

    score = 0.0
    if text in name:
        score += NAME_WEIGHT
    if text in description:
        score += DESCRIPTION_WEIGHT
    score += TAG_WEIGHT * sum(1 for tag in tags if text in tag)

    for color in query.matched_colors:
        if _keyword_hits_tags(color, tags):
            score += COLOR_WEIGHT
    for material in query.matched_materials:
        if _keyword_hits_tags(material, tags):
            score += MATERIAL_WEIGHT
    for style in query.matched_styles:
        if _keyword_hits_tags(style, tags):
            score += STYLE_WEIGHT
    for size in query.matched_sizes:
        score += SIZE_WEIGHT * size_affinity(item.approximate_size, size)

    for term in query.general_terms:
        if term in name or term in description or any(term in tag for tag in tags):
            score += GENERAL_WEIGHT

    if brand and text in brand:
        score += BRAND_WEIGHT

    if fuzzy_enabled:
        score += FUZZY_WEIGHT * fuzzy_match(name, text)

    return score


def basic_match(item: CatalogItem, text: str) -> bool:
    """Literal substring check used when smart search is off."""
    needle = normalize_text(text)
    if not needle:
        return False
    return (
        needle in normalize_text(item.display_name)
        or needle in normalize_text(item.description)
        or any(needle in tag for tag in item.tags)
    )
