"""Query parsing: split raw text into taxonomy keywords and general terms."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .taxonomy import ColorKeyword, KeywordKind, MaterialKeyword, SizeKeyword, StyleKeyword, Taxonomy
from .utils import normalize_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedQuery:
    raw_text: str
    matched_colors: tuple[ColorKeyword, ...] = ()
    matched_materials: tuple[MaterialKeyword, ...] = ()
    matched_styles: tuple[StyleKeyword, ...] = ()
    matched_sizes: tuple[SizeKeyword, ...] = ()
    general_terms: tuple[str, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.raw_text


def parse_query(raw_text: str, taxonomy: Taxonomy) -> ParsedQuery:
    """Classify every whitespace-separated token against all four tables.

    A token may land in several tables at once ("oak" is both a color and a
    material by default). Tokens that match no table become general terms.
    """
    text = normalize_text(raw_text)
    matches: dict[KeywordKind, list] = {kind: [] for kind in KeywordKind}
    general: list[str] = []

    for token in text.split():
        matched = False
        for kind in KeywordKind:
            entry = taxonomy.lookup(token, kind)
            if entry is not None:
                matches[kind].append(entry)
                matched = True
        if not matched:
            general.append(token)

    parsed = ParsedQuery(
        raw_text=text,
        matched_colors=tuple(matches[KeywordKind.COLOR]),
        matched_materials=tuple(matches[KeywordKind.MATERIAL]),
        matched_styles=tuple(matches[KeywordKind.STYLE]),
        matched_sizes=tuple(matches[KeywordKind.SIZE]),
        general_terms=tuple(general),
    )
    logger.debug(
        "parsed q=%r colors=%s materials=%s styles=%s sizes=%s general=%s",
        text,
        [entry.primary_term for entry in parsed.matched_colors],
        [entry.primary_term for entry in parsed.matched_materials],
        [entry.primary_term for entry in parsed.matched_styles],
        [entry.primary_term for entry in parsed.matched_sizes],
        parsed.general_terms,
    )
    return parsed
