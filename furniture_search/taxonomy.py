"""Keyword taxonomy: colors, materials, styles and sizes.

Each query token is probed against four independent tables. A table entry
has a primary term plus synonyms; materials and styles also carry tags that
signal a match on an item, and sizes carry an approximate bounding box with
a tolerance. Lookups are case-insensitive exact matches only; partial
matching happens later in the scorer.

Tables are loaded once (from code or a JSON keyword file) and never mutated
afterwards. Swapping taxonomies means building a new :class:`Taxonomy`.
"""
from __future__ import annotations

import hashlib
import json
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import ClassVar, Dict, Iterable, Mapping, Optional, Sequence, Union

from .utils import normalize_terms, normalize_text

logger = logging.getLogger(__name__)


class KeywordKind(str, Enum):
    COLOR = "color"
    MATERIAL = "material"
    STYLE = "style"
    SIZE = "size"


@dataclass(frozen=True)
class KeywordEntry:
    primary_term: str
    synonyms: tuple[str, ...] = ()

    kind: ClassVar[KeywordKind]

    def __post_init__(self) -> None:
        object.__setattr__(self, "primary_term", normalize_text(self.primary_term))
        object.__setattr__(self, "synonyms", normalize_terms(self.synonyms))

    @property
    def terms(self) -> tuple[str, ...]:
        """Primary term followed by its synonyms."""
        return tuple(dict.fromkeys((self.primary_term, *self.synonyms)))

    @property
    def match_terms(self) -> tuple[str, ...]:
        """Strings that count as a hit when found inside an item tag."""
        return tuple(term for term in self.terms if term)


@dataclass(frozen=True)
class ColorKeyword(KeywordEntry):
    kind: ClassVar[KeywordKind] = KeywordKind.COLOR


@dataclass(frozen=True)
class _TaggedKeyword(KeywordEntry):
    related_tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "related_tags", normalize_terms(self.related_tags))

    @property
    def match_terms(self) -> tuple[str, ...]:
        return tuple(dict.fromkeys((*super().match_terms, *self.related_tags)))


@dataclass(frozen=True)
class MaterialKeyword(_TaggedKeyword):
    kind: ClassVar[KeywordKind] = KeywordKind.MATERIAL


@dataclass(frozen=True)
class StyleKeyword(_TaggedKeyword):
    kind: ClassVar[KeywordKind] = KeywordKind.STYLE


@dataclass(frozen=True)
class SizeKeyword(KeywordEntry):
    approximate_size: tuple[float, float, float] = (1.0, 1.0, 1.0)
    tolerance: float = 0.5

    kind: ClassVar[KeywordKind] = KeywordKind.SIZE

    def __post_init__(self) -> None:
        super().__post_init__()
        size = tuple(float(component) for component in self.approximate_size)
        if len(size) != 3 or any(component < 0 for component in size):
            raise ValueError(f"approximate_size must be 3 non-negative numbers, got {self.approximate_size!r}")
        if self.tolerance < 0:
            raise ValueError(f"tolerance must be non-negative, got {self.tolerance!r}")
        object.__setattr__(self, "approximate_size", size)
        object.__setattr__(self, "tolerance", float(self.tolerance))


Keyword = Union[ColorKeyword, MaterialKeyword, StyleKeyword, SizeKeyword]

DEFAULT_COLORS: tuple[ColorKeyword, ...] = (
    ColorKeyword("black", ("dark", "ebony", "charcoal")),
    ColorKeyword("white", ("ivory", "cream", "pearl")),
    ColorKeyword("brown", ("tan", "beige", "walnut", "oak")),
    ColorKeyword("red", ("crimson", "burgundy", "cherry")),
    ColorKeyword("blue", ("navy", "azure", "sapphire")),
    ColorKeyword("green", ("emerald", "forest", "olive")),
    ColorKeyword("grey", ("gray", "silver", "slate")),
    ColorKeyword("yellow", ("gold", "amber", "brass")),
)

DEFAULT_MATERIALS: tuple[MaterialKeyword, ...] = (
    MaterialKeyword("leather", ("hide", "suede"), ("leather", "luxury")),
    MaterialKeyword("wood", ("wooden", "timber", "oak", "pine", "mahogany"), ("wood", "wooden", "natural")),
    MaterialKeyword("metal", ("steel", "iron", "aluminum", "chrome"), ("metal", "metallic", "steel")),
    MaterialKeyword("fabric", ("cloth", "textile", "upholstered"), ("fabric", "soft", "textile")),
    MaterialKeyword("glass", ("crystal", "transparent"), ("glass", "transparent", "crystal")),
    MaterialKeyword("plastic", ("synthetic", "polymer"), ("plastic", "synthetic")),
)

DEFAULT_STYLES: tuple[StyleKeyword, ...] = (
    StyleKeyword("modern", ("contemporary", "sleek", "minimalist"), ("modern", "contemporary")),
    StyleKeyword("vintage", ("retro", "classic", "antique"), ("vintage", "classic")),
    StyleKeyword("industrial", ("rustic", "urban"), ("industrial", "rustic")),
    StyleKeyword("luxury", ("premium", "high-end", "elegant"), ("luxury", "premium")),
    StyleKeyword("comfortable", ("cozy", "soft", "plush"), ("comfort", "soft")),
)

# "extra large" is reachable only through its single-word synonyms because
# queries are split on whitespace before lookup.
DEFAULT_SIZES: tuple[SizeKeyword, ...] = (
    SizeKeyword("small", ("compact", "mini", "tiny"), (1.0, 1.0, 1.0), 0.5),
    SizeKeyword("medium", ("mid-size", "standard"), (1.5, 1.5, 1.5), 0.5),
    SizeKeyword("large", ("big", "oversized", "jumbo"), (2.0, 2.0, 2.0), 0.7),
    SizeKeyword("extra large", ("xl", "huge", "massive"), (3.0, 3.0, 3.0), 1.0),
)

DEFAULT_TABLES: Dict[KeywordKind, tuple[KeywordEntry, ...]] = {
    KeywordKind.COLOR: DEFAULT_COLORS,
    KeywordKind.MATERIAL: DEFAULT_MATERIALS,
    KeywordKind.STYLE: DEFAULT_STYLES,
    KeywordKind.SIZE: DEFAULT_SIZES,
}


def _build_index(entries: Iterable[KeywordEntry]) -> Dict[str, KeywordEntry]:
    index: Dict[str, KeywordEntry] = {}
    for entry in entries:
        for term in entry.terms:
            # first entry claiming a term wins
            index.setdefault(term, entry)
    return index


class Taxonomy:
    """Immutable four-table keyword registry."""

    def __init__(
        self,
        colors: Optional[Sequence[ColorKeyword]] = None,
        materials: Optional[Sequence[MaterialKeyword]] = None,
        styles: Optional[Sequence[StyleKeyword]] = None,
        sizes: Optional[Sequence[SizeKeyword]] = None,
    ) -> None:
        provided = {
            KeywordKind.COLOR: colors,
            KeywordKind.MATERIAL: materials,
            KeywordKind.STYLE: styles,
            KeywordKind.SIZE: sizes,
        }
        tables: Dict[KeywordKind, tuple[KeywordEntry, ...]] = {}
        for kind, entries in provided.items():
            if not entries:
                logger.debug("No %s keywords configured, using built-in defaults", kind.value)
                tables[kind] = DEFAULT_TABLES[kind]
                continue
            for entry in entries:
                if getattr(entry, "kind", None) is not kind:
                    raise TypeError(f"{type(entry).__name__} cannot be registered as a {kind.value} keyword")
            tables[kind] = tuple(entries)
        self._tables = tables
        self._indexes = {kind: _build_index(entries) for kind, entries in tables.items()}
        self.fingerprint = _fingerprint(tables)

    def lookup(self, token: str, kind: KeywordKind) -> Optional[KeywordEntry]:
        """Return the entry whose term or synonym equals ``token``, if any."""
        return self._indexes[kind].get(normalize_text(token))

    def entries(self, kind: KeywordKind) -> tuple[KeywordEntry, ...]:
        return self._tables[kind]

    def table_sizes(self) -> Dict[str, int]:
        return {kind.value: len(entries) for kind, entries in self._tables.items()}


def _fingerprint(tables: Mapping[KeywordKind, tuple[KeywordEntry, ...]]) -> str:
    payload = {kind.value: [repr(entry) for entry in entries] for kind, entries in tables.items()}
    return hashlib.sha1(json.dumps(payload, sort_keys=True).encode("utf-8")).hexdigest()


def _prepare_keyword(kind: KeywordKind, raw: dict) -> Keyword:
    term = raw.get("term") or raw.get("keyword") or raw.get("primary_term") or ""
    synonyms = tuple(raw.get("synonyms") or ())
    if kind is KeywordKind.COLOR:
        return ColorKeyword(term, synonyms)
    if kind is KeywordKind.SIZE:
        size = raw.get("approximate_size") or raw.get("approximateSize") or (1.0, 1.0, 1.0)
        return SizeKeyword(term, synonyms, tuple(size), float(raw.get("tolerance", 0.5)))
    related = tuple(raw.get("related_tags") or raw.get("relatedTags") or ())
    if kind is KeywordKind.MATERIAL:
        return MaterialKeyword(term, synonyms, related)
    return StyleKeyword(term, synonyms, related)


_FILE_SECTIONS = {
    "colors": KeywordKind.COLOR,
    "materials": KeywordKind.MATERIAL,
    "styles": KeywordKind.STYLE,
    "sizes": KeywordKind.SIZE,
}


def load_keywords(path: Path) -> Dict[str, list[KeywordEntry]]:
    """Read keyword tables from a JSON file.

    Returns a mapping usable as ``Taxonomy(**tables)``. A missing file yields
    an empty mapping; malformed entries are skipped with a warning.
    """
    if not path.exists():
        logger.warning("Keywords file %s not found; using built-in defaults", path)
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw_tables = json.load(fh)
    except json.JSONDecodeError as exc:
        logger.warning("Keywords file %s is not valid JSON: %s; using built-in defaults", path, exc)
        return {}
    if not isinstance(raw_tables, dict):
        logger.warning("Keywords file %s does not contain a JSON object; using built-in defaults", path)
        return {}

    tables: Dict[str, list[KeywordEntry]] = {}
    for section, kind in _FILE_SECTIONS.items():
        rows = raw_tables.get(section) or []
        if not isinstance(rows, list):
            logger.warning("Keywords section %r in %s is not a list; skipping", section, path)
            continue
        entries: list[KeywordEntry] = []
        for raw in rows:
            try:
                entry = _prepare_keyword(kind, raw)
            except (AttributeError, TypeError, ValueError) as exc:
                logger.warning("Skipping invalid %s keyword %r: %s", kind.value, raw, exc)
                continue
            if not entry.primary_term:
                logger.warning("Skipping %s keyword without a term: %r", kind.value, raw)
                continue
            entries.append(entry)
        if entries:
            tables[section] = entries
    logger.info("Loaded keyword tables %s from %s", {k: len(v) for k, v in tables.items()}, path)
    return tables
