"""Pydantic models for catalog items, search requests and response payloads."""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .utils import normalize_terms


class FurnitureCategory(str, Enum):
    SEATING = "seating"
    TABLES = "tables"
    STORAGE = "storage"
    LIGHTING = "lighting"
    DECOR = "decor"
    APPLIANCES = "appliances"
    BEDROOM = "bedroom"
    KITCHEN = "kitchen"
    BATHROOM = "bathroom"
    MISCELLANEOUS = "miscellaneous"


class CatalogItem(BaseModel):
    """Read-only snapshot of one catalog entry.

    Missing or malformed text fields collapse to empty values instead of
    failing validation, so a sloppy catalog record simply scores lower.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str = ""
    description: str = ""
    category: FurnitureCategory = FurnitureCategory.MISCELLANEOUS
    tags: tuple[str, ...] = ()
    price: float = Field(0.0, ge=0)
    brand: str = ""
    approximate_size: tuple[float, float, float] = (1.0, 1.0, 1.0)
    is_available: bool = True

    @field_validator("display_name", "description", "brand", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return value if isinstance(value, str) else ""

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> tuple[str, ...]:
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            return ()
        return normalize_terms(value)

    @field_validator("approximate_size")
    @classmethod
    def _check_size(cls, value: tuple[float, float, float]) -> tuple[float, float, float]:
        if any(component < 0 for component in value):
            raise ValueError("approximate_size components must be non-negative")
        return value


class PriceRange(BaseModel):
    """Inclusive price bounds; ``min_price > max_price`` matches nothing."""

    model_config = ConfigDict(frozen=True)

    min_price: float | None = None
    max_price: float | None = None

    def contains(self, price: float) -> bool:
        if self.min_price is not None and price < self.min_price:
            return False
        if self.max_price is not None and price > self.max_price:
            return False
        return True


class SearchRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str = Field("", description="Search query string")
    price_range: PriceRange | None = None
    category: FurnitureCategory | None = None
    available_only: bool = False
    max_results: int = Field(20, gt=0)


class SearchResult(BaseModel):
    query: str
    items: list[CatalogItem] = Field(default_factory=list)
    scores: list[float] = Field(default_factory=list)
    status_message: str = ""


class ItemResult(BaseModel):
    id: str
    displayName: str
    description: str
    category: FurnitureCategory
    price: float
    brand: str
    tags: list[str]
    isAvailable: bool
    score: float | None = None


class SearchResponse(BaseModel):
    query: str
    status: str
    results: list[ItemResult]
    took_ms: float


class TextEvent(BaseModel):
    text: str = ""


class SessionResponse(BaseModel):
    state: str
    text: str
    status: str
    results: list[ItemResult]
    history: list[str]
