"""Catalog provider glue: the built-in demo catalog and a JSON file loader."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .models import CatalogItem, FurnitureCategory

logger = logging.getLogger(__name__)


def default_catalog() -> list[CatalogItem]:
    """Eight sample pieces used when no catalog file is available."""
    return [
        CatalogItem(
            id="ModernChair",
            display_name="Modern Chair",
            description="A comfortable modern chair for your living room",
            category=FurnitureCategory.SEATING,
            price=299.99,
            brand="ModernFurniture Co.",
            tags=("chair", "modern", "comfort"),
        ),
        CatalogItem(
            id="DiningTable",
            display_name="Dining Table",
            description="Elegant dining table for family meals",
            category=FurnitureCategory.TABLES,
            price=799.99,
            brand="Classic Furniture",
            tags=("table", "dining", "family"),
        ),
        CatalogItem(
            id="Sofa",
            display_name="Leather Sofa",
            description="Luxurious leather sofa with premium comfort",
            category=FurnitureCategory.SEATING,
            price=1499.99,
            brand="Luxury Living",
            tags=("sofa", "leather", "luxury"),
        ),
        CatalogItem(
            id="Bookshelf",
            display_name="Wooden Bookshelf",
            description="Spacious wooden bookshelf for your books and decorations",
            category=FurnitureCategory.STORAGE,
            price=399.99,
            brand="Wood Craft",
            tags=("bookshelf", "storage", "wood"),
        ),
        CatalogItem(
            id="FloorLamp",
            display_name="Modern Floor Lamp",
            description="Stylish floor lamp with adjustable brightness",
            category=FurnitureCategory.LIGHTING,
            price=199.99,
            brand="Light Design",
            tags=("lamp", "lighting", "modern"),
        ),
        CatalogItem(
            id="CoffeeTable",
            display_name="Glass Coffee Table",
            description="Modern glass coffee table with metal legs",
            category=FurnitureCategory.TABLES,
            price=459.99,
            brand="Glass & Metal Co.",
            tags=("table", "coffee", "glass"),
        ),
        CatalogItem(
            id="Bed",
            display_name="Queen Size Bed",
            description="Comfortable queen size bed with upholstered headboard",
            category=FurnitureCategory.BEDROOM,
            price=899.99,
            brand="Sleep Well",
            tags=("bed", "bedroom", "queen"),
        ),
        CatalogItem(
            id="Wardrobe",
            display_name="Large Wardrobe",
            description="Spacious wardrobe with multiple compartments",
            category=FurnitureCategory.STORAGE,
            price=1299.99,
            brand="Storage Solutions",
            tags=("wardrobe", "storage", "clothes"),
        ),
    ]


def _prepare_item(raw: dict[str, Any]) -> CatalogItem:
    """Accept both snake_case and camelCase field names."""
    display_name = raw.get("display_name") or raw.get("displayName") or raw.get("name") or ""
    item_id = str(raw.get("id") or raw.get("name") or display_name)
    category = raw.get("category") or FurnitureCategory.MISCELLANEOUS.value
    if isinstance(category, str):
        category = category.lower()
    size = raw.get("approximate_size") or raw.get("approximateSize") or raw.get("defaultScale") or (1.0, 1.0, 1.0)
    available = raw.get("is_available", raw.get("isAvailable", True))
    return CatalogItem(
        id=item_id,
        display_name=display_name,
        description=raw.get("description"),
        category=category,
        tags=raw.get("tags"),
        price=raw.get("price") or 0.0,
        brand=raw.get("brand") or raw.get("manufacturer"),
        approximate_size=tuple(size),
        is_available=available,
    )


def load_catalog_file(path: Path) -> list[CatalogItem]:
    """Read catalog items from a JSON array, skipping records that fail validation."""
    if not path.exists():
        logger.warning("Catalog file %s is missing", path)
        return []
    try:
        with path.open("r", encoding="utf-8") as fh:
            raw_items = json.load(fh)
    except json.JSONDecodeError as exc:
        logger.warning("Catalog file %s is not valid JSON: %s", path, exc)
        return []
    if not isinstance(raw_items, list):
        logger.warning("Catalog file %s does not contain a JSON array", path)
        return []

    items: list[CatalogItem] = []
    for raw in raw_items:
        try:
            items.append(_prepare_item(raw))
        except (AttributeError, TypeError, ValidationError) as exc:
            logger.warning("Skipping invalid catalog record %r: %s", raw, exc)
    logger.info("Loaded %s catalog items from %s", len(items), path)
    return items
