"""Shared fixtures for the search tests."""
import pytest

from furniture_search.catalog import default_catalog
from furniture_search.engine import SearchEngine
from furniture_search.models import CatalogItem, FurnitureCategory


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def engine(catalog):
    return SearchEngine(catalog)


@pytest.fixture
def two_item_catalog():
    return [
        CatalogItem(
            id="sofa",
            display_name="Leather Sofa",
            category=FurnitureCategory.SEATING,
            tags=["sofa", "leather", "luxury"],
            price=1499.99,
        ),
        CatalogItem(
            id="chair",
            display_name="Modern Chair",
            category=FurnitureCategory.SEATING,
            tags=["chair", "modern", "comfort"],
            price=299.99,
        ),
    ]
