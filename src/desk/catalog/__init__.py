"""Company catalog: filtering, favorites, and the list snapshot."""

from desk.catalog.favorites import FavoritesStore, ToggleResult
from desk.catalog.filter import ALL_CATEGORIES, CATEGORIES, filter_companies
from desk.catalog.service import CatalogService

__all__ = [
    "ALL_CATEGORIES",
    "CATEGORIES",
    "CatalogService",
    "FavoritesStore",
    "ToggleResult",
    "filter_companies",
]
