"""In-memory favorites set over company identifiers (process lifetime only)."""

from collections.abc import Iterator
from enum import Enum


class ToggleResult(str, Enum):
    """Outcome of a favorites toggle."""

    ADDED = "added"
    REMOVED = "removed"


class FavoritesStore:
    """Set-backed favorites with O(1) toggle."""

    def __init__(self) -> None:
        self._ids: set[str] = set()

    def toggle(self, company_id: str) -> ToggleResult:
        """Remove the id if present, otherwise add it."""
        if company_id in self._ids:
            self._ids.discard(company_id)
            return ToggleResult.REMOVED
        self._ids.add(company_id)
        return ToggleResult.ADDED

    def reset(self) -> None:
        """Forget every favorite."""
        self._ids.clear()

    def contains(self, company_id: str) -> bool:
        return company_id in self._ids

    def __contains__(self, company_id: object) -> bool:
        return company_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._ids))
