"""Catalog filtering by category and free-text search."""

from collections.abc import Iterable

from desk.models import Company

ALL_CATEGORIES = "All"
CATEGORIES: tuple[str, ...] = (ALL_CATEGORIES, "Cryptocurrency", "Technology", "Stablecoin")


def _matches_category(company: Company, category: str) -> bool:
    # Exact, case-sensitive comparison
    return category == ALL_CATEGORIES or company.category == category


def _matches_query(company: Company, query: str) -> bool:
    if not query:
        return True
    needle = query.lower()
    return any(
        needle in field.lower()
        for field in (company.name, company.symbol, company.category, company.description)
    )


def filter_companies(
    companies: Iterable[Company],
    query: str = "",
    category: str = ALL_CATEGORIES,
) -> list[Company]:
    """Return companies matching both the category and the search query.

    The query is a case-insensitive substring test against name, symbol,
    category, and description. Input order is preserved.
    """
    return [
        company
        for company in companies
        if _matches_category(company, category) and _matches_query(company, query)
    ]
