"""Tests for the catalog filter (category + free-text search)."""

from desk.catalog.filter import CATEGORIES, filter_companies
from desk.models import Company


def _ids(companies: list[Company]) -> list[str]:
    return [c.id for c in companies]


class TestCategory:
    def test_all_matches_everything(self, companies: list[Company]) -> None:
        assert _ids(filter_companies(companies, "", "All")) == ["c1", "c2", "c3", "c4"]

    def test_exact_category(self, companies: list[Company]) -> None:
        assert _ids(filter_companies(companies, "", "Cryptocurrency")) == ["c1", "c4"]

    def test_category_is_case_sensitive(self, companies: list[Company]) -> None:
        assert filter_companies(companies, "", "cryptocurrency") == []

    def test_known_categories(self) -> None:
        assert CATEGORIES[0] == "All"
        assert "Stablecoin" in CATEGORIES


class TestSearch:
    def test_matches_name_case_insensitive(self, companies: list[Company]) -> None:
        assert _ids(filter_companies(companies, "bitCOIN")) == ["c1"]

    def test_matches_symbol(self, companies: list[Company]) -> None:
        assert _ids(filter_companies(companies, "usdx")) == ["c3"]

    def test_matches_category_text(self, companies: list[Company]) -> None:
        assert _ids(filter_companies(companies, "techno")) == ["c2"]

    def test_matches_description(self, companies: list[Company]) -> None:
        assert _ids(filter_companies(companies, "smart contract")) == ["c4"]

    def test_no_match(self, companies: list[Company]) -> None:
        assert filter_companies(companies, "zzz") == []

    def test_query_and_category_combined(self, companies: list[Company]) -> None:
        # "dollar" appears only in the stablecoin, which is not a Technology company
        assert filter_companies(companies, "dollar", "Technology") == []
        assert _ids(filter_companies(companies, "dollar", "Stablecoin")) == ["c3"]


def test_preserves_input_order(companies: list[Company]) -> None:
    reversed_catalog = list(reversed(companies))
    result = filter_companies(reversed_catalog, "", "Cryptocurrency")
    assert _ids(result) == ["c4", "c1"]


def test_filter_is_idempotent(companies: list[Company]) -> None:
    once = filter_companies(companies, "o", "Cryptocurrency")
    twice = filter_companies(once, "o", "Cryptocurrency")
    assert twice == once
