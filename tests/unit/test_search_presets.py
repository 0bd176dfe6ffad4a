"""Unit tests for record presets and currency formatting."""

import pytest

from multifield_search.search.presets import (
    LIST_FILTER_OPTIONS,
    estimate_schema,
    format_currency,
    get_preset,
    line_item_schema,
    nested,
    project_schema,
)
from multifield_search.search.ranker import matches_query, rank


@pytest.fixture
def project():
    return {
        "name": "Kitchen Remodel",
        "description": "Full gut and rebuild",
        "category": "Renovation",
        "status": "active",
        "budget": 12500,
        "location": "Portland",
        "client": {"name": "Jane Doe"},
    }


@pytest.mark.unit
class TestFormatCurrency:
    """Currency text mirrors what list views display."""

    @pytest.mark.parametrize(
        ("amount", "expected"),
        [
            (1234.5, "$1,234.50"),
            (12500, "$12,500.00"),
            (0, "$0.00"),
            (None, "$0.00"),
            (-42, "-$42.00"),
            ("99.995", "$100.00"),
            ("not a number", ""),
            (float("nan"), ""),
        ],
    )
    def test_format(self, amount, expected):
        assert format_currency(amount) == expected


@pytest.mark.unit
class TestNestedExtractor:
    """Nested extractors walk mappings and attributes."""

    def test_walks_path(self):
        assert nested("client", "name")({"client": {"name": "Jane Doe"}}) == "Jane Doe"

    def test_missing_step_is_none(self):
        assert nested("client", "name")({"client": None}) is None
        assert nested("client", "name")({}) is None


@pytest.mark.unit
class TestPresets:
    """Preset schemas search records the way list views do."""

    def test_project_schema_fields(self):
        schema = project_schema()
        assert schema.name == "projects"
        assert schema.keys == ["name", "description", "category", "status", "budget", "location", "client_name"]
        assert schema.get_weight("name") == 2.0
        assert schema.get_weight("client_name") == 1.3

    def test_project_client_name_is_searchable(self, project):
        results = rank([project], "jane", project_schema())

        assert results[0].matched_fields == frozenset({"client_name"})
        assert results[0].score == pytest.approx((0.8 + 0.2 * (4 / 8)) * 1.3)

    def test_project_budget_matches_formatted_amount(self, project):
        results = rank([project], "12,500", project_schema())
        assert results[0].matched_fields == frozenset({"budget"})

    def test_estimate_number_search(self):
        estimate = {
            "estimate_number": "EST-1042",
            "title": "Deck",
            "client": {"name": "Ray Park"},
            "total_amount": 980,
            "status": "draft",
            "description": "",
        }
        results = rank([estimate], "est 1042", estimate_schema())
        assert results[0].matched_fields == frozenset({"estimate_number"})

    def test_line_item_missing_price_formats_as_zero(self):
        schema = line_item_schema()
        assert schema["price"].extract({"name": "Drywall"}) == "$0.00"

    def test_list_filter_options_are_inclusive(self, project):
        assert LIST_FILTER_OPTIONS.min_score == 0.2
        assert matches_query(project, "kitchen", project_schema(), LIST_FILTER_OPTIONS)
        assert not matches_query(project, "plumbing", project_schema(), LIST_FILTER_OPTIONS)

    def test_get_preset(self):
        assert get_preset("Estimates").name == "estimates"
        with pytest.raises(ValueError, match="Unknown preset"):
            get_preset("invoices")
