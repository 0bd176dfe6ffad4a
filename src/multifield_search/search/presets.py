"""Ready-made field schemas for the business records searched in list views.

Weights favour identifying fields (names, numbers) over descriptive ones.
Monetary fields are searched as the formatted text users see, so a query like
``"12,500"`` finds a budget of 12500.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from multifield_search.search.models import SearchOptions
from multifield_search.search.schema import Extractor, FieldDescriptor, FieldSchema


# List views filter one record at a time and prefer inclusive matching
LIST_FILTER_OPTIONS = SearchOptions(min_score=0.2, require_all_terms=False)


def format_currency(amount: Any, symbol: str = "$") -> str:
    """Format an amount as display currency text.

    Examples:
        >>> format_currency(1234.5)
        '$1,234.50'
        >>> format_currency(None)
        '$0.00'
        >>> format_currency(-42)
        '-$42.00'
    """
    try:
        value = Decimal(str(amount if amount is not None else 0))
    except InvalidOperation:
        return ""
    if not value.is_finite():
        return ""
    quantized = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    return f"{sign}{symbol}{abs(quantized):,.2f}"


def _get(value: Any, key: str) -> Any:
    if value is None:
        return None
    if isinstance(value, Mapping):
        return value.get(key)
    return getattr(value, key, None)


def nested(*path: str) -> Extractor:
    """Return an extractor following ``path`` through mappings or attributes.

    A missing step anywhere along the path yields None.
    """

    def extract(item: Any) -> Any:
        value = item
        for key in path:
            value = _get(value, key)
            if value is None:
                return None
        return value

    extract.__name__ = "extract_" + "_".join(path)
    return extract


def currency(key: str) -> Extractor:
    """Return an extractor formatting the amount under ``key`` as currency."""

    def extract(item: Any) -> str:
        return format_currency(_get(item, key))

    extract.__name__ = f"extract_{key}_currency"
    return extract


def project_schema() -> FieldSchema:
    """
    Schema for project records.

    Fields:
    - name (2.0), description (1.5), category (1.2), status (1.0)
    - budget as formatted currency (1.0), location (0.8)
    - client_name from ``client.name`` (1.3)
    """
    return FieldSchema(
        name="projects",
        fields=[
            FieldDescriptor("name", weight=2.0),
            FieldDescriptor("description", weight=1.5),
            FieldDescriptor("category", weight=1.2),
            FieldDescriptor("status", weight=1.0),
            FieldDescriptor("budget", weight=1.0, extractor=currency("budget")),
            FieldDescriptor("location", weight=0.8),
            FieldDescriptor("client_name", weight=1.3, extractor=nested("client", "name")),
        ],
    )


def estimate_schema() -> FieldSchema:
    """
    Schema for estimate records.

    Fields:
    - estimate_number (2.0), title (1.5), client_name from ``client.name`` (1.5)
    - amount from ``total_amount`` as formatted currency (1.0)
    - status (0.8), description (0.6)
    """
    return FieldSchema(
        name="estimates",
        fields=[
            FieldDescriptor("estimate_number", weight=2.0),
            FieldDescriptor("title", weight=1.5),
            FieldDescriptor("client_name", weight=1.5, extractor=nested("client", "name")),
            FieldDescriptor("amount", weight=1.0, extractor=currency("total_amount")),
            FieldDescriptor("status", weight=0.8),
            FieldDescriptor("description", weight=0.6),
        ],
    )


def line_item_schema() -> FieldSchema:
    """
    Schema for price book line items.

    Fields:
    - name (2.0), description (1.5), unit (0.8), price as formatted currency (1.0)
    """
    return FieldSchema(
        name="line_items",
        fields=[
            FieldDescriptor("name", weight=2.0),
            FieldDescriptor("description", weight=1.5),
            FieldDescriptor("unit", weight=0.8),
            FieldDescriptor("price", weight=1.0, extractor=currency("price")),
        ],
    )


_PRESETS = {
    "projects": project_schema,
    "estimates": estimate_schema,
    "line_items": line_item_schema,
}


def get_preset(name: str) -> FieldSchema:
    """Return a preset schema by name."""

    normalized = name.lower()
    if normalized not in _PRESETS:
        msg = f"Unknown preset '{name}'. Available: {sorted(_PRESETS)}"
        raise ValueError(msg)
    return _PRESETS[normalized]()
