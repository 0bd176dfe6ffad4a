"""
Field schema definitions for record search.

A schema lists the searchable fields of one record type. Each field has:
- key: Name reported back in ``SearchResult.matched_fields``
- weight: Multiplier applied to the field's match score
- extractor: Callable producing the text to search on a given record

Extractors may read nested state, computed values or formatted numbers, so the
key is never used for lookup when an extractor is given. Without one the field
reads ``key`` from the record, as a mapping key or an attribute.

Weights are not validated. A zero or negative weight never produces a
positive weighted score, so such a field can never be the winning field for a
term.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
import logging
from typing import Any


logger = logging.getLogger(__name__)

Extractor = Callable[[Any], Any]


def attribute_extractor(key: str) -> Extractor:
    """Return an extractor reading ``key`` from a mapping or an object attribute."""

    def extract(item: Any) -> Any:
        if isinstance(item, Mapping):
            return item.get(key)
        return getattr(item, key, None)

    extract.__name__ = f"extract_{key}"
    return extract


def _as_text(value: Any) -> str:
    # Falsy values (None, 0, False, empty containers) have no searchable text
    if not value:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


@dataclass(frozen=True)
class FieldDescriptor:
    """
    One searchable field of a record type.

    Args:
        key: Field name reported when this field wins a term
        weight: Field weight in scoring (default: 1.0)
        extractor: Callable returning the field value for a record
            (default: None = read ``key`` from the record)
    """

    key: str
    weight: float = 1.0
    extractor: Extractor | None = field(default=None, compare=False)

    def extract(self, item: Any, *, strict: bool = False) -> str:
        """Return the searchable text of this field on ``item``.

        ``None`` becomes an empty string. When the extractor raises, the
        failure is logged and the field is searched as empty, unless
        ``strict`` is set, in which case the exception propagates.
        """
        extractor = self.extractor or attribute_extractor(self.key)
        try:
            value = extractor(item)
        except Exception as exc:
            if strict:
                raise
            logger.warning(
                "Field extractor failed, searching field as empty",
                extra={"field": self.key, "error_type": type(exc).__name__},
            )
            return ""
        return _as_text(value)

    def to_dict(self) -> dict[str, Any]:
        """Serialize field definition to dict (extractors are not serialized)."""
        return {"key": self.key, "weight": self.weight}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FieldDescriptor:
        """Deserialize field definition from dict, using key-based extraction."""
        return cls(key=data["key"], weight=float(data.get("weight", 1.0)))


@dataclass
class FieldSchema:
    """
    Ordered set of searchable fields for one record type.

    Example:
        schema = FieldSchema(
            name="projects",
            fields=[
                FieldDescriptor("name", weight=2.0),
                FieldDescriptor("client_name", weight=1.3, extractor=lambda p: p["client"]["name"]),
            ],
        )
    """

    fields: list[FieldDescriptor]
    name: str = "default"

    def __post_init__(self) -> None:
        self._field_map: dict[str, FieldDescriptor] = {f.key: f for f in self.fields}
        if len(self._field_map) != len(self.fields):
            msg = f"Duplicate field keys in schema '{self.name}'"
            raise ValueError(msg)

    def __getitem__(self, key: str) -> FieldDescriptor:
        return self._field_map[key]

    def __contains__(self, key: str) -> bool:
        return key in self._field_map

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def keys(self) -> list[str]:
        return [f.key for f in self.fields]

    def get_weight(self, key: str) -> float:
        """Get weight for a field, 1.0 for unknown keys."""
        if key in self._field_map:
            return self._field_map[key].weight
        return 1.0

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "fields": [f.to_dict() for f in self.fields]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FieldSchema:
        fields = [FieldDescriptor.from_dict(f) for f in data["fields"]]
        return cls(fields=fields, name=data.get("name", "default"))

    @classmethod
    def uniform(cls, keys: Iterable[str], *, name: str = "default") -> FieldSchema:
        """Build a schema giving every named key weight 1 and key-based extraction."""
        return cls(fields=[FieldDescriptor(key=str(key)) for key in keys], name=name)
