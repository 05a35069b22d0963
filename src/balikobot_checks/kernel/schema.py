"""Declarative field schema for ADD endpoint package records.

Based on the real API: POST https://apiv2.balikobot.cz/{partner}/add
"""

from types import MappingProxyType
from typing import FrozenSet, Iterable, Mapping, Tuple, Union

from balikobot_checks.field_types import FieldType


# Render order for descriptors, e.g. "string|number"
_TAG_ORDER: Tuple[FieldType, ...] = (FieldType.STRING, FieldType.NUMBER, FieldType.BOOLEAN)


class TypeDescriptor:
    """Expected type of a field: one tag or a union of tags."""

    __slots__ = ("_types",)

    def __init__(self, *types: Union[FieldType, str]):
        if not types:
            raise ValueError("TypeDescriptor needs at least one field type")
        self._types: FrozenSet[FieldType] = frozenset(FieldType(t) for t in types)

    @classmethod
    def parse(cls, text: str) -> "TypeDescriptor":
        """Build a descriptor from 'string' or 'string|number' notation.

        Raises ValueError for unknown tag names.
        """
        parts = [part.strip() for part in text.split("|")]
        if not all(parts):
            raise ValueError(f"Malformed type descriptor: {text!r}")
        return cls(*parts)

    @property
    def types(self) -> FrozenSet[FieldType]:
        return self._types

    def __iter__(self):
        return (t for t in _TAG_ORDER if t in self._types)

    def __contains__(self, item: object) -> bool:
        return item in self._types

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypeDescriptor):
            return NotImplemented
        return self._types == other._types

    def __hash__(self) -> int:
        return hash(self._types)

    def __str__(self) -> str:
        return "|".join(t.value for t in self)

    def __repr__(self) -> str:
        return f"TypeDescriptor({str(self)!r})"


STRING = TypeDescriptor(FieldType.STRING)
NUMBER = TypeDescriptor(FieldType.NUMBER)
STRING_OR_NUMBER = TypeDescriptor(FieldType.STRING, FieldType.NUMBER)


def _freeze(entries: Iterable[Tuple[str, TypeDescriptor]]) -> Mapping[str, TypeDescriptor]:
    return MappingProxyType(dict(entries))


PACKAGE_REQUEST_FIELD_SCHEMA: Mapping[str, TypeDescriptor] = _freeze([
    # Required fields
    ("service_type", STRING),
    ("rec_name", STRING),
    ("rec_country", STRING),

    # Recipient address data
    ("rec_firm", STRING),
    ("rec_street", STRING),
    ("rec_city", STRING),
    ("rec_zip", STRING),
    ("rec_phone", STRING),
    ("rec_email", STRING),

    # Price data
    ("price", NUMBER),
    ("cod_price", STRING_OR_NUMBER),  # "100.00" or 100
    ("cod_currency", STRING),
    ("ins_currency", STRING),

    # Dimensions and weight
    ("weight", NUMBER),
    ("length", NUMBER),
    ("height", NUMBER),
    ("width", NUMBER),

    # Identification data
    ("eid", STRING),
    ("vs", NUMBER),
    ("real_order_id", STRING),
    ("order_number", NUMBER),
    ("reference", STRING),

    # Services and settings
    ("services", STRING),  # e.g. "1+S", "1+2+S"
    ("return_full_errors", NUMBER),  # 0/1 flag
    ("branch_id", STRING),
    ("note", STRING),
])

REQUIRED_FIELDS: Tuple[str, ...] = ("service_type", "rec_name", "rec_country")
