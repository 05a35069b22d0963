"""Runtime type matching for package record values."""

import math
from typing import Any

from balikobot_checks.field_types import FieldType
from balikobot_checks.kernel.schema import TypeDescriptor


def _is_number(value: Any) -> bool:
    # bool is an int subclass but is never a number on the wire
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not (isinstance(value, float) and math.isnan(value))


def matches_single_type(value: Any, field_type: FieldType) -> bool:
    """Check a present value against one tag. Unknown tags never match."""
    if field_type is FieldType.STRING:
        return isinstance(value, str)
    if field_type is FieldType.NUMBER:
        return _is_number(value)
    if field_type is FieldType.BOOLEAN:
        return isinstance(value, bool)
    return False


def matches_type(value: Any, descriptor: TypeDescriptor) -> bool:
    """
    Check whether value satisfies at least one alternative of descriptor.

    Absent values (None) always match: optionality is implicit for every
    field and required-ness is checked separately. No coercion is done,
    so "1.2" does not satisfy NUMBER.
    """
    if value is None:
        return True
    return any(matches_single_type(value, field_type) for field_type in descriptor)


def runtime_type_name(value: Any) -> str:
    """JSON-flavoured name of the runtime type, used in error messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
