"""Field type tags for the package request schema.

These constants replace stringly-typed descriptors like "string|number"
so a typo in a schema entry fails at import time instead of never matching.
"""

from enum import Enum


class FieldType(str, Enum):
    """Primitive runtime types a request field may carry."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
