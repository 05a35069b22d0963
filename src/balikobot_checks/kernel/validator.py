"""Field-level validation of ADD endpoint request payloads.

Three layers, each returning a result value and never raising on bad input:

- validate_package_fields: one package record against the field schema
- validate_packages: an ordered batch of records, messages prefixed by index
- validate_add_request: the whole payload ({"packages": [...]})
"""

import json
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from balikobot_checks.kernel.matcher import matches_type, runtime_type_name
from balikobot_checks.kernel.schema import (
    PACKAGE_REQUEST_FIELD_SCHEMA,
    REQUIRED_FIELDS,
    TypeDescriptor,
)


class ValidationResult(BaseModel):
    """Result of validating a record or a request payload."""
    model_config = ConfigDict(frozen=True)

    ok: bool  # True if no errors (warnings don't block)
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class PackageResult(BaseModel):
    """Per-element outcome inside a batch (messages are not index-prefixed)."""
    model_config = ConfigDict(frozen=True)

    index: int
    ok: bool
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class BatchValidationResult(BaseModel):
    """Result of validating an ordered sequence of package records."""
    model_config = ConfigDict(frozen=True)

    ok: bool
    errors: List[str] = Field(default_factory=list)  # array-level first, then "Package <i>: ..."
    warnings: List[str] = Field(default_factory=list)
    package_results: List[PackageResult] = Field(default_factory=list)  # sorted by index


def _encode_value(value: Any) -> str:
    """Compact JSON rendering of an offending value for error messages."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=repr)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def validate_package_fields(
    package: Mapping,
    schema: Optional[Mapping[str, TypeDescriptor]] = None,
    required_fields: Optional[Tuple[str, ...]] = None,
) -> ValidationResult:
    """
    Validate a single package record against the field schema.

    Args:
        package: Record mapping field name -> value. None values count as absent.
        schema: Field schema (defaults to PACKAGE_REQUEST_FIELD_SCHEMA)
        required_fields: Required field names (defaults to REQUIRED_FIELDS)

    Returns:
        ValidationResult. Missing required fields and type mismatches are
        errors; fields not in the schema are warnings.

    A required field that is present but has the wrong type passes the
    required check and is reported once, as a type mismatch.
    """
    if schema is None:
        schema = PACKAGE_REQUEST_FIELD_SCHEMA
    if required_fields is None:
        required_fields = REQUIRED_FIELDS

    errors: List[str] = []
    warnings: List[str] = []

    for field_name in required_fields:
        if package.get(field_name) is None:
            errors.append(f"Missing required field: {field_name}")

    for field_name, value in package.items():
        descriptor = schema.get(field_name)
        if descriptor is None:
            warnings.append(f"Unknown field '{field_name}' not in schema")
            continue
        if not matches_type(value, descriptor):
            errors.append(
                f"Field '{field_name}' should be {descriptor}, "
                f"got {runtime_type_name(value)} (value: {_encode_value(value)})"
            )

    return ValidationResult(ok=len(errors) == 0, errors=errors, warnings=warnings)


def validate_packages(
    packages: Any,
    schema: Optional[Mapping[str, TypeDescriptor]] = None,
    required_fields: Optional[Tuple[str, ...]] = None,
) -> BatchValidationResult:
    """
    Validate an ordered batch of package records.

    A non-sequence input short-circuits with a single array-level error.
    An empty sequence is reported but still walked (trivially). Every
    per-element message is prefixed with "Package <index>: ".
    """
    if not _is_sequence(packages):
        return BatchValidationResult(ok=False, errors=["Packages must be an array"])

    all_errors: List[str] = []
    all_warnings: List[str] = []
    package_results: List[PackageResult] = []

    if len(packages) == 0:
        all_errors.append("Packages array cannot be empty")

    for index, package in enumerate(packages):
        if isinstance(package, Mapping):
            result = validate_package_fields(package, schema, required_fields)
        else:
            result = ValidationResult(ok=False, errors=["Package must be an object"])

        package_results.append(PackageResult(
            index=index,
            ok=result.ok,
            errors=result.errors,
            warnings=result.warnings,
        ))
        all_errors.extend(f"Package {index}: {error}" for error in result.errors)
        all_warnings.extend(f"Package {index}: {warning}" for warning in result.warnings)

    return BatchValidationResult(
        ok=len(all_errors) == 0,
        errors=all_errors,
        warnings=all_warnings,
        package_results=package_results,
    )


def validate_add_request(payload: Any) -> ValidationResult:
    """
    Validate a complete ADD request payload.

    Structural problems (not an object, no "packages" key) return
    immediately; otherwise the batch messages are passed through as-is.
    """
    if not isinstance(payload, Mapping):
        return ValidationResult(ok=False, errors=["Payload must be an object"])

    if "packages" not in payload:
        return ValidationResult(ok=False, errors=['Payload must contain "packages" field'])

    batch = validate_packages(payload["packages"])
    return ValidationResult(ok=batch.ok, errors=list(batch.errors), warnings=list(batch.warnings))
