"""Public API for balikobot_checks.

High-level validation functions returning structured results.
Callers should use these instead of importing from kernel modules.
"""

import json
import os
from pathlib import Path
from typing import Union

from balikobot_checks.kernel.validator import (
    BatchValidationResult,
    PackageResult,
    ValidationResult,
    validate_add_request,
    validate_package_fields,
    validate_packages,
)


def _normalize_path(path: Union[str, os.PathLike, Path]) -> Path:
    """Normalize path input to Path object."""
    return Path(path) if not isinstance(path, Path) else path


def validate_add_request_file(path: Union[str, os.PathLike, Path]) -> ValidationResult:
    """
    Validate an ADD request payload stored as JSON on disk.

    Unreadable files and malformed JSON are reported as a single error
    rather than raised.
    """
    path = _normalize_path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        return ValidationResult(ok=False, errors=[f"Failed to parse payload: {e}"])
    return validate_add_request(payload)


__all__ = [
    "BatchValidationResult",
    "PackageResult",
    "ValidationResult",
    "validate_add_request",
    "validate_add_request_file",
    "validate_package_fields",
    "validate_packages",
]
