"""balikobot_checks: request validation and E2E checks for the Balikobot ADD API."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("balikobot-checks")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
from balikobot_checks.api import (
    BatchValidationResult,
    ValidationResult,
    validate_add_request,
    validate_package_fields,
    validate_packages,
)
from balikobot_checks.config import BalikobotApiConfig, create_balikobot_config
from balikobot_checks.field_types import FieldType

__all__ = [
    "__version__",
    "validate_add_request",
    "validate_package_fields",
    "validate_packages",
    "BatchValidationResult",
    "ValidationResult",
    "BalikobotApiConfig",
    "create_balikobot_config",
    "FieldType",
]
