"""Named checks over requests and ADD endpoint responses.

A CheckRecorder collects named pass/fail outcomes for the report at the end
of a run. Check suites below record into it and return whether every
check in the suite passed.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from balikobot_checks.client import AddEndpointResult
from balikobot_checks.kernel.validator import validate_add_request

logger = logging.getLogger(__name__)

RESPONSE_TIME_LIMIT_MS = 5000


@dataclass(frozen=True)
class CheckOutcome:
    name: str
    passed: bool


@dataclass
class CheckRecorder:
    """Accumulates named check outcomes in evaluation order."""
    outcomes: List[CheckOutcome] = field(default_factory=list)

    def check(self, value: Any, checks: Dict[str, Callable[[Any], bool]]) -> bool:
        """
        Evaluate each named predicate against value and record the outcome.

        A predicate that raises is recorded as failed. Returns True only if
        every predicate passed.
        """
        all_passed = True
        for name, predicate in checks.items():
            try:
                passed = bool(predicate(value))
            except Exception as e:
                logger.debug(f"Check '{name}' raised {type(e).__name__}: {e}")
                passed = False
            self.outcomes.append(CheckOutcome(name=name, passed=passed))
            all_passed = all_passed and passed
        return all_passed

    @property
    def passed(self) -> List[CheckOutcome]:
        return [o for o in self.outcomes if o.passed]

    @property
    def failed(self) -> List[CheckOutcome]:
        return [o for o in self.outcomes if not o.passed]

    def summary(self) -> Dict[str, int]:
        return {
            "total": len(self.outcomes),
            "passed": len(self.passed),
            "failed": len(self.failed),
        }


def log_test_result(test_name: str, success: bool, details: Optional[str] = None) -> None:
    status = "PASS" if success else "FAIL"
    message = f"[{status}] {test_name}"
    if details:
        message = f"{message}: {details}"
    if success:
        logger.info(message)
    else:
        logger.error(message)


def validate_request(
    payload: Any,
    test_name: str = "Request validation",
    recorder: Optional[CheckRecorder] = None,
) -> bool:
    """Validate a request payload before sending and record the outcome."""
    recorder = recorder if recorder is not None else CheckRecorder()
    validation = validate_add_request(payload)

    passed = recorder.check(validation, {
        f"{test_name} - Request structure is valid": lambda v: v.ok,
        f"{test_name} - No validation errors": lambda v: len(v.errors) == 0,
    })

    if not validation.ok:
        logger.error(f"{test_name} validation failed:")
        for error in validation.errors:
            logger.error(f"   - {error}")

    if validation.warnings:
        logger.warning(f"{test_name} validation warnings:")
        for warning in validation.warnings:
            logger.warning(f"   - {warning}")

    return passed


def _parse_body(body: str) -> Optional[Dict[str, Any]]:
    try:
        data = json.loads(body)
    except ValueError as e:
        logger.error(f"Response body is not valid JSON: {e}")
        return None
    return data if isinstance(data, dict) else None


def validate_add_response(
    result: AddEndpointResult,
    expected_package_count: int = 1,
    recorder: Optional[CheckRecorder] = None,
) -> bool:
    """Record the standard ADD response checks for result."""
    recorder = recorder if recorder is not None else CheckRecorder()
    data = _parse_body(result.response) or {}
    packages = data.get("packages") or []

    return recorder.check(result, {
        "ADD endpoint returns 200": lambda r: r.status_code == 200,
        "ADD endpoint is successful": lambda r: r.success,
        "Response contains package IDs": lambda r: len(r.package_ids) > 0,
        "Package count matches expected": lambda r: len(r.package_ids) == expected_package_count,
        "Response time under 5s": lambda r: r.duration < RESPONSE_TIME_LIMIT_MS,
        "Response contains labels_url": lambda r: "labels_url" in data,
        "Each package has carrier_id": lambda r: bool(packages) and all(pkg.get("carrier_id") for pkg in packages),
        "Each package has track_url": lambda r: bool(packages) and all(pkg.get("track_url") for pkg in packages),
        "Each package has label_url": lambda r: bool(packages) and all(pkg.get("label_url") for pkg in packages),
        "Response status is 200": lambda r: data.get("status") == 200,
    })


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _all_packages(response: Dict[str, Any], key: str, predicate: Callable[[Any], bool]) -> bool:
    return all(key not in pkg or predicate(pkg[key]) for pkg in response["packages"])


def validate_response_field_types(
    response: Any,
    recorder: Optional[CheckRecorder] = None,
) -> bool:
    """Record type checks for a decoded ADD response. Absent fields pass."""
    if not isinstance(response, dict) or not isinstance(response.get("packages"), list):
        return False

    recorder = recorder if recorder is not None else CheckRecorder()
    return recorder.check(response, {
        "Response has packages array": lambda r: isinstance(r["packages"], list),
        "Response status is number": lambda r: "status" not in r or _is_number(r["status"]),
        "Response labels_url is string": lambda r: "labels_url" not in r or isinstance(r["labels_url"], str),
        "Package IDs are strings": lambda r: _all_packages(r, "package_id", lambda v: isinstance(v, str)),
        "Carrier IDs are strings": lambda r: _all_packages(r, "carrier_id", lambda v: isinstance(v, str)),
        "Label URLs are strings": lambda r: _all_packages(r, "label_url", lambda v: isinstance(v, str)),
        "Package statuses are numbers": lambda r: _all_packages(r, "status", _is_number),
    })
