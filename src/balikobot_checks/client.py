"""HTTP calls to the Balikobot ADD endpoint.

POST {base_url}/{partner}/add with body {"packages": [...]}.
Transport and parse failures are logged and folded into the result;
they never escape as exceptions.
"""

import base64
import json
import logging
import time
from typing import Any, Dict, List, Mapping, Optional, Sequence

import requests
from pydantic import BaseModel, Field

from balikobot_checks.config import BalikobotApiConfig

logger = logging.getLogger(__name__)


class AddEndpointResult(BaseModel):
    """Outcome of one ADD call."""
    success: bool
    response: str = ""  # raw body text
    package_ids: List[str] = Field(default_factory=list)
    status_code: int = 0  # 0 when no HTTP response was received
    duration: float = 0.0  # milliseconds


def create_balikobot_headers(api_key: str) -> Dict[str, str]:
    """Headers for API-key authenticated JSON requests."""
    return {
        "Content-Type": "application/json",
        "X-Api-Key": api_key,
    }


def create_auth_headers(username: str, password: str) -> Dict[str, str]:
    """Headers for HTTP Basic authenticated JSON requests."""
    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return {
        "Authorization": f"Basic {token}",
        "Content-Type": "application/json",
    }


def _strip_unset(package: Any) -> Any:
    # Non-mappings go out as-is; the request validator reports them
    if not isinstance(package, Mapping):
        return package
    return {key: value for key, value in package.items() if value is not None}


def build_add_payload(packages: Sequence[Mapping[str, Any]]) -> Dict[str, Any]:
    """Request body for the ADD endpoint; unset (None) fields are dropped."""
    return {"packages": [_strip_unset(package) for package in packages]}


def _extract_package_ids(body: str) -> List[str]:
    data = json.loads(body)
    if not isinstance(data, dict):
        return []
    packages = data.get("packages")
    if not isinstance(packages, list):
        return []

    package_ids: List[str] = []
    for pkg in packages:
        package_id = pkg.get("package_id") if isinstance(pkg, dict) else None
        if isinstance(package_id, str) and package_id:
            package_ids.append(package_id)
        elif package_id:
            logger.warning(f"Ignoring non-string package_id: {package_id!r}")
    return package_ids


def add_packages(
    config: BalikobotApiConfig,
    packages: Sequence[Mapping[str, Any]],
    session: Optional[requests.Session] = None,
) -> AddEndpointResult:
    """
    Call the ADD endpoint with the given packages.

    Args:
        config: Resolved API config
        packages: Package records to send
        session: Optional requests session (plain requests.post otherwise)

    Returns:
        AddEndpointResult; success is True only for HTTP 200.
    """
    url = config.add_url
    payload = build_add_payload(packages)
    headers = create_balikobot_headers(config.api_key)
    post = session.post if session is not None else requests.post

    start = time.monotonic()
    try:
        response = post(url, data=json.dumps(payload), headers=headers, timeout=config.timeout)
    except requests.exceptions.RequestException as e:
        duration = (time.monotonic() - start) * 1000
        logger.warning(f"ADD request to {url} failed: {type(e).__name__}: {e}")
        return AddEndpointResult(success=False, duration=duration)
    duration = (time.monotonic() - start) * 1000

    success = response.status_code == 200
    body = response.text or ""
    package_ids: List[str] = []

    if success and body:
        try:
            package_ids = _extract_package_ids(body)
        except ValueError as e:
            logger.error(f"Failed to parse response: {e}")

    return AddEndpointResult(
        success=success,
        response=body,
        package_ids=package_ids,
        status_code=response.status_code,
        duration=duration,
    )


def add_single_package(
    config: BalikobotApiConfig,
    package: Mapping[str, Any],
    session: Optional[requests.Session] = None,
) -> AddEndpointResult:
    return add_packages(config, [package], session=session)


def add_packages_with_logging(
    config: BalikobotApiConfig,
    packages: Sequence[Mapping[str, Any]],
    log_results: bool = True,
    session: Optional[requests.Session] = None,
) -> AddEndpointResult:
    """add_packages() with a human-readable summary in the log."""
    if log_results:
        logger.info(f"Adding {len(packages)} package(s) to {config.partner.upper()}...")

    result = add_packages(config, packages, session=session)

    if log_results:
        if result.success:
            logger.info(f"Successfully added {len(result.package_ids)} package(s)")
            logger.info(f"Duration: {result.duration:.0f}ms")
            logger.info(f"Package IDs: {', '.join(result.package_ids)}")
        else:
            logger.error(f"Failed to add packages: {result.status_code}")
            logger.error(f"Response: {result.response}")

    return result
