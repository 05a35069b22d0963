"""balikobot-checks CLI: validate payloads and run ADD endpoint checks."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import Any, Dict, List, Optional


def _load_packages(path: Path) -> List[Dict[str, Any]]:
    """Read packages from a JSON file holding either a list or {"packages": [...]}."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "packages" in data:
        data = data["packages"]
    if not isinstance(data, list):
        raise ValueError(f"{path} must contain a list of packages or a {{\"packages\": [...]}} object")
    return data


def main():
    """Main CLI entry point for balikobot-checks commands."""
    try:
        package_version = get_version("balikobot-checks")
    except PackageNotFoundError:
        package_version = "dev"

    parser = argparse.ArgumentParser(
        prog="balikobot-checks",
        description="Request validation and E2E checks for the Balikobot ADD endpoint"
    )
    parser.add_argument("--version", action="version", version=f"balikobot-checks {package_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )
    parent_parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Validate an ADD request payload against the field schema",
        parents=[parent_parser]
    )
    validate_parser.add_argument(
        "payload_path",
        type=Path,
        help="Path to request payload JSON"
    )
    validate_parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Output directory for validate_request.json"
    )

    # add command
    add_parser = subparsers.add_parser(
        "add",
        help="Send packages to the ADD endpoint and check the response",
        parents=[parent_parser]
    )
    source_group = add_parser.add_mutually_exclusive_group()
    source_group.add_argument(
        "--packages",
        type=Path,
        default=None,
        help="Path to JSON list of packages (or a full request payload)"
    )
    source_group.add_argument(
        "--preset",
        default="BASIC_CZ",
        help="Name of a canned test package (default: BASIC_CZ)"
    )
    add_parser.add_argument("--partner", default=None, help="Carrier code (env PARTNER)")
    add_parser.add_argument("--api-key", dest="api_key", default=None, help="API key (env API_KEY)")
    add_parser.add_argument("--base-url", dest="base_url", default=None, help="API base URL (env BASE_URL)")
    add_parser.add_argument(
        "--skip-validation",
        action="store_true",
        help="Send the payload even if request validation fails"
    )

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    if args.command == "validate":
        from .api import validate_add_request_file

        result = validate_add_request_file(args.payload_path.resolve())
        _write_validation_result(result, args.output_dir, "validate_request.json", args.quiet)
    elif args.command == "add":
        try:
            exit_code = _run_add(args)
        except (OSError, ValueError, KeyError) as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        sys.exit(exit_code)
    else:
        parser.print_help()
        sys.exit(1)


def _write_validation_result(result, output_dir: Optional[Path], filename: str, quiet: bool) -> None:
    from ._internal.canonical_json import dump_report

    if output_dir is not None:
        output_dir.mkdir(parents=True, exist_ok=True)
        report_out = output_dir / filename
        report_out.write_text(dump_report(result), encoding="utf-8")
        if not quiet:
            print(f"  Report: {report_out}")
    if not quiet:
        print(f"Status: {'OK' if result.ok else 'FAILED'}")
        print(f"  Errors: {len(result.errors)}")
        for error in result.errors:
            print(f"    - {error}")
        print(f"  Warnings: {len(result.warnings)}")
        for warning in result.warnings:
            print(f"    - {warning}")
    if not result.ok:
        sys.exit(1)


def _run_add(args) -> int:
    from .checks import (
        CheckRecorder,
        validate_add_response,
        validate_request,
        validate_response_field_types,
    )
    from .client import add_packages_with_logging, build_add_payload
    from .config import create_balikobot_config
    from .fixtures import get_test_package

    if args.packages is not None:
        packages = _load_packages(args.packages.resolve())
    else:
        packages = [get_test_package(args.preset)]

    config = create_balikobot_config(
        partner=args.partner,
        api_key=args.api_key,
        base_url=args.base_url,
    )
    recorder = CheckRecorder()

    # Unset fields are dropped before sending; validate what goes on the wire
    payload = build_add_payload(packages)
    if not validate_request(payload, "ADD request", recorder) and not args.skip_validation:
        print("Error: request validation failed, nothing sent", file=sys.stderr)
        return 1

    result = add_packages_with_logging(config, packages, log_results=not args.quiet)
    validate_add_response(result, expected_package_count=len(packages), recorder=recorder)
    if result.success:
        try:
            body = json.loads(result.response)
        except ValueError:
            body = None  # already reported by validate_add_response
        if not validate_response_field_types(body, recorder=recorder):
            print("Response field types check failed", file=sys.stderr)

    summary = recorder.summary()
    if not args.quiet:
        print(f"Checks: {summary['passed']}/{summary['total']} passed")
        for outcome in recorder.failed:
            print(f"  FAILED: {outcome.name}")
    return 0 if summary["failed"] == 0 else 1


if __name__ == "__main__":
    main()
