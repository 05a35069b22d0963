"""Tests for the check recorder and the request/response check suites."""

import json
import logging

import pytest

from balikobot_checks.checks import (
    CheckRecorder,
    log_test_result,
    validate_add_response,
    validate_request,
    validate_response_field_types,
)
from balikobot_checks.client import AddEndpointResult


GOOD_BODY = {
    "status": 200,
    "labels_url": "https://pdf.balikobot.cz/cp/abc",
    "packages": [
        {
            "package_id": "add-cp-8728035",
            "carrier_id": "DR1536622512M",
            "label_url": "https://pdf.balikobot.cz/cp/x",
            "track_url": "https://www.postaonline.cz/trackandtrace/x",
            "status": 200,
        }
    ],
}


def _result(body=GOOD_BODY, status_code=200, package_ids=("add-cp-8728035",), duration=120.0):
    return AddEndpointResult(
        success=status_code == 200,
        response=body if isinstance(body, str) else json.dumps(body),
        package_ids=list(package_ids),
        status_code=status_code,
        duration=duration,
    )


class TestCheckRecorder:

    def test_records_in_order(self):
        recorder = CheckRecorder()
        passed = recorder.check(3, {"positive": lambda v: v > 0, "even": lambda v: v % 2 == 0})
        assert passed is False
        assert [(o.name, o.passed) for o in recorder.outcomes] == [("positive", True), ("even", False)]
        assert recorder.summary() == {"total": 2, "passed": 1, "failed": 1}

    def test_raising_predicate_counts_as_failure(self):
        recorder = CheckRecorder()
        assert recorder.check({}, {"has key": lambda v: v["missing"]}) is False
        assert recorder.failed[0].name == "has key"

    def test_accumulates_across_calls(self):
        recorder = CheckRecorder()
        recorder.check(1, {"a": lambda v: True})
        recorder.check(1, {"b": lambda v: True})
        assert [o.name for o in recorder.passed] == ["a", "b"]


class TestValidateRequest:

    def test_valid_payload(self):
        recorder = CheckRecorder()
        payload = {"packages": [{"service_type": "DR", "rec_name": "T", "rec_country": "CZ"}]}
        assert validate_request(payload, "Basic", recorder) is True
        assert [o.name for o in recorder.outcomes] == [
            "Basic - Request structure is valid",
            "Basic - No validation errors",
        ]

    def test_invalid_payload_logs_errors(self, caplog):
        recorder = CheckRecorder()
        with caplog.at_level(logging.WARNING, logger="balikobot_checks.checks"):
            assert validate_request({"packages": [{"foo": 1}]}, recorder=recorder) is False
        assert "Request validation validation failed" in caplog.text
        assert "Package 0: Missing required field: service_type" in caplog.text
        assert "Unknown field 'foo' not in schema" in caplog.text
        assert len(recorder.failed) == 2


class TestValidateAddResponse:

    def test_all_checks_pass(self):
        recorder = CheckRecorder()
        assert validate_add_response(_result(), 1, recorder) is True
        assert recorder.summary() == {"total": 10, "passed": 10, "failed": 0}

    def test_count_mismatch(self):
        recorder = CheckRecorder()
        assert validate_add_response(_result(), 2, recorder) is False
        assert [o.name for o in recorder.failed] == ["Package count matches expected"]

    def test_slow_response(self):
        recorder = CheckRecorder()
        validate_add_response(_result(duration=5000.0), 1, recorder)
        assert [o.name for o in recorder.failed] == ["Response time under 5s"]

    def test_missing_track_url(self):
        body = json.loads(json.dumps(GOOD_BODY))
        del body["packages"][0]["track_url"]
        recorder = CheckRecorder()
        validate_add_response(_result(body), 1, recorder)
        assert [o.name for o in recorder.failed] == ["Each package has track_url"]

    def test_unparseable_body_fails_body_checks(self):
        recorder = CheckRecorder()
        assert validate_add_response(_result("not json", status_code=500, package_ids=()), 1, recorder) is False
        failed = {o.name for o in recorder.failed}
        assert "Response contains labels_url" in failed
        assert "Each package has carrier_id" in failed
        assert "ADD endpoint returns 200" in failed


class TestValidateResponseFieldTypes:

    def test_good_response(self):
        recorder = CheckRecorder()
        assert validate_response_field_types(GOOD_BODY, recorder) is True
        assert len(recorder.outcomes) == 7

    @pytest.mark.parametrize("response", [None, {}, {"packages": "x"}, []])
    def test_no_packages_array_records_nothing(self, response):
        recorder = CheckRecorder()
        assert validate_response_field_types(response, recorder) is False
        assert recorder.outcomes == []

    def test_absent_fields_pass(self):
        assert validate_response_field_types({"packages": [{}]}) is True

    def test_wrong_types_fail(self):
        recorder = CheckRecorder()
        response = {"status": "200", "packages": [{"package_id": 1, "status": True}]}
        assert validate_response_field_types(response, recorder) is False
        assert {o.name for o in recorder.failed} == {
            "Response status is number",
            "Package IDs are strings",
            "Package statuses are numbers",
        }


def test_log_test_result(caplog):
    with caplog.at_level(logging.INFO, logger="balikobot_checks.checks"):
        log_test_result("ADD basic", True)
        log_test_result("ADD heavy", False, "status 400")
    assert "[PASS] ADD basic" in caplog.text
    assert "[FAIL] ADD heavy: status 400" in caplog.text
