"""Tests for loading suite results."""

import json

import pytest

from src.junit_class_report.exceptions import InputFormatError
from src.junit_class_report.loader import load_suites, parse_suites
from src.junit_class_report.models import TestClassRef

RESULTS_YAML = """
suites:
  - name: Regression
    results:
      smoke:
        failed_configurations:
          - class: com.example.LoginTest
            method: setUp
            status: failed
            start: 0
            end: 5
            error_type: java.lang.IllegalStateException
            error_message: database down
        passed_tests:
          - class: com.example.LoginTest
            method: testLogin
            status: 1
            start: 5
            end: 15
      nightly:
        skipped_tests:
          - class: com.example.AccountTest
            key: second-instance
            method: testBalance
            status: skipped
            start: 20
            end: 20
  - name: Empty
"""


def _record(**overrides):
    record = {"class": "a.B", "method": "t", "status": "passed", "start": 0, "end": 1}
    record.update(overrides)
    return record


def _document(record):
    return {"suites": [{"name": "s", "results": {"r": {"passed_tests": [record]}}}]}


class TestLoadSuites:
    """Tests for load_suites."""

    def test_yaml(self, tmp_path):
        path = tmp_path / "results.yaml"
        path.write_text(RESULTS_YAML)
        suites = load_suites(path)
        assert [s.name for s in suites] == ["Regression", "Empty"]
        assert list(suites[0].results) == ["smoke", "nightly"]
        assert suites[1].results == {}

        smoke = suites[0].results["smoke"]
        setup = smoke.failed_configurations[0]
        assert setup.test_class == TestClassRef("com.example.LoginTest")
        assert setup.method_name == "setUp"
        assert setup.status == "failed"
        assert setup.error_type == "java.lang.IllegalStateException"
        assert setup.error_message == "database down"
        assert smoke.passed_tests[0].status == 1
        assert smoke.skipped_tests == []

        skipped = suites[0].results["nightly"].skipped_tests[0]
        assert skipped.test_class == TestClassRef("com.example.AccountTest", "second-instance")
        assert skipped.duration_millis == 0

    def test_json(self, tmp_path):
        path = tmp_path / "results.json"
        path.write_text(json.dumps(_document(_record(end=7))))
        suites = load_suites(str(path))
        assert suites[0].results["r"].passed_tests[0].duration_millis == 7

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_suites(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "results.yaml"
        path.write_text("suites: [unclosed\n")
        with pytest.raises(InputFormatError) as exc_info:
            load_suites(path)
        assert exc_info.value.source == str(path)

    def test_empty_file(self, tmp_path):
        path = tmp_path / "results.yaml"
        path.write_text("")
        assert load_suites(path) == []


class TestParseSuites:
    """Tests for parse_suites."""

    def test_none(self):
        assert parse_suites(None) == []

    def test_no_suites(self):
        assert parse_suites({}) == []

    def test_default_suite_name(self):
        assert parse_suites({"suites": [{}]})[0].name == "suite-0"

    def test_unknown_status_kept(self):
        suites = parse_suites(_document(_record(status="pending")))
        assert suites[0].results["r"].passed_tests[0].status == "pending"

    @pytest.mark.parametrize(
        "data, message",
        [
            ([], "'suites' list"),
            ({"suites": "x"}, "'suites' list"),
            ({"suites": ["x"]}, "suite 0 must be a mapping"),
            ({"suites": [{"name": "s", "results": []}]}, "results of suite 's'"),
            ({"suites": [{"name": "s", "results": {"r": []}}]}, "'s/r' must be a mapping"),
            ({"suites": [{"name": "s", "results": {"r": {"passed": []}}}]}, "unknown partitions"),
            (
                {"suites": [{"name": "s", "results": {"r": {"passed_tests": {}}}}]},
                "'s/r/passed_tests' must be a list",
            ),
        ],
    )
    def test_structure_errors(self, data, message):
        with pytest.raises(InputFormatError, match=message):
            parse_suites(data)

    def test_record_not_mapping(self):
        with pytest.raises(InputFormatError, match="must be a mapping"):
            parse_suites(_document("testLogin"))

    def test_missing_fields(self):
        record = _record()
        del record["class"]
        del record["end"]
        with pytest.raises(InputFormatError, match="missing class, end"):
            parse_suites(_document(record))

    @pytest.mark.parametrize("value", ["10", 1.5, True])
    def test_non_integer_timestamp(self, value):
        with pytest.raises(InputFormatError, match="start must be an integer"):
            parse_suites(_document(_record(start=value)))

    def test_end_before_start(self):
        with pytest.raises(InputFormatError, match="ends before it starts"):
            parse_suites(_document(_record(start=10, end=5)))
