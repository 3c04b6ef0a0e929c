"""
Loading of finished suite results from YAML or JSON documents.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from .exceptions import InputFormatError
from .models import ExecutionRecord, OutcomeContext, SuiteExecution, SuiteResult, TestClassRef

logger = logging.getLogger(__name__)

_REQUIRED_RECORD_KEYS = ("class", "method", "status", "start", "end")


def load_suites(path: Union[str, Path]) -> List[SuiteExecution]:
    """
    Load suite executions from a YAML or JSON file.

    Args:
        path: Path to the results document

    Returns:
        List of SuiteExecution objects, in document order

    Raises:
        FileNotFoundError: If the file does not exist
        InputFormatError: If the document cannot be parsed or is malformed
    """
    source = str(path)
    logger.info("Loading suite results from %s", source)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Suite results file not found: {source}")
    except yaml.YAMLError as e:
        raise InputFormatError(source, f"not valid YAML or JSON: {e}")

    return parse_suites(data, source)


def parse_suites(data: Any, source: str = "<data>") -> List[SuiteExecution]:
    """
    Build suite executions from an already parsed document.

    Record statuses are kept as given; they are checked when the results are
    flattened.

    Raises:
        InputFormatError: If the document structure is invalid
    """
    if data is None:
        return []
    if not isinstance(data, dict) or not isinstance(data.get("suites", []), list):
        raise InputFormatError(source, "expected a mapping with a 'suites' list")

    suites = []
    for i, suite_data in enumerate(data.get("suites") or []):
        if not isinstance(suite_data, dict):
            raise InputFormatError(source, f"suite {i} must be a mapping")
        name = str(suite_data.get("name", f"suite-{i}"))
        results_data = suite_data.get("results")
        if results_data is None:
            results_data = {}
        if not isinstance(results_data, dict):
            raise InputFormatError(source, f"results of suite '{name}' must be a mapping")

        suite = SuiteExecution(name=name)
        for result_name, result_data in results_data.items():
            where = f"{name}/{result_name}"
            suite.results[str(result_name)] = _parse_suite_result(result_data, source, where)
        suites.append(suite)

    logger.debug("Loaded %d suites from %s", len(suites), source)
    return suites


def _parse_suite_result(data: Any, source: str, where: str) -> SuiteResult:
    if data is None:
        return SuiteResult()
    if not isinstance(data, dict):
        raise InputFormatError(source, f"suite result '{where}' must be a mapping")

    unknown = set(data) - {context.value for context in OutcomeContext}
    if unknown:
        raise InputFormatError(
            source, f"suite result '{where}' has unknown partitions: {sorted(unknown)}"
        )

    partitions: Dict[str, List[ExecutionRecord]] = {}
    for context in OutcomeContext:
        records = data.get(context.value)
        if records is None:
            records = []
        if not isinstance(records, list):
            raise InputFormatError(source, f"'{where}/{context.value}' must be a list")
        partitions[context.value] = [
            _parse_record(record, source, f"{where}/{context.value}[{i}]")
            for i, record in enumerate(records)
        ]
    return SuiteResult(**partitions)


def _parse_record(data: Any, source: str, where: str) -> ExecutionRecord:
    if not isinstance(data, dict):
        raise InputFormatError(source, f"record '{where}' must be a mapping")

    missing = [key for key in _REQUIRED_RECORD_KEYS if data.get(key) is None]
    if missing:
        raise InputFormatError(source, f"record '{where}' is missing {', '.join(missing)}")

    start, end = data["start"], data["end"]
    for key, value in (("start", start), ("end", end)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InputFormatError(source, f"record '{where}' {key} must be an integer: {value!r}")
    if end < start:
        raise InputFormatError(source, f"record '{where}' ends before it starts ({end} < {start})")

    return ExecutionRecord(
        test_class=TestClassRef(name=str(data["class"]), key=str(data.get("key") or "")),
        method_name=str(data["method"]),
        status=data["status"],
        start_millis=start,
        end_millis=end,
        error_type=data.get("error_type"),
        error_message=data.get("error_message"),
        stack_trace=data.get("stack_trace"),
    )
