"""
Flattening of suite results into per-class results.
"""

import logging
from typing import Dict, Iterable, List

from .exceptions import UnknownStatusError
from .models import (
    ExecutionRecord,
    Outcome,
    OutcomeContext,
    RecordStatus,
    SuiteExecution,
    TestClassRef,
    TestClassResults,
)

logger = logging.getLogger(__name__)


def classify(record: ExecutionRecord, context: OutcomeContext, allow_skipped: bool) -> Outcome:
    """
    Decide which collection of its class results a record belongs to.

    Failed and skipped configuration methods count as test failures whatever
    their own status, since the report format has no place for them. Skipped
    tests are reported as failures when the output cannot represent skips.

    Args:
        record: Execution record to classify
        context: Outcome context the record was filed under
        allow_skipped: Whether the output format can represent skipped tests

    Returns:
        The Outcome collection for the record

    Raises:
        UnknownStatusError: If the record status is not a known status
    """
    try:
        status = RecordStatus.parse(record.status)
    except UnknownStatusError as e:
        raise UnknownStatusError(e.status, record) from None

    if context.is_configuration:
        return Outcome.FAILED
    if status is RecordStatus.SKIPPED:
        return Outcome.SKIPPED if allow_skipped else Outcome.FAILED
    if status in (RecordStatus.FAILED, RecordStatus.SUCCESS_PERCENTAGE_FAILURE):
        return Outcome.FAILED
    return Outcome.PASSED


def flatten_results(
    suites: Iterable[SuiteExecution], allow_skipped: bool = False
) -> List[TestClassResults]:
    """
    Flatten suite results into one TestClassResults per test class.

    Strips away the suite/context organisation of the execution engine and
    arranges every record by the class it belongs to. A class exercised by
    several suites gets a single entry.

    Args:
        suites: Suite executions to flatten
        allow_skipped: Whether the output format can represent skipped tests

    Returns:
        Sealed TestClassResults, one per distinct test class

    Raises:
        UnknownStatusError: If any record carries an unknown status
    """
    flattened: Dict[TestClassRef, TestClassResults] = {}

    for suite in suites:
        logger.debug("Flattening suite %s (%d results)", suite.name, len(suite.results))
        for suite_result in suite.results.values():
            # Passed configuration methods are never part of the partitions.
            for context, records in suite_result.iter_contexts():
                _organise_by_class(records, context, allow_skipped, flattened)

    for results in flattened.values():
        results.seal()

    logger.info("Flattened results into %d test classes", len(flattened))
    return list(flattened.values())


def _organise_by_class(
    records: Iterable[ExecutionRecord],
    context: OutcomeContext,
    allow_skipped: bool,
    flattened: Dict[TestClassRef, TestClassResults],
) -> None:
    for record in records:
        outcome = classify(record, context, allow_skipped)
        _results_for_class(flattened, record.test_class).add_result(record, outcome)


def _results_for_class(
    flattened: Dict[TestClassRef, TestClassResults], test_class: TestClassRef
) -> TestClassResults:
    results = flattened.get(test_class)
    if results is None:
        results = TestClassResults(test_class)
        flattened[test_class] = results
    return results
