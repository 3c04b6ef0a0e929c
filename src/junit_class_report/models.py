"""
Data models for per-class JUnit report generation.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .exceptions import UnknownStatusError


class RecordStatus(Enum):
    """Closed set of statuses an execution record can carry."""

    PASSED = "passed"
    FAILED = "failed"
    SKIPPED = "skipped"
    SUCCESS_PERCENTAGE_FAILURE = "success_percentage_failure"

    @classmethod
    def parse(cls, value: Any) -> "RecordStatus":
        """
        Convert a raw status into a RecordStatus.

        Accepts a member, its string value, or the numeric codes used by the
        execution engine (1 success, 2 failure, 3 skip, 4 success percentage
        failure).

        Raises:
            UnknownStatusError: If the value is outside the enumeration
        """
        if isinstance(value, cls):
            return value
        # bool is an int subclass; True must not read as SUCCESS
        if isinstance(value, int) and not isinstance(value, bool):
            if value in _STATUS_CODES:
                return _STATUS_CODES[value]
            raise UnknownStatusError(value)
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                raise UnknownStatusError(value)
        raise UnknownStatusError(value)


_STATUS_CODES = {
    1: RecordStatus.PASSED,
    2: RecordStatus.FAILED,
    3: RecordStatus.SKIPPED,
    4: RecordStatus.SUCCESS_PERCENTAGE_FAILURE,
}


class OutcomeContext(Enum):
    """Partition of a suite result in which the execution engine files a record."""

    FAILED_CONFIGURATION = "failed_configurations"
    SKIPPED_CONFIGURATION = "skipped_configurations"
    FAILED_TEST = "failed_tests"
    SKIPPED_TEST = "skipped_tests"
    PASSED_TEST = "passed_tests"

    @property
    def is_configuration(self) -> bool:
        """Return True for setup/teardown partitions."""
        return self in (OutcomeContext.FAILED_CONFIGURATION, OutcomeContext.SKIPPED_CONFIGURATION)


# Traversal order used when flattening a suite result.
CONTEXT_PRECEDENCE = (
    OutcomeContext.FAILED_CONFIGURATION,
    OutcomeContext.SKIPPED_CONFIGURATION,
    OutcomeContext.FAILED_TEST,
    OutcomeContext.SKIPPED_TEST,
    OutcomeContext.PASSED_TEST,
)


class Outcome(Enum):
    """Collection of a class aggregate that a record is filed under."""

    FAILED = "failed"
    SKIPPED = "skipped"
    PASSED = "passed"


@dataclass(frozen=True)
class TestClassRef:
    """Identity of a test class.

    ``key`` distinguishes class instances the execution engine treats as
    separate even though they share a fully-qualified name.
    """

    __test__ = False

    name: str
    key: str = ""

    @property
    def simple_name(self) -> str:
        """Class name without its package."""
        return self.name.rsplit(".", 1)[-1]


@dataclass(frozen=True)
class ExecutionRecord:
    """A finished test or configuration method invocation."""

    test_class: TestClassRef
    method_name: str
    status: Any
    start_millis: int
    end_millis: int
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    stack_trace: Optional[str] = None

    @property
    def duration_millis(self) -> int:
        return self.end_millis - self.start_millis


@dataclass
class SuiteResult:
    """Records of one suite result, partitioned by outcome context."""

    failed_configurations: List[ExecutionRecord] = field(default_factory=list)
    skipped_configurations: List[ExecutionRecord] = field(default_factory=list)
    failed_tests: List[ExecutionRecord] = field(default_factory=list)
    skipped_tests: List[ExecutionRecord] = field(default_factory=list)
    passed_tests: List[ExecutionRecord] = field(default_factory=list)

    def records_for(self, context: OutcomeContext) -> List[ExecutionRecord]:
        return getattr(self, context.value)

    def iter_contexts(self) -> Iterator[Tuple[OutcomeContext, List[ExecutionRecord]]]:
        """Yield each outcome context with its records, in traversal order."""
        for context in CONTEXT_PRECEDENCE:
            yield context, self.records_for(context)


@dataclass
class SuiteExecution:
    """A suite run and its results, keyed by suite result name."""

    name: str
    results: Dict[str, SuiteResult] = field(default_factory=dict)


class TestClassResults:
    """All results for the methods of a single test class.

    Records are filed under exactly one of the failed, skipped and passed
    collections. ``duration`` is the sum of every added record's duration,
    whichever collection it went to.
    """

    __test__ = False

    def __init__(self, test_class: TestClassRef):
        self.test_class = test_class
        self._failed: List[ExecutionRecord] = []
        self._skipped: List[ExecutionRecord] = []
        self._passed: List[ExecutionRecord] = []
        self.duration = 0
        self._sealed = False

    def add_result(self, record: ExecutionRecord, outcome: Outcome) -> None:
        """
        File a record under the given outcome and accumulate its duration.

        Raises:
            RuntimeError: If the results have been sealed
        """
        if self._sealed:
            raise RuntimeError(f"Results for {self.test_class.name} are sealed")

        if outcome is Outcome.FAILED:
            self._failed.append(record)
        elif outcome is Outcome.SKIPPED:
            self._skipped.append(record)
        else:
            self._passed.append(record)
        self.duration += record.duration_millis

    def seal(self) -> None:
        """Make the results read-only."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def name(self) -> str:
        return self.test_class.name

    @property
    def failed_tests(self) -> Tuple[ExecutionRecord, ...]:
        return tuple(self._failed)

    @property
    def skipped_tests(self) -> Tuple[ExecutionRecord, ...]:
        return tuple(self._skipped)

    @property
    def passed_tests(self) -> Tuple[ExecutionRecord, ...]:
        return tuple(self._passed)

    @property
    def total(self) -> int:
        return len(self._failed) + len(self._skipped) + len(self._passed)

    @property
    def duration_seconds(self) -> float:
        return self.duration / 1000.0

    def __repr__(self) -> str:
        return (
            f"TestClassResults({self.test_class.name!r}, failed={len(self._failed)}, "
            f"skipped={len(self._skipped)}, passed={len(self._passed)}, "
            f"duration={self.duration})"
        )


@dataclass
class ReportSummary:
    """Outcome of a report generation run."""

    classes: List[TestClassResults]
    files: List[Path] = field(default_factory=list)

    @property
    def total_tests(self) -> int:
        return sum(c.total for c in self.classes)

    @property
    def passed(self) -> int:
        return sum(len(c.passed_tests) for c in self.classes)

    @property
    def failed(self) -> int:
        return sum(len(c.failed_tests) for c in self.classes)

    @property
    def skipped(self) -> int:
        return sum(len(c.skipped_tests) for c in self.classes)

    @property
    def duration_millis(self) -> int:
        return sum(c.duration for c in self.classes)

    @property
    def success(self) -> bool:
        """Return True if no class has a failed record."""
        return self.failed == 0
