"""
Report runner tying flattening and emission together.
"""

import logging
from typing import Iterable, List, Optional

from .config import ReportConfig
from .emitter import emit_reports
from .models import ReportSummary, SuiteExecution, TestClassResults
from .reporting.base import ReportGenerator
from .reporting.junit import JUnitReporter
from .results import flatten_results

logger = logging.getLogger(__name__)


class ReportRunner:
    """Orchestrates per-class report generation."""

    def __init__(self, config: ReportConfig, reporter: Optional[ReportGenerator] = None):
        self.config = config
        self.reporter = reporter or JUnitReporter(config.xml_dialect)

    def flatten(self, suites: Iterable[SuiteExecution]) -> List[TestClassResults]:
        """
        Group suite results by test class.

        Whether skipped tests survive as skips is decided by the reporter's
        output format.
        """
        return flatten_results(suites, allow_skipped=self.reporter.supports_skipped)

    def generate_report(self, suites: Iterable[SuiteExecution]) -> ReportSummary:
        """
        Flatten suite results and write one report file per test class.

        Args:
            suites: Finished suite executions

        Returns:
            ReportSummary with the class results and written files

        Raises:
            UnknownStatusError: If a record carries an unknown status
            ReportGenerationError: If rendering or writing a report fails
        """
        results = self.flatten(suites)
        logger.info(
            "Generating %d class reports in %s", len(results), self.config.output_directory
        )
        files = emit_reports(results, self.config.output_directory, self.reporter.generate)
        return ReportSummary(classes=results, files=files)
