"""
JUnit XML reporter for per-class results.
"""

import re
import xml.etree.ElementTree as ET

from ..models import ExecutionRecord, TestClassResults
from .base import ReportGenerator

DIALECTS = ("junit", "testng")
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'

_ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;?]*[A-Za-z]")
# Characters outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile("[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")


def _seconds(millis: int) -> str:
    return f"{millis / 1000:.3f}"


def _xml_text(value: str) -> str:
    """Strip terminal colour codes and characters XML cannot carry."""
    return _INVALID_XML_CHARS.sub("", _ANSI_ESCAPE.sub("", str(value)))


class JUnitReporter(ReportGenerator):
    """Generate one JUnit XML testsuite document per test class.

    The ``junit`` dialect has no representation for skipped tests; the
    ``testng`` dialect emits ``<skipped/>`` elements.
    """

    def __init__(self, dialect: str = "junit"):
        if dialect not in DIALECTS:
            raise ValueError(f"Unknown XML dialect '{dialect}'. Expected one of {list(DIALECTS)}")
        self.dialect = dialect

    @property
    def supports_skipped(self) -> bool:
        return self.dialect == "testng"

    def generate(self, results: TestClassResults) -> str:
        """Generate JUnit XML report."""
        testsuite = ET.Element("testsuite")
        testsuite.set("name", _xml_text(results.name))
        testsuite.set("tests", str(results.total))
        testsuite.set("failures", str(len(results.failed_tests)))
        testsuite.set("errors", "0")
        testsuite.set("skipped", str(len(results.skipped_tests)))
        testsuite.set("time", _seconds(results.duration))

        for record in results.failed_tests:
            testcase = self._add_testcase(testsuite, results, record)
            failure = ET.SubElement(testcase, "failure")
            if record.error_type:
                failure.set("type", _xml_text(record.error_type))
            if record.error_message:
                failure.set("message", _xml_text(record.error_message))
            if record.stack_trace:
                failure.text = _xml_text(record.stack_trace)

        for record in results.skipped_tests:
            testcase = self._add_testcase(testsuite, results, record)
            ET.SubElement(testcase, "skipped")

        for record in results.passed_tests:
            self._add_testcase(testsuite, results, record)

        ET.indent(testsuite, space="  ")
        # Files are written as UTF-8; declare that rather than the locale encoding
        return XML_DECLARATION + ET.tostring(testsuite, encoding="unicode") + "\n"

    @staticmethod
    def _add_testcase(
        testsuite: ET.Element, results: TestClassResults, record: ExecutionRecord
    ) -> ET.Element:
        testcase = ET.SubElement(testsuite, "testcase")
        testcase.set("name", _xml_text(record.method_name))
        testcase.set("classname", _xml_text(results.name))
        testcase.set("time", _seconds(record.duration_millis))
        return testcase
