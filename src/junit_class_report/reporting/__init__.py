"""
Reporting modules for per-class JUnit reports.
"""

from .base import ReportGenerator
from .console import ConsoleReporter
from .junit import JUnitReporter

__all__ = ["ReportGenerator", "ConsoleReporter", "JUnitReporter"]
