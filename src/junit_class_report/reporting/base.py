"""
Base class for report generators.
"""

from abc import ABC, abstractmethod

from ..models import TestClassResults


class ReportGenerator(ABC):
    """Base class for rendering the results of one test class."""

    @property
    def supports_skipped(self) -> bool:
        """Whether the output format can represent skipped tests."""
        return False

    @abstractmethod
    def generate(self, results: TestClassResults) -> str:
        """
        Generate a report for a single test class.

        Args:
            results: TestClassResults for the class

        Returns:
            Report as a string
        """
        pass
