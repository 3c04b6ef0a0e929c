"""
Console summary of a report generation run.
"""

import os
import sys

from ..models import ReportSummary


def _supports_color() -> bool:
    """Return True if the output stream likely supports ANSI colours."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if not hasattr(sys.stdout, "isatty") or not sys.stdout.isatty():
        return False
    # Windows: enable ANSI processing via the virtual terminal flag.
    if sys.platform == "win32":
        try:
            import ctypes

            kernel32 = ctypes.windll.kernel32  # type: ignore[attr-defined]
            # STD_OUTPUT_HANDLE = -11, ENABLE_VIRTUAL_TERMINAL_PROCESSING = 0x0004
            handle = kernel32.GetStdHandle(-11)
            mode = ctypes.c_ulong()
            kernel32.GetConsoleMode(handle, ctypes.byref(mode))
            kernel32.SetConsoleMode(handle, mode.value | 0x0004)
        except Exception:
            return False
    return True


class ConsoleReporter:
    """Generate a coloured per-class summary for the terminal."""

    def __init__(self) -> None:
        color = _supports_color()
        self.GREEN = "\033[92m" if color else ""
        self.RED = "\033[91m" if color else ""
        self.YELLOW = "\033[93m" if color else ""
        self.RESET = "\033[0m" if color else ""
        self.BOLD = "\033[1m" if color else ""

    def generate(self, summary: ReportSummary) -> str:
        """Generate console summary."""
        lines = []

        lines.append(f"\n{self.BOLD}JUnit XML Report{self.RESET}")
        lines.append("=" * 60)

        lines.append(f"\n{self.BOLD}Summary:{self.RESET}")
        lines.append(f"  Test Classes: {len(summary.classes)}")
        lines.append(f"  Total Tests: {summary.total_tests}")
        lines.append(f"  {self.GREEN}Passed: {summary.passed}{self.RESET}")
        lines.append(f"  {self.RED}Failed: {summary.failed}{self.RESET}")
        lines.append(f"  {self.YELLOW}Skipped: {summary.skipped}{self.RESET}")
        lines.append(f"  Duration: {summary.duration_millis / 1000:.2f}s")

        if summary.classes:
            lines.append(f"\n{self.BOLD}Classes:{self.RESET}")
            for results in sorted(summary.classes, key=lambda r: r.name):
                if results.failed_tests:
                    symbol = f"{self.RED}✗{self.RESET}"
                else:
                    symbol = f"{self.GREEN}✓{self.RESET}"
                lines.append(
                    f"  {symbol} {results.name}: "
                    f"{len(results.passed_tests)} passed, "
                    f"{len(results.failed_tests)} failed, "
                    f"{len(results.skipped_tests)} skipped "
                    f"({results.duration_seconds:.3f}s)"
                )

        if summary.files:
            lines.append(f"\n{len(summary.files)} report files written to {summary.files[0].parent}")

        if summary.success:
            lines.append(f"\n{self.GREEN}{self.BOLD}✓ NO FAILURES{self.RESET}")
        else:
            lines.append(f"\n{self.RED}{self.BOLD}✗ FAILURES REPORTED{self.RESET}")

        lines.append("")
        return "\n".join(lines)
