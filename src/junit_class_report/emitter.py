"""
Writing of per-class report files.
"""

import logging
from pathlib import Path
from typing import Callable, Iterable, List, Union

from .exceptions import ReportGenerationError
from .models import TestClassResults

logger = logging.getLogger(__name__)

REPORT_DIRECTORY = "xml"
RESULTS_FILE = "results"


def remove_empty_directories(output_directory: Union[str, Path]) -> List[Path]:
    """
    Delete empty subdirectories left behind by a previous report run.

    Only direct children of ``output_directory`` are considered. Files and
    non-empty directories are left untouched.

    Args:
        output_directory: Root of the report output

    Returns:
        The directories that were removed
    """
    root = Path(output_directory)
    removed: List[Path] = []
    if not root.is_dir():
        return removed

    for child in sorted(root.iterdir()):
        if child.is_dir() and not child.is_symlink() and not any(child.iterdir()):
            child.rmdir()
            removed.append(child)

    if removed:
        logger.debug("Removed %d empty directories under %s", len(removed), root)
    return removed


def report_file_name(results: TestClassResults) -> str:
    """File name for a class report; determined by the class name alone."""
    return f"{results.test_class.name}_{RESULTS_FILE}.xml"


def emit_reports(
    results: Iterable[TestClassResults],
    output_directory: Union[str, Path],
    render: Callable[[TestClassResults], str],
) -> List[Path]:
    """
    Render each class's results and write them under ``output_directory/xml``.

    Classes sharing a name overwrite each other's file.

    Args:
        results: Flattened per-class results
        output_directory: Root of the report output
        render: Turns one TestClassResults into a document

    Returns:
        Paths of the files written, in emission order

    Raises:
        ReportGenerationError: If preparing the output directory, or rendering
            or writing any class report, fails. Files written before the
            failure are kept.
    """
    report_directory = Path(output_directory) / REPORT_DIRECTORY
    try:
        remove_empty_directories(output_directory)
        report_directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Failed preparing report directory %s: %s", report_directory, e)
        raise ReportGenerationError("Failed generating JUnit XML report.", e) from e

    written: List[Path] = []
    for class_results in results:
        path = report_directory / report_file_name(class_results)
        try:
            document = render(class_results)
            path.write_text(document, encoding="utf-8")
        except Exception as e:
            logger.error("Failed writing report for %s: %s", class_results.name, e)
            raise ReportGenerationError("Failed generating JUnit XML report.", e) from e
        logger.debug("Wrote %s", path)
        written.append(path)

    logger.info("Wrote %d class reports to %s", len(written), report_directory)
    return written
