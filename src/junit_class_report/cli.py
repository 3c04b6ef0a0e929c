"""
Command-line interface for per-class JUnit report generation.
"""

import logging
import sys
from typing import Optional

import click

from .config import ConfigurationError, load_config, validate_config
from .exceptions import InputFormatError, ReportGenerationError, UnknownStatusError
from .loader import load_suites
from .reporting import ConsoleReporter
from .runner import ReportRunner

logger = logging.getLogger(__name__)


@click.command()
@click.option(
    "--input",
    "input_file",
    type=click.Path(exists=True, dir_okay=False),
    required=True,
    help="Suite results document (YAML or JSON)",
)
@click.option(
    "--config",
    type=click.Path(exists=True),
    help="Path to configuration file (YAML)",
)
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    help="Report output root (overrides config)",
)
@click.option(
    "--xml-dialect",
    type=click.Choice(["junit", "testng"]),
    help="XML dialect (overrides config)",
)
@click.option(
    "--ci",
    is_flag=True,
    help="Exit with status 1 when any test class has failures",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default="INFO",
    help="Logging level",
)
def main(
    input_file: str,
    config: Optional[str],
    output_dir: Optional[str],
    xml_dialect: Optional[str],
    ci: bool,
    log_level: str,
) -> None:
    """
    JUnit Class Report - one JUnit XML file per test class.

    Examples:

      # Write reports to ./test-output/xml
      junit-class-report --input results.yaml

      # Keep skipped tests as skips and fail the build on test failures
      junit-class-report --input results.json --xml-dialect testng --ci
    """
    logging.basicConfig(
        level=getattr(logging, log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
    )

    try:
        logger.info("Loading configuration...")
        report_config = load_config(config)

        if output_dir:
            report_config.output_directory = output_dir
        if xml_dialect:
            report_config.xml_dialect = xml_dialect

        errors = validate_config(report_config)
        if errors:
            click.echo("Configuration errors:", err=True)
            for error in errors:
                click.echo(f"  - {error}", err=True)
            sys.exit(1)

        suites = load_suites(input_file)
        runner = ReportRunner(report_config)
        summary = runner.generate_report(suites)

        click.echo(ConsoleReporter().generate(summary))

        logger.info(
            "Reports complete: %d classes, %d passed, %d failed, %d skipped",
            len(summary.classes),
            summary.passed,
            summary.failed,
            summary.skipped,
        )

        sys.exit(1 if ci and not summary.success else 0)

    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except FileNotFoundError as e:
        logger.error("File not found: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except InputFormatError as e:
        logger.error("Invalid input: %s", e)
        click.echo(f"Invalid input: {e}", err=True)
        sys.exit(1)
    except UnknownStatusError as e:
        logger.error("Contract violation: %s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except ReportGenerationError as e:
        logger.error("%s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        click.echo(f"Unexpected error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
