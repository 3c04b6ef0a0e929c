"""
Configuration management for JUnit report generation.
"""

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from .reporting.junit import DIALECTS

logger = logging.getLogger(__name__)

# Module-level lock for thread-safe config loading
_config_lock = threading.Lock()


class ConfigurationError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


@dataclass
class ReportConfig:
    """Main configuration for report generation."""

    # Root of the report output; class reports go to <output_directory>/xml
    output_directory: str = "test-output"

    # "junit" reports skipped tests as failures, "testng" keeps them as skips
    xml_dialect: str = "junit"

    def __post_init__(self) -> None:
        """Normalise values coming from files, the environment or flags."""
        if isinstance(self.xml_dialect, str):
            self.xml_dialect = self.xml_dialect.strip().lower()

    @property
    def allow_skipped_in_xml(self) -> bool:
        """Return True if the configured dialect can represent skipped tests."""
        return self.xml_dialect == "testng"


def load_config(config_file: Optional[str] = None) -> ReportConfig:
    """
    Load configuration from file and environment variables.

    Configuration precedence (highest to lowest):
    1. Environment variables
    2. Configuration file
    3. Default values

    Args:
        config_file: Path to YAML configuration file (optional)

    Returns:
        ReportConfig object with merged configuration

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
        ConfigurationError: If config file has invalid YAML or unknown keys
    """
    with _config_lock:
        config_data: Dict[str, Any] = {}

        if config_file:
            logger.info("Loading configuration from %s", config_file)
            try:
                with open(config_file, "r") as f:
                    file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Invalid YAML in config file '{config_file}': {e}")
            except FileNotFoundError:
                raise FileNotFoundError(f"Configuration file not found: {config_file}")
            except PermissionError:
                raise ConfigurationError(f"Permission denied reading config file '{config_file}'")
            except OSError as e:
                raise ConfigurationError(f"Unable to read config file '{config_file}': {e}")

            if not isinstance(file_config, dict):
                raise ConfigurationError(
                    f"Config file '{config_file}' must contain a mapping, "
                    f"got {type(file_config).__name__}"
                )
            config_data.update(file_config)

        env_overrides = _load_from_env()
        config_data.update(env_overrides)
        if env_overrides:
            logger.debug("Applied environment variable overrides: %s", list(env_overrides.keys()))

        try:
            return ReportConfig(**config_data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}")


def _load_from_env() -> Dict[str, Any]:
    """
    Load configuration from environment variables.

    Supported environment variables:
    - JUNIT_REPORT_OUTPUT_DIR: Root directory of the report output
    - JUNIT_REPORT_XML_DIALECT: XML dialect (junit, testng)

    Returns:
        Dictionary of configuration values from environment
    """
    env_config: Dict[str, Any] = {}

    if "JUNIT_REPORT_OUTPUT_DIR" in os.environ:
        env_config["output_directory"] = os.environ["JUNIT_REPORT_OUTPUT_DIR"]

    if "JUNIT_REPORT_XML_DIALECT" in os.environ:
        env_config["xml_dialect"] = os.environ["JUNIT_REPORT_XML_DIALECT"]

    return env_config


def validate_config(config: ReportConfig) -> List[str]:
    """
    Validate configuration and return list of errors.

    Args:
        config: ReportConfig to validate

    Returns:
        List of error messages (empty if valid)
    """
    errors: List[str] = []

    if not config.output_directory or not str(config.output_directory).strip():
        errors.append("output_directory is required")

    if config.xml_dialect not in DIALECTS:
        errors.append(f"xml_dialect must be one of {list(DIALECTS)}: {config.xml_dialect}")

    return errors
