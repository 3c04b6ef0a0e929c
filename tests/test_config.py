"""Tests for configuration management."""

import pytest
import yaml

from src.junit_class_report.config import (
    ConfigurationError,
    ReportConfig,
    load_config,
    validate_config,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("JUNIT_REPORT_OUTPUT_DIR", raising=False)
    monkeypatch.delenv("JUNIT_REPORT_XML_DIALECT", raising=False)


class TestReportConfig:
    """Tests for ReportConfig dataclass."""

    def test_defaults(self):
        config = ReportConfig()
        assert config.output_directory == "test-output"
        assert config.xml_dialect == "junit"
        assert config.allow_skipped_in_xml is False

    def test_testng_dialect_allows_skipped(self):
        assert ReportConfig(xml_dialect="testng").allow_skipped_in_xml is True

    def test_dialect_normalised(self):
        assert ReportConfig(xml_dialect="JUnit").xml_dialect == "junit"


class TestLoadConfig:
    """Tests for load_config."""

    def test_no_file(self):
        config = load_config()
        assert config == ReportConfig()

    def test_from_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            yaml.safe_dump({"output_directory": "build/reports", "xml_dialect": "testng"})
        )
        config = load_config(str(config_file))
        assert config.output_directory == "build/reports"
        assert config.xml_dialect == "testng"

    def test_dialect_from_file_normalised(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("xml_dialect: ' TESTNG '\n")
        config = load_config(str(config_file))
        assert config.xml_dialect == "testng"
        assert config.allow_skipped_in_xml is True
        assert validate_config(config) == []

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")
        assert load_config(str(config_file)) == ReportConfig()

    def test_env_overrides_file(self, tmp_path, monkeypatch):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("output_directory: from-file\nxml_dialect: junit\n")
        monkeypatch.setenv("JUNIT_REPORT_OUTPUT_DIR", "from-env")
        monkeypatch.setenv("JUNIT_REPORT_XML_DIALECT", " TestNG ")
        config = load_config(str(config_file))
        assert config.output_directory == "from-env"
        assert config.xml_dialect == "testng"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "missing.yaml"))

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("output_directory: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_config(str(config_file))

    def test_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_config(str(config_file))

    def test_unknown_key(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("report_title: nightly\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_config(str(config_file))


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid(self):
        assert validate_config(ReportConfig()) == []
        assert validate_config(ReportConfig(xml_dialect="testng")) == []

    def test_empty_output_directory(self):
        errors = validate_config(ReportConfig(output_directory="  "))
        assert errors == ["output_directory is required"]

    def test_unknown_dialect(self):
        errors = validate_config(ReportConfig(xml_dialect="nunit"))
        assert len(errors) == 1
        assert "xml_dialect" in errors[0]

    def test_multiple_errors(self):
        assert len(validate_config(ReportConfig(output_directory="", xml_dialect="x"))) == 2
