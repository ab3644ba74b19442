"""
Tests for file validator settings, finalization and configuration loading.
"""

import json

import pytest

from config.file_validator_settings import (
    ConfigurationValidator, FileValidatorConfiguration, FileValidatorSettings,
    UNSET_FILE_SIZE_LIMIT, finalize_settings
)
from config.loader import expand_flat_keys, get_section, load_configuration
from core.exceptions import InvalidConfigurationError
from plugins.registration import ScannerRegistration
from utils.byte_size import megabytes


class TestFinalizeSettings:
    """Test derivation of the finalized configuration."""

    def test_unit_file_size_limit(self):
        """Test that the human-readable limit is parsed."""
        settings = FileValidatorSettings(supported_file_types=[".pdf"], unit_file_size_limit="25MB")

        config = finalize_settings(settings)

        assert config.file_size_limit == 25 * 1024 * 1024
        assert config.supported_file_types == [".pdf"]

    def test_explicit_limit_wins(self):
        """Test that the explicit limit takes precedence."""
        settings = FileValidatorSettings(supported_file_types=[".pdf"], file_size_limit=10485760,
                                         unit_file_size_limit="25MB")

        assert finalize_settings(settings).file_size_limit == megabytes(10)

    def test_no_limit(self):
        """Test that no limit is set when neither value is given."""
        settings = FileValidatorSettings(supported_file_types=[".pdf"], unit_file_size_limit="   ")

        assert finalize_settings(settings).file_size_limit is None

    def test_flags_and_types_copied(self):
        """Test that types and the failure flag are copied."""
        settings = FileValidatorSettings(supported_file_types=[".png", ".jpg"],
                                         throw_exception_on_invalid_file=False)

        config = finalize_settings(settings)
        settings.supported_file_types.append(".gif")

        assert config.supported_file_types == [".png", ".jpg"]
        assert config.throw_exception_on_invalid_file is False

    def test_invalid_unit_limit(self):
        """Test an unparsable human-readable limit."""
        settings = FileValidatorSettings(supported_file_types=[".pdf"], unit_file_size_limit="lots")

        with pytest.raises(InvalidConfigurationError, match="Invalid unit file size limit"):
            finalize_settings(settings)

    def test_defaults(self):
        """Test default settings values."""
        settings = FileValidatorSettings()

        assert settings.supported_file_types == []
        assert settings.file_size_limit == UNSET_FILE_SIZE_LIMIT
        assert settings.unit_file_size_limit is None
        assert settings.throw_exception_on_invalid_file is True
        assert settings.scanner is None


class TestConfigurationValidator:
    """Test structural validation."""

    def test_valid_configuration(self):
        """Test a valid configuration."""
        config = FileValidatorConfiguration(supported_file_types=[".pdf"], file_size_limit=100)

        assert ConfigurationValidator.validate(config) == []
        ConfigurationValidator.throw_if_invalid(config)

    def test_empty_supported_file_types(self):
        """Test that file types are required."""
        with pytest.raises(InvalidConfigurationError, match="At least one supported file type"):
            ConfigurationValidator.throw_if_invalid(FileValidatorConfiguration())

    def test_bad_file_types(self):
        """Test blank and dot-less file types."""
        errors = ConfigurationValidator.validate(FileValidatorConfiguration(supported_file_types=["", "pdf"]))

        assert errors == [
            "Supported file types must not be empty.",
            "Supported file type 'pdf' must start with a '.'."
        ]

    def test_non_positive_limit(self):
        """Test that limits must be positive."""
        config = FileValidatorConfiguration(supported_file_types=[".pdf"], file_size_limit=0)

        with pytest.raises(InvalidConfigurationError, match="greater than 0"):
            ConfigurationValidator.throw_if_invalid(config)


class TestFileValidatorSettingsFromSection:
    """Test binding settings from configuration sections."""

    def test_pascal_case_section(self):
        """Test a section with configuration-file keys."""
        settings = FileValidatorSettings.from_section({
            "SupportedFileTypes": [".pdf"],
            "FileSizeLimit": "1024",
            "UnitFileSizeLimit": "15MB",
            "ThrowExceptionOnInvalidFile": "false",
            "Scanner": {"ScannerType": "MockScanner", "Options": {"OptionA": "ConfigOption"}}
        })

        assert settings.supported_file_types == [".pdf"]
        assert settings.file_size_limit == 1024
        assert settings.unit_file_size_limit == "15MB"
        assert settings.throw_exception_on_invalid_file is False
        assert isinstance(settings.scanner, ScannerRegistration)
        assert settings.scanner.scanner_type == "MockScanner"
        assert settings.scanner.options_configuration == {"OptionA": "ConfigOption"}

    def test_keys_case_insensitive(self):
        """Test lower-case and snake_case keys."""
        settings = FileValidatorSettings.from_section({
            "supportedfiletypes": [".pdf"],
            "unit_file_size_limit": "1MB"
        })

        assert settings.supported_file_types == [".pdf"]
        assert settings.unit_file_size_limit == "1MB"

    def test_missing_section_uses_defaults(self):
        """Test that a missing section yields defaults."""
        assert FileValidatorSettings.from_section(None).scanner is None

    def test_invalid_value(self):
        """Test a value of the wrong type."""
        with pytest.raises(InvalidConfigurationError, match="Invalid file validator settings"):
            FileValidatorSettings.from_section({"FileSizeLimit": "big"})

    def test_invalid_scanner_section(self):
        """Test a scanner section of the wrong shape."""
        with pytest.raises(InvalidConfigurationError):
            FileValidatorSettings.from_section({"Scanner": "MockScanner"})

    def test_scanner_assigned_in_code(self):
        """Test assigning a registration to settings built in code."""
        settings = FileValidatorSettings()
        registration = ScannerRegistration(scanner_type="null")

        settings.scanner = registration

        assert settings.scanner is registration


class TestConfigurationLoader:
    """Test configuration files and sections."""

    def test_load_configuration(self, tmp_path):
        """Test loading a JSON configuration file."""
        path = tmp_path / "appsettings.json"
        path.write_text(json.dumps({"FileValidator": {"SupportedFileTypes": [".pdf"]}}), encoding="utf-8")

        assert load_configuration(str(path)) == {"FileValidator": {"SupportedFileTypes": [".pdf"]}}

    def test_load_configuration_rejects_non_object(self, tmp_path):
        """Test a JSON file that is not an object."""
        path = tmp_path / "appsettings.json"
        path.write_text("[1, 2]", encoding="utf-8")

        with pytest.raises(ValueError, match="must contain a JSON object"):
            load_configuration(str(path))

    def test_load_missing_file(self, tmp_path):
        """Test a missing configuration file."""
        with pytest.raises(OSError):
            load_configuration(str(tmp_path / "missing.json"))

    def test_expand_flat_keys(self):
        """Test expansion of delimiter-separated keys."""
        tree = expand_flat_keys({
            "FileValidator:SupportedFileTypes:0": ".pdf",
            "FileValidator:SupportedFileTypes:1": ".png",
            "FileValidator:UnitFileSizeLimit": "15MB",
            "FileValidator:Scanner:Options:OptionB": "123"
        })

        assert tree == {
            "FileValidator": {
                "SupportedFileTypes": [".pdf", ".png"],
                "UnitFileSizeLimit": "15MB",
                "Scanner": {"Options": {"OptionB": "123"}}
            }
        }

    def test_expand_flat_keys_conflict(self):
        """Test a key that is both a value and a section."""
        with pytest.raises(ValueError, match="conflicts"):
            expand_flat_keys({"A": "value", "A:B": "nested"})

    def test_expand_flat_keys_does_not_mutate_input(self):
        """Test that nested input values are copied."""
        nested = {"B": "1"}
        tree = expand_flat_keys({"A": nested, "A:C": "2"})

        assert tree == {"A": {"B": "1", "C": "2"}}
        assert nested == {"B": "1"}

    def test_get_section_case_insensitive(self):
        """Test section lookup ignoring case."""
        configuration = {"fileValidator": {"SupportedFileTypes": [".pdf"]}}

        assert get_section(configuration, "FileValidator") == {"SupportedFileTypes": [".pdf"]}

    def test_get_nested_section(self):
        """Test nested section lookup."""
        configuration = {"App": {"Uploads": {"SupportedFileTypes": [".pdf"]}}}

        assert get_section(configuration, "App:Uploads") == {"SupportedFileTypes": [".pdf"]}

    def test_get_missing_section(self):
        """Test a section that does not exist."""
        assert get_section({"Other": {}}, "FileValidator") is None

    def test_get_section_from_flat_keys(self):
        """Test section lookup in flat configuration."""
        section = get_section({"CustomName:SupportedFileTypes:0": ".pdf"}, "CustomName")

        assert section == {"SupportedFileTypes": [".pdf"]}

    def test_get_section_not_an_object(self):
        """Test a section that holds a plain value."""
        with pytest.raises(ValueError, match="must be an object"):
            get_section({"FileValidator": "oops"}, "FileValidator")
