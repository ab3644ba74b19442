"""
Tests for the startup entry point.
"""

import json

import pytest
from unittest.mock import patch

from interfaces import IAntimalwareScanner
from config.settings import Settings
from main import build_container, main
from plugins.scanners import SignatureScanner
from utils.helpers import get_case_insensitive, normalize_key
from validation.file_validator import FileValidator


@pytest.fixture
def config_file(tmp_path):
    """Write a test configuration file."""
    path = tmp_path / "appsettings.json"
    path.write_text(json.dumps({
        "FileValidator": {
            "SupportedFileTypes": [".pdf", ".png"],
            "UnitFileSizeLimit": "25MB",
            "Scanner": {"ScannerType": "signature", "Options": {"MaxScanBytes": 2048}}
        }
    }), encoding="utf-8")
    return str(path)


class TestMain:
    """Test startup from a configuration file."""

    @pytest.fixture(autouse=True)
    def no_extra_plugins(self):
        """Ignore SCANNER_PLUGIN_MODULES from the environment."""
        with patch('config.settings.Settings.SCANNER_PLUGIN_MODULES', ''), \
             patch('main.setup_logging'):
            yield

    def test_build_container(self, config_file):
        """Test container construction from a file."""
        container = build_container(config_file, "FileValidator")

        scanner = container.resolve(IAntimalwareScanner)
        assert isinstance(scanner, SignatureScanner)
        assert scanner.options.max_scan_bytes == 2048
        assert container.resolve(FileValidator).configuration.file_size_limit == 25 * 1024 * 1024

    def test_main_success(self, config_file):
        """Test a successful startup."""
        assert main([config_file]) == 0

    def test_main_missing_file(self, tmp_path):
        """Test startup with a missing configuration file."""
        assert main([str(tmp_path / "missing.json")]) == 1

    def test_main_invalid_configuration(self, tmp_path):
        """Test startup with an invalid configuration."""
        path = tmp_path / "appsettings.json"
        path.write_text(json.dumps({"FileValidator": {"SupportedFileTypes": []}}), encoding="utf-8")

        assert main([str(path)]) == 1

    def test_main_unknown_plugin_module(self, config_file):
        """Test startup with a plugin module that cannot be imported."""
        with patch('config.settings.Settings.SCANNER_PLUGIN_MODULES', 'no.such.module'):
            assert main([config_file]) == 1

    def test_main_unknown_scanner(self, tmp_path):
        """Test startup with an unknown scanner."""
        path = tmp_path / "appsettings.json"
        path.write_text(json.dumps({"FileValidator": {
            "SupportedFileTypes": [".pdf"],
            "Scanner": {"ScannerType": "clamav"}
        }}), encoding="utf-8")

        assert main([str(path)]) == 1


class TestSettings:
    """Test environment settings."""

    def test_validate_defaults(self):
        """Test that the default settings validate."""
        with patch.object(Settings, 'LOG_LEVEL', 'INFO'), \
             patch.object(Settings, 'FILE_VALIDATOR_SECTION', 'FileValidator'):
            Settings.validate()

    def test_validate_invalid_log_level(self):
        """Test that an unknown log level is rejected."""
        with patch.object(Settings, 'LOG_LEVEL', 'LOUD'):
            with pytest.raises(ValueError, match="LOG_LEVEL"):
                Settings.validate()

    def test_validate_empty_section(self):
        """Test that an empty section name is rejected."""
        with patch.object(Settings, 'LOG_LEVEL', 'INFO'), \
             patch.object(Settings, 'FILE_VALIDATOR_SECTION', '  '):
            with pytest.raises(ValueError, match="FILE_VALIDATOR_SECTION"):
                Settings.validate()

    def test_scanner_plugin_modules(self):
        """Test parsing of the plugin module list."""
        with patch.object(Settings, 'SCANNER_PLUGIN_MODULES', ' a.b , ,c '):
            assert Settings().scanner_plugin_modules() == ['a.b', 'c']


class TestHelpers:
    """Test configuration key helpers."""

    def test_normalize_key(self):
        assert normalize_key("OptionA") == normalize_key("option_a") == "optiona"
        assert normalize_key("max-scan bytes") == "maxscanbytes"

    def test_get_case_insensitive(self):
        data = {"FileValidator": 1}
        assert get_case_insensitive(data, "filevalidator") == 1
        assert get_case_insensitive(data, "missing", "x") == "x"
