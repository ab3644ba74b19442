"""
File validator service holding the finalized configuration and the optional antimalware scanner.
"""

import logging
from typing import BinaryIO, Optional

from config.file_validator_settings import FileValidatorConfiguration
from interfaces import IAntimalwareScanner

logger = logging.getLogger(__name__)


class FileValidator:
    """Validates uploaded files against a finalized configuration."""

    def __init__(self, configuration: FileValidatorConfiguration,
                 antimalware_scanner: Optional[IAntimalwareScanner] = None):
        """
        Initialize file validator.

        Args:
            configuration: Finalized file validator configuration
            antimalware_scanner: Scanner used for malware checks, if configured
        """
        self._configuration = configuration
        self._antimalware_scanner = antimalware_scanner

    @property
    def configuration(self) -> FileValidatorConfiguration:
        return self._configuration

    @property
    def antimalware_scanner(self) -> Optional[IAntimalwareScanner]:
        return self._antimalware_scanner

    def is_malware_clean(self, content: BinaryIO, file_name: str) -> bool:
        """
        Check file content with the configured antimalware scanner.

        Files are considered clean when no scanner is configured.

        Args:
            content: Readable binary stream
            file_name: Name of the file

        Returns:
            True if the scanner reports no malware
        """
        if self._antimalware_scanner is None:
            return True

        clean = self._antimalware_scanner.is_clean(content, file_name)
        if not clean:
            logger.warning(f"Antimalware scan rejected {file_name}")
        return clean
