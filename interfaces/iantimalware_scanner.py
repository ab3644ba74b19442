"""
Abstract interfaces for antimalware scanners.
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, Generic, TypeVar

TOptions = TypeVar('TOptions')


class IAntimalwareScanner(ABC):
    """Abstract interface every antimalware scanner must implement."""

    @abstractmethod
    def is_clean(self, content: BinaryIO, file_name: str) -> bool:
        """
        Scan file content for malware.

        Args:
            content: Readable binary stream positioned at the start of the file
            file_name: Name of the file being scanned

        Returns:
            True if no malware was detected
        """
        raise NotImplementedError("is_clean method must be implemented by concrete classes")


class IConfigurableAntimalwareScanner(IAntimalwareScanner, Generic[TOptions]):
    """
    Antimalware scanner constructed from a typed options value.

    Implementations take a single ``TOptions`` argument in their constructor.
    """

    @property
    @abstractmethod
    def options(self) -> TOptions:
        """Options the scanner was constructed with."""
        raise NotImplementedError("options property must be implemented by concrete classes")
