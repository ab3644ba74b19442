"""
Test suite for the file validator scanner registration.
Provides scanner doubles shared by the test modules.
"""

from dataclasses import dataclass
from typing import BinaryIO

from interfaces import IAntimalwareScanner, IConfigurableAntimalwareScanner
from plugins.registry import ScannerPluginRegistry


@dataclass
class MockAntimalwareScannerOptions:
    """Options for the mock scanner."""
    option_a: str = ""
    option_b: int = 0


class MockAntimalwareScanner(IConfigurableAntimalwareScanner[MockAntimalwareScannerOptions]):
    """Scanner double declaring its options type through the generic contract."""

    def __init__(self, options: MockAntimalwareScannerOptions):
        self._options = options

    @property
    def options(self) -> MockAntimalwareScannerOptions:
        return self._options

    def is_clean(self, content: BinaryIO, file_name: str) -> bool:
        return True


class OptionlessScanner(IAntimalwareScanner):
    """Scanner double without options."""

    def is_clean(self, content: BinaryIO, file_name: str) -> bool:
        return True


class FailingScanner(IAntimalwareScanner):
    """Scanner double whose constructor raises."""

    def __init__(self):
        raise RuntimeError("scanner backend unavailable")

    def is_clean(self, content: BinaryIO, file_name: str) -> bool:
        return True


class NotAScanner:
    """Class that does not implement the scanner contract."""

    def is_clean(self, content: BinaryIO, file_name: str) -> bool:
        return True


def create_test_registry() -> ScannerPluginRegistry:
    """Create a registry holding the scanner doubles."""
    registry = ScannerPluginRegistry()
    registry.register_type(MockAntimalwareScanner, name="MockScanner",
                           options_type=MockAntimalwareScannerOptions)
    registry.register_type(OptionlessScanner, name="Optionless")
    registry.register_type(FailingScanner, name="Failing")
    registry.register_type(NotAScanner, name="NotAScanner")
    return registry
