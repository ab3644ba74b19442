"""
Validates scanner plugins against the capability contract.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from interfaces import IAntimalwareScanner, IConfigurableAntimalwareScanner
from plugins.registry import ScannerPlugin, options_type_from_bases
from .exceptions import ContractNotSatisfiedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScannerCapability:
    """A plugin that satisfies the contract, with its required options type."""
    plugin: ScannerPlugin
    options_type: Optional[type] = None

    @property
    def type_name(self) -> str:
        return self.plugin.qualified_name


class CapabilityValidator:
    """Checks implementation classes against a marker contract and its generic refinement."""

    def __init__(self, contract: type = IAntimalwareScanner,
                 refinement: type = IConfigurableAntimalwareScanner):
        """
        Initialize capability validator.

        Args:
            contract: Marker contract every implementation must satisfy
            refinement: Generic contract parameterized over the options type
        """
        self.contract = contract
        self.refinement = refinement

    def validate(self, plugin: ScannerPlugin) -> ScannerCapability:
        """
        Validate a plugin and extract its required options type.

        Args:
            plugin: Resolved plugin descriptor

        Returns:
            Validated capability

        Raises:
            ContractNotSatisfiedError: If the class does not implement the contract
        """
        scanner_cls = plugin.scanner_type
        if not isinstance(scanner_cls, type) or not issubclass(scanner_cls, self.contract):
            type_name = plugin.qualified_name if isinstance(scanner_cls, type) else repr(scanner_cls)
            logger.error(f"Scanner type {type_name} does not implement {self.contract.__name__}")
            raise ContractNotSatisfiedError(type_name, self.contract.__name__)

        options_type = plugin.options_type or options_type_from_bases(scanner_cls, self.refinement)
        logger.debug(
            f"Scanner {plugin.qualified_name} satisfies {self.contract.__name__}; "
            f"options type: {options_type.__name__ if options_type else 'none'}"
        )
        return ScannerCapability(plugin=plugin, options_type=options_type)
