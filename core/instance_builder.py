"""
Constructs scanner instances from validated capabilities and materialized options.
"""

import logging
from typing import Any, Optional

from interfaces import IAntimalwareScanner
from .capability_validator import ScannerCapability
from .exceptions import ConstructionFailedError, ContractNotSatisfiedError

logger = logging.getLogger(__name__)


class InstanceBuilder:
    """Builds scanners through their plugin factory."""

    def __init__(self, contract: type = IAntimalwareScanner):
        """
        Initialize instance builder.

        Args:
            contract: Marker contract the built instance must satisfy
        """
        self.contract = contract

    def build(self, capability: ScannerCapability, options: Optional[Any] = None) -> Any:
        """
        Construct a scanner.

        Calls ``factory(options)`` when options are present and ``factory()``
        otherwise.

        Args:
            capability: Validated capability
            options: Materialized options value

        Returns:
            Scanner instance satisfying the contract

        Raises:
            ConstructionFailedError: If options do not fit the scanner or the factory fails
            ContractNotSatisfiedError: If the factory returned a non-scanner
        """
        type_name = capability.type_name
        options_type = capability.options_type

        if options is not None:
            if options_type is None:
                raise ConstructionFailedError(
                    type_name, "options were supplied but the scanner declares no options type"
                )
            if not isinstance(options, options_type):
                raise ConstructionFailedError(
                    type_name,
                    f"options must be of type '{options_type.__name__}', got '{type(options).__name__}'"
                )

        factory = capability.plugin.factory
        try:
            scanner = factory(options) if options is not None else factory()
        except Exception as e:
            logger.error(f"Failed to construct scanner {type_name}: {e}")
            raise ConstructionFailedError(type_name, str(e) or type(e).__name__) from e

        return self.ensure_contract(scanner)

    def ensure_contract(self, scanner: Any) -> Any:
        """
        Check that an instance satisfies the contract.

        Args:
            scanner: Candidate scanner instance

        Returns:
            The same instance

        Raises:
            ContractNotSatisfiedError: If it does not
        """
        if not isinstance(scanner, self.contract):
            cls = type(scanner)
            raise ContractNotSatisfiedError(f"{cls.__module__}.{cls.__qualname__}", self.contract.__name__)
        return scanner
