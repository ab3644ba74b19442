"""
Scanner resolution pipeline.
Runs type resolution, capability validation, options materialization and
construction for a scanner registration.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from interfaces import IAntimalwareScanner, IConfigurableAntimalwareScanner
from plugins.registry import ScannerPluginRegistry
from plugins.registration import ScannerRegistration
from .capability_validator import CapabilityValidator, ScannerCapability
from .instance_builder import InstanceBuilder
from .options_materializer import OptionsMaterializer
from .type_resolver import TypeResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedScanner:
    """A registration that passed every check short of construction."""
    capability: Optional[ScannerCapability] = None
    options: Optional[Any] = None
    instance: Optional[Any] = None

    @property
    def name(self) -> str:
        if self.instance is not None:
            return type(self.instance).__name__
        return self.capability.plugin.name


class ScannerResolver:
    """Resolves scanner registrations into ready-to-use scanner instances."""

    def __init__(self, registry: ScannerPluginRegistry,
                 contract: type = IAntimalwareScanner,
                 refinement: type = IConfigurableAntimalwareScanner):
        """
        Initialize scanner resolver.

        Args:
            registry: Registry of known scanner plugins
            contract: Marker contract scanners must satisfy
            refinement: Generic contract carrying the options type
        """
        self.type_resolver = TypeResolver(registry)
        self.validator = CapabilityValidator(contract, refinement)
        self.materializer = OptionsMaterializer()
        self.builder = InstanceBuilder(contract)

    def prepare(self, registration: ScannerRegistration) -> PreparedScanner:
        """
        Resolve, validate and materialize options without constructing.

        Args:
            registration: Scanner registration

        Returns:
            Prepared scanner

        Raises:
            ScannerRegistrationError: On any resolution, validation or binding failure
        """
        if registration.instance is not None:
            self.builder.ensure_contract(registration.instance)
            logger.info(f"Using pre-built scanner instance {registration.scanner_type}")
            return PreparedScanner(instance=registration.instance)

        plugin = self.type_resolver.resolve(registration)
        capability = self.validator.validate(plugin)
        options = self.materializer.materialize(registration, capability)
        return PreparedScanner(capability=capability, options=options)

    def build(self, prepared: PreparedScanner) -> Any:
        """
        Construct a prepared scanner.

        Args:
            prepared: Output of prepare()

        Returns:
            Scanner instance
        """
        if prepared.instance is not None:
            return prepared.instance

        scanner = self.builder.build(prepared.capability, prepared.options)
        logger.info(f"Constructed scanner {prepared.capability.type_name}")
        return scanner

    def resolve(self, registration: ScannerRegistration) -> Any:
        """
        Run the full pipeline for a registration.

        Args:
            registration: Scanner registration

        Returns:
            Scanner instance
        """
        return self.build(self.prepare(registration))
