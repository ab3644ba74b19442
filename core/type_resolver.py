"""
Resolves a scanner registration's identity to a plugin descriptor.
"""

import logging

from plugins.registry import ScannerPlugin, ScannerPluginRegistry
from plugins.registration import ScannerRegistration
from .exceptions import UnresolvableTypeError

logger = logging.getLogger(__name__)


class TypeResolver:
    """Turns scanner identities into plugin descriptors using an explicit registry."""

    def __init__(self, registry: ScannerPluginRegistry):
        """
        Initialize type resolver.

        Args:
            registry: Registry of known scanner plugins
        """
        self.registry = registry

    def resolve(self, registration: ScannerRegistration) -> ScannerPlugin:
        """
        Resolve the plugin a registration names.

        Type handles resolve to their registered plugin, or to a descriptor
        derived from the class when it was never registered. String identities
        must be registered. The result is memoized on the registration.

        Args:
            registration: Scanner registration

        Returns:
            Resolved plugin descriptor

        Raises:
            UnresolvableTypeError: If the identity is unknown
        """
        if registration.resolved_plugin is not None:
            return registration.resolved_plugin

        scanner_cls = registration.type
        if scanner_cls is not None:
            plugin = self.registry.get_by_type(scanner_cls) or ScannerPlugin.from_type(scanner_cls)
        else:
            plugin = self.registry.get(registration.scanner_type or "")

        if plugin is None:
            logger.error(f"Unresolvable scanner type: {registration.scanner_type!r}")
            raise UnresolvableTypeError(registration.scanner_type or "")

        logger.debug(f"Resolved scanner type {registration.scanner_type} to plugin {plugin.name}")
        return registration.remember(plugin)
