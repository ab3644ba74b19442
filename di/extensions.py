"""
Registration of the file validator and its antimalware scanner in a DI container.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from config.file_validator_settings import (
    ConfigurationValidator, FileValidatorConfiguration, FileValidatorSettings, finalize_settings
)
from config.loader import get_section
from core.exceptions import InvalidConfigurationError
from core.scanner_resolver import ScannerResolver
from interfaces import IAntimalwareScanner
from plugins.registration import ScannerRegistration
from plugins.registry import ScannerPluginRegistry, create_default_registry
from validation.file_validator import FileValidator
from .container import DIContainer

logger = logging.getLogger(__name__)

# Default configuration section holding the file validator settings
DEFAULT_SECTION_NAME = "FileValidator"


def add_file_validator(container: DIContainer,
                       configure: Callable[[FileValidatorSettings], None],
                       registry: Optional[ScannerPluginRegistry] = None) -> DIContainer:
    """
    Add the file validator services, configured from code.

    Args:
        container: DI container
        configure: Callback configuring the settings
        registry: Scanner plugin registry, defaults to the built-in plugins
            plus SCANNER_PLUGIN_MODULES

    Returns:
        The container

    Raises:
        ValueError: If container or configure is None
        InvalidConfigurationError: If the finalized configuration is invalid
        ScannerRegistrationError: If the configured scanner cannot be built
    """
    if container is None:
        raise ValueError("container must not be None")
    if configure is None:
        raise ValueError("configure must not be None")

    settings = FileValidatorSettings()
    configure(settings)
    return _register_services(container, settings, registry)


def add_file_validator_from_config(container: DIContainer, configuration: Mapping[str, Any],
                                   section_name: str = DEFAULT_SECTION_NAME,
                                   registry: Optional[ScannerPluginRegistry] = None) -> DIContainer:
    """
    Add the file validator services, configured from a configuration tree.

    Args:
        container: DI container
        configuration: Configuration tree, nested or with ``:``-delimited keys
        section_name: Section holding the file validator settings
        registry: Scanner plugin registry

    Returns:
        The container
    """
    if container is None:
        raise ValueError("container must not be None")
    if configuration is None:
        raise ValueError("configuration must not be None")

    try:
        section = get_section(configuration, section_name)
    except ValueError as e:
        raise InvalidConfigurationError(str(e)) from e
    if section is None:
        logger.warning(f"Configuration section '{section_name}' not found, using defaults")

    settings = FileValidatorSettings.from_section(section)
    return _register_services(container, settings, registry)


def _register_services(container: DIContainer, settings: FileValidatorSettings,
                       registry: Optional[ScannerPluginRegistry]) -> DIContainer:
    configuration = finalize_settings(settings)
    try:
        ConfigurationValidator.throw_if_invalid(configuration)
    except InvalidConfigurationError as e:
        logger.error(f"Invalid file validator configuration: {e}")
        raise

    register_configured_scanner(container, settings.scanner, registry)

    container.register_instance(FileValidatorConfiguration, configuration)
    container.register_factory(FileValidator, lambda: FileValidator(
        container.resolve(FileValidatorConfiguration),
        container.try_resolve(IAntimalwareScanner)
    ))

    logger.info(
        f"File validator registered: {len(configuration.supported_file_types)} file types, "
        f"size limit {configuration.file_size_limit}, "
        f"scanner {'configured' if settings.scanner is not None else 'none'}"
    )
    return container


def register_configured_scanner(container: DIContainer, scanner: Optional[ScannerRegistration],
                                registry: Optional[ScannerPluginRegistry] = None,
                                contract: type = IAntimalwareScanner) -> bool:
    """
    Register the configured antimalware scanner as a singleton.

    The scanner is resolved, validated, bound and constructed immediately so
    misconfiguration surfaces at startup. A scanner already registered under
    ``contract`` is replaced only once the new one has been built; on failure
    the container is left unchanged.

    Args:
        container: DI container
        scanner: Scanner registration, None when no scanner is configured
        registry: Scanner plugin registry
        contract: Interface the scanner is registered under

    Returns:
        True if a scanner was registered
    """
    if scanner is None:
        logger.info("No antimalware scanner configured")
        return False

    resolver = ScannerResolver(registry or create_default_registry(), contract=contract)
    prepared = resolver.prepare(scanner)

    instance = resolver.build(prepared)
    if container.has_service(contract):
        logger.warning(f"Replacing the antimalware scanner registered for {contract.__name__}")
    container.register_instance(contract, instance)

    logger.info(f"Registered antimalware scanner {prepared.name}")
    return True
