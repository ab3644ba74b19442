#!/usr/bin/env python3
"""
Startup entry point for the file validator.
Loads the configuration, registers the file validator and its scanner,
and reports the result.
"""

import logging
import sys
from typing import List, Optional

from config.loader import load_configuration
from config.settings import settings
from core.exceptions import FileValidatorError
from di.container import DIContainer
from di.extensions import add_file_validator_from_config
from interfaces import IAntimalwareScanner
from plugins.registry import create_default_registry
from utils.helpers import get_system_info, setup_logging
from validation.file_validator import FileValidator

logger = logging.getLogger(__name__)


def build_container(config_path: str, section_name: str) -> DIContainer:
    """
    Build a container holding the configured file validator.

    Args:
        config_path: Path to the JSON configuration file
        section_name: Section holding the file validator settings

    Returns:
        Populated DI container
    """
    configuration = load_configuration(config_path)
    registry = create_default_registry()
    logger.info(f"Available scanner plugins: {', '.join(registry.list_plugins())}")

    container = DIContainer()
    add_file_validator_from_config(container, configuration, section_name, registry=registry)
    return container


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    argv = sys.argv[1:] if argv is None else argv

    # Setup logging
    setup_logging()

    # Validate configuration
    try:
        settings.validate()
    except ValueError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    config_path = argv[0] if argv else settings.FILE_VALIDATOR_CONFIG_PATH
    section_name = argv[1] if len(argv) > 1 else settings.FILE_VALIDATOR_SECTION
    logger.debug(f"System info: {get_system_info()}")

    try:
        container = build_container(config_path, section_name)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load configuration from {config_path}: {e}")
        return 1
    except ImportError as e:
        logger.error(f"Could not load scanner plugin modules: {e}")
        return 1
    except FileValidatorError as e:
        logger.error(f"File validator configuration failed: {e}")
        return 1

    validator = container.resolve(FileValidator)
    scanner = container.try_resolve(IAntimalwareScanner)
    logger.info(f"Supported file types: {', '.join(validator.configuration.supported_file_types)}")
    logger.info(f"File size limit: {validator.configuration.file_size_limit or 'none'}")
    logger.info(f"Antimalware scanner: {type(scanner).__name__ if scanner else 'none'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
