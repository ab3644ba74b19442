"""
Utility functions and helpers for the file validator.
Includes logging setup, configuration key handling and system info.
"""

import logging
import os
import re
import sys
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from config.settings import settings

_KEY_SEPARATORS = re.compile(r'[_\-\s]')


def setup_logging(log_to_file: Optional[bool] = None):
    """
    Set up logging configuration for the application.

    Args:
        log_to_file: Also write a dated log file under LOG_DIR, defaults to
            whether LOG_DIR is set
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_to_file is None:
        log_to_file = bool(settings.LOG_DIR)
    if log_to_file:
        log_dir = settings.LOG_DIR or "logs"
        os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.FileHandler(
            os.path.join(log_dir, f"file_validator_{datetime.now().strftime('%Y%m%d')}.log"),
            encoding='utf-8'
        ))

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper()),
        format=settings.LOG_FORMAT,
        datefmt=settings.LOG_DATE_FORMAT,
        handlers=handlers,
        force=True
    )

    logger = logging.getLogger(__name__)
    logger.info("Logging system initialized")


def normalize_key(key: str) -> str:
    """
    Normalize a configuration key for case-insensitive matching.

    ``OptionA``, ``option_a`` and ``option-a`` all normalize to ``optiona``.

    Args:
        key: Configuration key

    Returns:
        Normalized key
    """
    return _KEY_SEPARATORS.sub('', key).lower()


def get_case_insensitive(data: Mapping[str, Any], key: str, default: Any = None) -> Any:
    """
    Get a mapping value by key, ignoring case.

    Args:
        data: Mapping to search
        key: Key to look up
        default: Default value if not found

    Returns:
        Value or default
    """
    if key in data:
        return data[key]
    lowered = key.lower()
    for candidate, value in data.items():
        if str(candidate).lower() == lowered:
            return value
    return default


def get_system_info() -> Dict[str, Any]:
    """
    Get system and configuration information.

    Returns:
        Dictionary with system info
    """
    return {
        'python_version': sys.version,
        'working_directory': os.getcwd(),
        'config': {
            'config_path': settings.FILE_VALIDATOR_CONFIG_PATH,
            'section': settings.FILE_VALIDATOR_SECTION,
            'plugin_modules': settings.scanner_plugin_modules()
        },
        'timestamp': datetime.now().isoformat()
    }
