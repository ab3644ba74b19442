"""
Loading of JSON configuration files and configuration sections.
"""

import copy
import json
import logging
from typing import Any, Dict, Mapping, Optional

from utils.helpers import get_case_insensitive

logger = logging.getLogger(__name__)

# Separator of flat keys such as "FileValidator:Scanner:Options:OptionA"
KEY_DELIMITER = ':'


def load_configuration(file_path: str) -> Dict[str, Any]:
    """
    Load a JSON configuration file.

    Args:
        file_path: Path to the JSON file

    Returns:
        Parsed configuration tree

    Raises:
        OSError: If the file cannot be read
        ValueError: If the file is not a JSON object
    """
    with open(file_path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Configuration file {file_path} must contain a JSON object")

    logger.info(f"Configuration loaded from {file_path}")
    return data


def _listify(node: Any) -> Any:
    """Turn dicts keyed by consecutive integers into lists, recursively."""
    if not isinstance(node, dict):
        return node

    converted = {key: _listify(value) for key, value in node.items()}
    if converted and all(key.isdigit() for key in converted):
        indices = sorted(int(key) for key in converted)
        if indices == list(range(len(indices))):
            return [converted[str(index)] for index in indices]
    return converted


def expand_flat_keys(flat: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Expand ``"A:B:C": value`` keys into a nested tree.

    Numeric segments become list indices, so ``"SupportedFileTypes:0"``
    yields a list. Keys without a delimiter are kept as they are.

    Args:
        flat: Mapping with delimiter-separated keys

    Returns:
        Nested configuration tree

    Raises:
        ValueError: If a key is both a value and a section
    """
    tree: Dict[str, Any] = {}
    for key, value in flat.items():
        parts = str(key).split(KEY_DELIMITER)
        node = tree
        for part in parts[:-1]:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise ValueError(f"Configuration key '{key}' conflicts with a value at '{part}'")
            node = child
        existing = node.get(parts[-1])
        if isinstance(existing, dict) and isinstance(value, Mapping):
            existing.update(copy.deepcopy(dict(value)))
            continue
        if isinstance(existing, dict):
            raise ValueError(f"Configuration key '{key}' conflicts with an existing section")
        node[parts[-1]] = copy.deepcopy(value)

    return _listify(tree)


def get_section(configuration: Mapping[str, Any], name: str) -> Optional[Mapping[str, Any]]:
    """
    Get a configuration section by name, ignoring case.

    Nested sections can be addressed with ``:`` (``"App:FileValidator"``).
    Flat ``:``-delimited keys in the configuration are expanded first.

    Args:
        configuration: Configuration tree
        name: Section name

    Returns:
        The section or None if absent
    """
    if any(KEY_DELIMITER in str(key) for key in configuration):
        configuration = expand_flat_keys(configuration)

    current: Any = configuration
    for part in name.split(KEY_DELIMITER):
        if not isinstance(current, Mapping):
            return None
        current = get_case_insensitive(current, part)
        if current is None:
            return None

    if not isinstance(current, Mapping):
        raise ValueError(f"Configuration section '{name}' must be an object")
    return current
