"""
Human-readable byte size parsing.
Sizes use binary multiples: 1KB = 1024 bytes, 1MB = 1024 * 1024 bytes.
"""

import re

BYTES_PER_KILOBYTE = 1024

_UNIT_EXPONENTS = {
    'B': 0,
    'K': 1, 'KB': 1, 'KIB': 1,
    'M': 2, 'MB': 2, 'MIB': 2,
    'G': 3, 'GB': 3, 'GIB': 3,
    'T': 4, 'TB': 4, 'TIB': 4,
    'P': 5, 'PB': 5, 'PIB': 5
}

_SIZE_PATTERN = re.compile(r'^\s*(?P<value>\d+(?:\.\d+)?)\s*(?P<unit>[A-Za-z]*)\s*$')


def megabytes(value: float) -> int:
    return int(value * BYTES_PER_KILOBYTE ** 2)


def parse_byte_size(text: str) -> int:
    """
    Parse a human-readable size such as ``"25MB"``, ``"1.5 GB"`` or ``"512"``.

    Units are case-insensitive; a bare number is a byte count.

    Args:
        text: Size string

    Returns:
        Size in bytes

    Raises:
        ValueError: If the string is not a valid size
    """
    if text is None:
        raise ValueError("Byte size must not be empty")

    match = _SIZE_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Invalid byte size '{text}'")

    unit = match.group('unit').upper() or 'B'
    if unit not in _UNIT_EXPONENTS:
        raise ValueError(f"Unknown byte size unit '{match.group('unit')}' in '{text}'")

    return int(float(match.group('value')) * BYTES_PER_KILOBYTE ** _UNIT_EXPONENTS[unit])
