"""
Abstract interfaces for pluggable file validator components.
Provides contracts for dependency injection and the plugin system.
"""

from .iantimalware_scanner import IAntimalwareScanner, IConfigurableAntimalwareScanner, TOptions

__all__ = [
    'IAntimalwareScanner',
    'IConfigurableAntimalwareScanner',
    'TOptions'
]
