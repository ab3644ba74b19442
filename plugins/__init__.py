"""
Plugin system for scanner registration, discovery and configuration.
"""

from .registry import (
    ScannerPlugin, ScannerPluginRegistry, scanner_plugin,
    create_default_registry, options_type_from_bases, qualified_name
)
from .registration import ScannerRegistration

__all__ = [
    'ScannerPlugin',
    'ScannerPluginRegistry',
    'ScannerRegistration',
    'scanner_plugin',
    'create_default_registry',
    'options_type_from_bases',
    'qualified_name'
]
