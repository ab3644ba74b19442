"""
Scanner resolution pipeline: type resolution, capability validation,
options materialization and instance construction.
"""

from .exceptions import (
    FileValidatorError, InvalidConfigurationError, ScannerRegistrationError,
    UnresolvableTypeError, ContractNotSatisfiedError, OptionsTypeMissingError,
    OptionsBindingFailedError, ConstructionFailedError
)
from .type_resolver import TypeResolver
from .capability_validator import CapabilityValidator, ScannerCapability
from .options_materializer import OptionsMaterializer, bind_options
from .instance_builder import InstanceBuilder
from .scanner_resolver import ScannerResolver, PreparedScanner

__all__ = [
    'FileValidatorError',
    'InvalidConfigurationError',
    'ScannerRegistrationError',
    'UnresolvableTypeError',
    'ContractNotSatisfiedError',
    'OptionsTypeMissingError',
    'OptionsBindingFailedError',
    'ConstructionFailedError',
    'TypeResolver',
    'CapabilityValidator',
    'ScannerCapability',
    'OptionsMaterializer',
    'bind_options',
    'InstanceBuilder',
    'ScannerResolver',
    'PreparedScanner'
]
