"""
Exceptions raised while configuring the file validator and its scanner.
"""

from typing import Optional


class FileValidatorError(Exception):
    """Base exception for file validator configuration errors."""
    pass


class InvalidConfigurationError(FileValidatorError):
    """Raised when the finalized file validator configuration is invalid."""
    pass


class ScannerRegistrationError(FileValidatorError):
    """Base exception for errors while resolving or building a scanner."""
    pass


class UnresolvableTypeError(ScannerRegistrationError):
    """Raised when a scanner identity does not map to a known implementation."""

    def __init__(self, identity: str):
        self.identity = identity
        super().__init__(f"The specified scanner type '{identity}' could not be resolved.")


class ContractNotSatisfiedError(ScannerRegistrationError):
    """Raised when a scanner type or instance lacks the required contract."""

    def __init__(self, type_name: str, contract_name: str):
        self.type_name = type_name
        self.contract_name = contract_name
        super().__init__(
            f"The specified scanner type '{type_name}' does not implement the '{contract_name}' interface."
        )


class OptionsTypeMissingError(ScannerRegistrationError):
    """Raised when raw options are configured for a scanner without an options type."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(
            f"Scanner '{type_name}' must declare an options type to be configured from configuration."
        )


class OptionsBindingFailedError(ScannerRegistrationError):
    """Raised when a configuration value cannot be bound onto an options field."""

    def __init__(self, options_type_name: str, key: Optional[str], reason: str):
        self.options_type_name = options_type_name
        self.key = key
        target = f"configuration key '{key}'" if key is not None else "configuration"
        super().__init__(f"Could not bind {target} onto options type '{options_type_name}': {reason}")


class ConstructionFailedError(ScannerRegistrationError):
    """Raised when a scanner implementation cannot be constructed."""

    def __init__(self, type_name: str, reason: str):
        self.type_name = type_name
        super().__init__(f"Could not construct scanner '{type_name}': {reason}")
