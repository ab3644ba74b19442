"""
File validator settings.

``FileValidatorSettings`` is the loose, user-facing shape bound from code or a
configuration section; ``finalize_settings`` turns it into the validated
``FileValidatorConfiguration`` consumed by the file validator.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.exceptions import InvalidConfigurationError
from plugins.registration import ScannerRegistration
from utils.byte_size import parse_byte_size
from utils.helpers import normalize_key

logger = logging.getLogger(__name__)

# Sentinel meaning "no explicit file size limit"
UNSET_FILE_SIZE_LIMIT = -1


class FileValidatorSettings(BaseModel):
    """
    User-facing file validator settings.

    Field aliases follow the configuration file's PascalCase keys
    (``SupportedFileTypes``, ``UnitFileSizeLimit``, ``Scanner`` ...).
    """

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True, extra='ignore')

    supported_file_types: List[str] = Field(default_factory=list, alias='SupportedFileTypes')
    file_size_limit: int = Field(default=UNSET_FILE_SIZE_LIMIT, alias='FileSizeLimit')
    unit_file_size_limit: Optional[str] = Field(default=None, alias='UnitFileSizeLimit')
    throw_exception_on_invalid_file: bool = Field(default=True, alias='ThrowExceptionOnInvalidFile')
    scanner: Optional[ScannerRegistration] = Field(default=None, alias='Scanner')

    @field_validator('scanner', mode='before')
    @classmethod
    def _parse_scanner(cls, value: Any) -> Optional[ScannerRegistration]:
        return ScannerRegistration.from_section(value)

    @classmethod
    def from_section(cls, section: Optional[Mapping[str, Any]]) -> 'FileValidatorSettings':
        """
        Bind settings from a configuration section, matching keys case-insensitively.

        Args:
            section: Configuration section, None for all defaults

        Returns:
            Bound settings

        Raises:
            InvalidConfigurationError: If a value has the wrong type
        """
        if section is None:
            return cls()

        keys: Dict[str, str] = {}
        for name, info in cls.model_fields.items():
            keys[normalize_key(name)] = info.alias or name
            if info.alias:
                keys[normalize_key(info.alias)] = info.alias

        data = {}
        for key, value in section.items():
            alias = keys.get(normalize_key(str(key)))
            if alias is not None:
                data[alias] = value

        try:
            return cls.model_validate(data)
        except (ValidationError, TypeError) as e:
            raise InvalidConfigurationError(f"Invalid file validator settings: {e}") from e


@dataclass
class FileValidatorConfiguration:
    """Finalized file validator configuration."""
    supported_file_types: List[str] = field(default_factory=list)
    file_size_limit: Optional[int] = None
    throw_exception_on_invalid_file: bool = True


class ConfigurationValidator:
    """Structural validation of a finalized configuration."""

    @staticmethod
    def validate(config: FileValidatorConfiguration) -> List[str]:
        """
        Collect validation errors.

        Args:
            config: Finalized configuration

        Returns:
            Human-readable reasons, empty when valid
        """
        errors = []
        if not config.supported_file_types:
            errors.append("At least one supported file type must be specified.")
        for file_type in config.supported_file_types:
            if not file_type or not file_type.strip():
                errors.append("Supported file types must not be empty.")
            elif not file_type.startswith('.'):
                errors.append(f"Supported file type '{file_type}' must start with a '.'.")
        if config.file_size_limit is not None and config.file_size_limit <= 0:
            errors.append(f"File size limit must be greater than 0, got {config.file_size_limit}.")
        return errors

    @staticmethod
    def throw_if_invalid(config: FileValidatorConfiguration) -> None:
        """
        Raise if the configuration is invalid.

        Raises:
            InvalidConfigurationError: With every reason found
        """
        errors = ConfigurationValidator.validate(config)
        if errors:
            raise InvalidConfigurationError(" ".join(errors))


def finalize_settings(settings: FileValidatorSettings) -> FileValidatorConfiguration:
    """
    Derive the finalized configuration from user-facing settings.

    The size limit resolves as: explicit ``file_size_limit`` (unless unset),
    then the parsed ``unit_file_size_limit``, then no limit.

    Args:
        settings: User-facing settings

    Returns:
        Finalized configuration (not yet validated)

    Raises:
        InvalidConfigurationError: If the unit size limit cannot be parsed
    """
    file_size_limit = None
    if settings.file_size_limit != UNSET_FILE_SIZE_LIMIT:
        file_size_limit = settings.file_size_limit
    elif settings.unit_file_size_limit and settings.unit_file_size_limit.strip():
        try:
            file_size_limit = parse_byte_size(settings.unit_file_size_limit)
        except ValueError as e:
            raise InvalidConfigurationError(f"Invalid unit file size limit: {e}") from e

    config = FileValidatorConfiguration(
        supported_file_types=list(settings.supported_file_types),
        file_size_limit=file_size_limit,
        throw_exception_on_invalid_file=settings.throw_exception_on_invalid_file
    )
    logger.debug(f"Finalized file validator configuration: {config}")
    return config
