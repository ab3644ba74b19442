"""
Materializes scanner options from a pre-built value or a raw configuration subtree.
"""

import dataclasses
import logging
import types
from typing import Any, Dict, Mapping, Optional, Tuple, Union, get_args, get_origin, get_type_hints, ClassVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from plugins.registration import ScannerRegistration
from utils.helpers import normalize_key
from .capability_validator import ScannerCapability
from .exceptions import OptionsBindingFailedError, OptionsTypeMissingError

logger = logging.getLogger(__name__)


def _bindable_fields(options_type: type) -> Dict[str, Tuple[str, Any]]:
    """Map normalized configuration keys to (attribute name, annotation)."""
    fields: Dict[str, Tuple[str, Any]] = {}

    if issubclass(options_type, BaseModel):
        for name, info in options_type.model_fields.items():
            fields[normalize_key(name)] = (name, info.annotation)
            if info.alias:
                fields[normalize_key(info.alias)] = (name, info.annotation)
        return fields

    hints = get_type_hints(options_type)
    if dataclasses.is_dataclass(options_type):
        for f in dataclasses.fields(options_type):
            if f.init:
                fields[normalize_key(f.name)] = (f.name, hints.get(f.name, Any))
        return fields

    for name, annotation in hints.items():
        if name.startswith('_') or get_origin(annotation) is ClassVar or annotation is ClassVar:
            continue
        fields[normalize_key(name)] = (name, annotation)
    return fields


def _is_text_field(annotation: Any) -> bool:
    """Whether a field holds a str, optionally None."""
    if annotation is str:
        return True
    if get_origin(annotation) in (Union, getattr(types, "UnionType", Union)):
        return tuple(arg for arg in get_args(annotation) if arg is not type(None)) == (str,)
    return False


def _coerce_leaf(annotation: Any, value: Any) -> Any:
    """Render a number or boolean as text when the field holds a str."""
    if isinstance(value, (bool, int, float)) and _is_text_field(annotation):
        return str(value)
    return value


def bind_options(options_type: type, raw: Mapping[str, Any]) -> Any:
    """
    Bind a raw configuration subtree onto a default instance of an options type.

    Keys match field names and aliases case-insensitively, ignoring ``_`` and
    ``-``, so ``OptionA`` binds ``option_a``. Unknown keys are ignored and
    unspecified fields keep their defaults. Values are coerced with pydantic's
    lax validation (``"123"`` binds to an ``int`` field, ``123`` to a ``str``
    field).

    Args:
        options_type: Dataclass, pydantic model or annotated plain class
        raw: Configuration subtree

    Returns:
        Bound options instance

    Raises:
        OptionsBindingFailedError: If the default instance cannot be created
            or a value cannot be coerced to its field's type
    """
    type_name = options_type.__name__
    try:
        default = options_type()
    except Exception as e:
        raise OptionsBindingFailedError(
            type_name, None, f"could not create a default options instance ({e})"
        ) from e

    fields = _bindable_fields(options_type)
    updates: Dict[str, Any] = {}
    for key, value in raw.items():
        target = fields.get(normalize_key(str(key)))
        if target is None:
            logger.debug(f"Ignoring unknown option '{key}' for {type_name}")
            continue

        name, annotation = target
        try:
            updates[name] = TypeAdapter(annotation).validate_python(_coerce_leaf(annotation, value))
        except ValidationError as e:
            reason = "; ".join(error['msg'] for error in e.errors())
            logger.error(f"Option '{key}' of {type_name} rejected value {value!r}: {reason}")
            raise OptionsBindingFailedError(type_name, str(key), reason) from e

    if isinstance(default, BaseModel):
        return default.model_copy(update=updates)
    if dataclasses.is_dataclass(default):
        return dataclasses.replace(default, **updates)
    for name, value in updates.items():
        setattr(default, name, value)
    return default


class OptionsMaterializer:
    """Produces the options value a scanner is constructed with."""

    def materialize(self, registration: ScannerRegistration,
                    capability: ScannerCapability) -> Optional[Any]:
        """
        Materialize options for a validated scanner.

        A pre-built options value always wins over a raw configuration subtree.

        Args:
            registration: Scanner registration
            capability: Validated capability with its required options type

        Returns:
            Options value, or None when the registration carries no options

        Raises:
            OptionsTypeMissingError: If raw configuration is present but the
                scanner declares no options type
            OptionsBindingFailedError: If binding the raw configuration fails
        """
        if registration.options_instance is not None:
            logger.debug(f"Using pre-built options for {capability.type_name}")
            return registration.options_instance

        if registration.options_configuration is None:
            return None

        if capability.options_type is None:
            logger.error(f"Scanner {capability.type_name} declares no options type")
            raise OptionsTypeMissingError(capability.type_name)

        binder = capability.plugin.bind or bind_options
        try:
            options = binder(capability.options_type, registration.options_configuration)
        except OptionsBindingFailedError:
            raise
        except Exception as e:
            raise OptionsBindingFailedError(capability.options_type.__name__, None, str(e)) from e

        logger.info(f"Bound {capability.options_type.__name__} from configuration for {capability.plugin.name}")
        return options
