"""
Registration descriptor naming a scanner implementation and its options source.
"""

import logging
from typing import Any, Callable, Mapping, Optional

from .registry import ScannerPlugin, options_type_from_bases, qualified_name

logger = logging.getLogger(__name__)

# Configuration keys of a scanner section
SCANNER_TYPE_KEY = 'ScannerType'
OPTIONS_KEY = 'Options'


class ScannerRegistration:
    """
    Registration information for an antimalware scanner.

    Carries the scanner identity and at most one options source: a pre-built
    options value, a raw configuration subtree, or nothing. A live scanner
    instance may be supplied instead, bypassing identity resolution.
    """

    def __init__(self, scanner_type: str = "", options_instance: Any = None,
                 options_configuration: Optional[Mapping[str, Any]] = None,
                 instance: Any = None):
        """
        Initialize a scanner registration.

        Args:
            scanner_type: Plugin name or qualified class name of the scanner
            options_instance: Pre-built options value
            options_configuration: Raw options subtree bound at resolution time
            instance: Pre-built scanner instance
        """
        self._type: Optional[type] = None
        self._plugin: Optional[ScannerPlugin] = None
        self.scanner_type = scanner_type
        self.options_instance = options_instance
        self.options_configuration = options_configuration
        self.instance = instance

    @property
    def scanner_type(self) -> str:
        """Plugin name or qualified class name of the scanner."""
        return self._scanner_type

    @scanner_type.setter
    def scanner_type(self, value: str) -> None:
        # A new identity invalidates the type handle and the memoized plugin
        self._scanner_type = value
        self._type = None
        self._plugin = None

    @property
    def type(self) -> Optional[type]:
        """Implementation class, when known from a type handle or a previous resolution."""
        if self._type is None and self._plugin is not None:
            self._type = self._plugin.scanner_type
        return self._type

    @type.setter
    def type(self, value: type) -> None:
        # Setting the identity keeps any configured options
        self.scanner_type = qualified_name(value)
        self._type = value

    @property
    def resolved_plugin(self) -> Optional[ScannerPlugin]:
        """Plugin memoized by the last successful resolution."""
        return self._plugin

    def remember(self, plugin: ScannerPlugin) -> ScannerPlugin:
        """Memoize a resolved plugin."""
        self._plugin = plugin
        self._type = plugin.scanner_type
        return plugin

    @classmethod
    def create(cls, scanner_cls: type, options: Any = None,
               configure: Optional[Callable[[Any], None]] = None,
               options_type: Optional[type] = None) -> 'ScannerRegistration':
        """
        Create a registration for a scanner class and its options.

        Either pass a ready ``options`` value, or a ``configure`` callback that
        receives a default instance of ``options_type`` (or the options type the
        class declares) and mutates it.

        Args:
            scanner_cls: Scanner implementation class
            options: Scanner options
            configure: Callback configuring default options
            options_type: Options type used with ``configure``

        Returns:
            Scanner registration
        """
        if configure is not None:
            if options is None:
                target_type = options_type or ScannerPlugin.from_type(scanner_cls).options_type
                if target_type is None:
                    target_type = options_type_from_bases(scanner_cls)
                if target_type is None:
                    raise TypeError(
                        f"Cannot configure options for '{scanner_cls.__name__}': no options type declared"
                    )
                options = target_type()
            configure(options)

        registration = cls(options_instance=options)
        registration.type = scanner_cls
        return registration

    @classmethod
    def from_instance(cls, scanner: Any) -> 'ScannerRegistration':
        """
        Create a registration for an already constructed scanner.

        Args:
            scanner: Scanner instance

        Returns:
            Scanner registration
        """
        registration = cls(scanner_type=qualified_name(type(scanner)), instance=scanner)
        registration._type = type(scanner)
        return registration

    @classmethod
    def from_section(cls, section: Optional[Mapping[str, Any]]) -> Optional['ScannerRegistration']:
        """
        Create a registration from a ``{"ScannerType": ..., "Options": {...}}`` section.

        Keys are matched case-insensitively.

        Args:
            section: Configuration subtree, None when no scanner is configured

        Returns:
            Scanner registration or None
        """
        if section is None:
            return None
        if isinstance(section, ScannerRegistration):
            return section
        if not isinstance(section, Mapping):
            raise TypeError(f"Scanner section must be a mapping, got {type(section).__name__}")

        lowered = {str(key).lower(): value for key, value in section.items()}
        scanner_type = str(lowered.get(SCANNER_TYPE_KEY.lower()) or "").strip()
        options = lowered.get(OPTIONS_KEY.lower())
        if not scanner_type and (options is None or (isinstance(options, Mapping) and not options)):
            logger.debug("Scanner section has no scanner type or options, no scanner configured")
            return None
        if options is not None and not isinstance(options, Mapping):
            raise TypeError(f"Scanner options for '{scanner_type}' must be a mapping")

        logger.debug(f"Read scanner registration from configuration: {scanner_type}")
        return cls(scanner_type=scanner_type, options_configuration=options)

    def __repr__(self) -> str:
        source = "instance" if self.instance is not None else (
            "options" if self.options_instance is not None else (
                "configuration" if self.options_configuration is not None else "none"))
        return f"ScannerRegistration(scanner_type={self.scanner_type!r}, source={source})"
