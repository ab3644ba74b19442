"""
Plugin registry for explicit scanner registration and discovery.
"""

import importlib
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, get_args, get_origin

from interfaces import IConfigurableAntimalwareScanner

logger = logging.getLogger(__name__)

# Attribute set on classes marked with @scanner_plugin
PLUGIN_ATTRIBUTE = '__scanner_plugin__'

# Modules shipping the built-in scanner plugins
BUILTIN_PLUGIN_MODULES = {
    'null': 'plugins.scanners.null_plugin',
    'signature': 'plugins.scanners.signature_plugin'
}


def qualified_name(cls: type) -> str:
    """Return the fully qualified ``module.QualName`` of a class."""
    return f"{cls.__module__}.{cls.__qualname__}"


def options_type_from_bases(cls: type, refinement: type = IConfigurableAntimalwareScanner) -> Optional[type]:
    """
    Find the options type a class declares through a generic refinement base.

    ``class ClamScanner(IConfigurableAntimalwareScanner[ClamOptions])`` declares
    ``ClamOptions``. Unparameterized or TypeVar-parameterized bases declare nothing.

    Args:
        cls: Implementation class
        refinement: Generic contract carrying the options type parameter

    Returns:
        The options type or None
    """
    if not isinstance(cls, type):
        return None
    for klass in cls.__mro__:
        for base in vars(klass).get("__orig_bases__", ()):
            origin = get_origin(base)
            if not isinstance(origin, type) or not issubclass(origin, refinement):
                continue
            args = get_args(base)
            if len(args) == 1 and isinstance(args[0], type):
                return args[0]
    return None


@dataclass
class ScannerPlugin:
    """
    Capability descriptor for a scanner implementation.

    Attributes:
        name: Stable identifier used in configuration
        scanner_type: Implementation class
        factory: Callable building the scanner, ``factory(options)`` or ``factory()``;
            defaults to the implementation class
        options_type: Options record type the scanner is constructed with, if any
        bind: Optional ``bind(options_type, raw_config) -> options`` override
        description: Human-readable description
    """
    name: str
    scanner_type: type
    factory: Optional[Callable[..., Any]] = None
    options_type: Optional[type] = None
    bind: Optional[Callable[[type, Mapping[str, Any]], Any]] = None
    description: str = ""
    aliases: List[str] = field(default_factory=list)

    def __post_init__(self):
        if self.factory is None:
            self.factory = self.scanner_type

    @property
    def qualified_name(self) -> str:
        return qualified_name(self.scanner_type)

    @classmethod
    def from_type(cls, scanner_type: type) -> 'ScannerPlugin':
        """
        Build a descriptor for a class, honouring its @scanner_plugin marker.

        Args:
            scanner_type: Implementation class

        Returns:
            The class's declared plugin or a plain descriptor named after it
        """
        declared = vars(scanner_type).get(PLUGIN_ATTRIBUTE) if isinstance(scanner_type, type) else None
        if declared is not None:
            return declared
        return cls(name=qualified_name(scanner_type), scanner_type=scanner_type)


def scanner_plugin(name: Optional[str] = None, options_type: Optional[type] = None,
                   factory: Optional[Callable[..., Any]] = None,
                   bind: Optional[Callable[[type, Mapping[str, Any]], Any]] = None,
                   description: str = "", aliases: Optional[List[str]] = None):
    """
    Mark a class as a scanner plugin so registry discovery picks it up.

    Args:
        name: Identifier used in configuration, defaults to the class name
        options_type: Options record type passed to the constructor
        factory: Factory overriding the class constructor
        bind: Custom options binder
        description: Human-readable description
        aliases: Additional identifiers resolving to this plugin

    Returns:
        Class decorator
    """
    def decorator(cls: type) -> type:
        plugin = ScannerPlugin(
            name=name or cls.__name__,
            scanner_type=cls,
            factory=factory,
            options_type=options_type,
            bind=bind,
            description=description or (cls.__doc__ or "").strip().split("\n")[0],
            aliases=list(aliases or [])
        )
        setattr(cls, PLUGIN_ATTRIBUTE, plugin)
        return cls

    return decorator


class ScannerPluginRegistry:
    """Registry mapping stable identifiers to scanner plugin descriptors."""

    def __init__(self):
        """Initialize an empty plugin registry."""
        self._plugins: Dict[str, ScannerPlugin] = {}
        self._aliases: Dict[str, str] = {}

    @staticmethod
    def _key(identity: str) -> str:
        return identity.strip().lower()

    def register(self, plugin: ScannerPlugin) -> ScannerPlugin:
        """
        Register a scanner plugin.

        The plugin is reachable by its name, its aliases and the fully
        qualified name of its implementation class.

        Args:
            plugin: Plugin descriptor

        Returns:
            The registered plugin

        Raises:
            ValueError: If the name is already taken by another implementation
        """
        key = self._key(plugin.name)
        existing = self._plugins.get(key)
        if existing is not None and existing.scanner_type is not plugin.scanner_type:
            raise ValueError(
                f"Scanner plugin name '{plugin.name}' is already registered for {existing.qualified_name}"
            )

        self._plugins[key] = plugin
        for alias in [plugin.qualified_name, *plugin.aliases]:
            self._aliases[self._key(alias)] = key

        logger.info(f"Registered scanner plugin: {plugin.name} ({plugin.qualified_name})")
        return plugin

    def register_type(self, scanner_type: type, name: Optional[str] = None,
                      options_type: Optional[type] = None,
                      factory: Optional[Callable[..., Any]] = None,
                      bind: Optional[Callable[[type, Mapping[str, Any]], Any]] = None) -> ScannerPlugin:
        """
        Register an implementation class directly.

        Args:
            scanner_type: Implementation class
            name: Identifier, defaults to the class name
            options_type: Options record type passed to the constructor
            factory: Factory overriding the class constructor
            bind: Custom options binder

        Returns:
            The registered plugin
        """
        declared = vars(scanner_type).get(PLUGIN_ATTRIBUTE)
        plugin = ScannerPlugin(
            name=name or (declared.name if declared else scanner_type.__name__),
            scanner_type=scanner_type,
            factory=factory or (declared.factory if declared else None),
            options_type=options_type or (declared.options_type if declared else None),
            bind=bind or (declared.bind if declared else None),
            description=declared.description if declared else "",
            aliases=list(declared.aliases) if declared else []
        )
        return self.register(plugin)

    def unregister(self, name: str) -> bool:
        """
        Remove a scanner plugin.

        Args:
            name: Plugin name or alias

        Returns:
            True if a plugin was removed
        """
        key = self._aliases.get(self._key(name), self._key(name))
        plugin = self._plugins.pop(key, None)
        if plugin is None:
            return False

        self._aliases = {alias: target for alias, target in self._aliases.items() if target != key}
        logger.info(f"Unregistered scanner plugin: {plugin.name}")
        return True

    def get(self, identity: str) -> Optional[ScannerPlugin]:
        """
        Get a scanner plugin by name, alias or qualified class name.

        Args:
            identity: Plugin identifier (case-insensitive)

        Returns:
            Plugin descriptor or None
        """
        if not identity or not identity.strip():
            return None
        key = self._key(identity)
        if key in self._plugins:
            return self._plugins[key]
        target = self._aliases.get(key)
        return self._plugins.get(target) if target else None

    def get_by_type(self, scanner_type: type) -> Optional[ScannerPlugin]:
        """
        Get the scanner plugin registered for an implementation class.

        Args:
            scanner_type: Implementation class

        Returns:
            Plugin descriptor or None
        """
        for plugin in self._plugins.values():
            if plugin.scanner_type is scanner_type:
                return plugin
        return None

    def has_plugin(self, identity: str) -> bool:
        """Check if a plugin is registered under the given identifier."""
        return self.get(identity) is not None

    def list_plugins(self) -> List[str]:
        """
        List registered scanner plugins.

        Returns:
            List of plugin names
        """
        return [plugin.name for plugin in self._plugins.values()]

    def discover(self, module_paths: Iterable[str]) -> List[str]:
        """
        Import modules and register every @scanner_plugin class they define.

        Args:
            module_paths: Dotted module paths

        Returns:
            Names of the plugins registered

        Raises:
            ImportError: If a module cannot be imported
        """
        registered = []
        for module_path in module_paths:
            module = importlib.import_module(module_path)
            for attr in vars(module).values():
                if not isinstance(attr, type) or attr.__module__ != module.__name__:
                    continue
                plugin = vars(attr).get(PLUGIN_ATTRIBUTE)
                if plugin is not None:
                    registered.append(self.register(plugin).name)
            logger.debug(f"Discovered scanner plugins in {module_path}")

        return registered

    def load_builtin_plugins(self) -> List[str]:
        """Register the scanner plugins shipped with the package."""
        return self.discover(BUILTIN_PLUGIN_MODULES.values())

    def clear(self) -> None:
        """Remove all registered plugins."""
        self._plugins.clear()
        self._aliases.clear()


def create_default_registry(extra_modules: Optional[Iterable[str]] = None) -> ScannerPluginRegistry:
    """
    Create a registry holding the built-in plugins and any extra plugin modules.

    Args:
        extra_modules: Additional module paths to discover, defaults to
            the ``SCANNER_PLUGIN_MODULES`` setting

    Returns:
        Populated plugin registry
    """
    if extra_modules is None:
        from config.settings import settings
        extra_modules = settings.scanner_plugin_modules()

    registry = ScannerPluginRegistry()
    registry.load_builtin_plugins()
    registry.discover(extra_modules)
    logger.info("Plugin discovery completed")
    return registry
