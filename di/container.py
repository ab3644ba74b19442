"""
Dependency injection container for managing component lifecycles.
"""

import logging
import threading
from typing import Any, Callable, Dict, Optional, Type, TypeVar

from .singleton import SingletonHandle

logger = logging.getLogger(__name__)

T = TypeVar('T')


class DIContainer:
    """Dependency injection container for component management."""

    def __init__(self):
        """Initialize the DI container."""
        self._services: Dict[Type, Callable[[], Any]] = {}
        self._singletons: Dict[Type, SingletonHandle] = {}
        self._lock = threading.Lock()

    def register(self, interface: Type[T], implementation: Type[T],
                 singleton: bool = True) -> None:
        """
        Register a service implementation.

        Args:
            interface: Abstract interface type
            implementation: Concrete implementation type, constructed without arguments
            singleton: Whether to create as singleton
        """
        self.register_factory(interface, implementation, singleton=singleton)

    def register_factory(self, interface: Type[T], factory: Callable[[], T],
                         singleton: bool = True) -> None:
        """
        Register a factory function for service creation.

        Args:
            interface: Abstract interface type
            factory: Factory function that returns implementation
            singleton: Whether the factory runs once per container
        """
        with self._lock:
            self._unregister(interface)
            if singleton:
                self._singletons[interface] = SingletonHandle(factory)
            else:
                self._services[interface] = factory
        logger.debug(f"Registered {'singleton' if singleton else 'transient'} service {interface.__name__}")

    def register_instance(self, interface: Type[T], instance: T) -> None:
        """
        Register a pre-created instance.

        Args:
            interface: Abstract interface type
            instance: Pre-created instance
        """
        with self._lock:
            self._unregister(interface)
            self._singletons[interface] = SingletonHandle.of(instance)
        logger.debug(f"Registered instance for {interface.__name__}")

    def unregister(self, interface: Type[T]) -> bool:
        """
        Remove a service registration.

        Args:
            interface: Interface type to remove

        Returns:
            True if a registration was removed
        """
        with self._lock:
            return self._unregister(interface)

    def _unregister(self, interface: Type) -> bool:
        removed = self._singletons.pop(interface, None) is not None
        removed = self._services.pop(interface, None) is not None or removed
        return removed

    def resolve(self, interface: Type[T]) -> T:
        """
        Resolve a service implementation.

        Args:
            interface: Interface type to resolve

        Returns:
            Service implementation instance

        Raises:
            ValueError: If service not registered
        """
        handle = self._singletons.get(interface)
        if handle is not None:
            return handle.get()

        factory = self._services.get(interface)
        if factory is not None:
            return factory()

        raise ValueError(f"Service not registered: {interface}")

    def try_resolve(self, interface: Type[T]) -> Optional[T]:
        """
        Resolve a service, or return None when it is not registered.

        Args:
            interface: Interface type to resolve

        Returns:
            Service implementation instance or None
        """
        handle = self._singletons.get(interface)
        if handle is not None:
            return handle.get()

        factory = self._services.get(interface)
        return factory() if factory is not None else None

    def has_service(self, interface: Type[T]) -> bool:
        """
        Check if a service is registered.

        Args:
            interface: Interface type to check

        Returns:
            True if service is registered
        """
        return interface in self._singletons or interface in self._services

    def clear(self) -> None:
        """Clear all registered services."""
        with self._lock:
            self._services.clear()
            self._singletons.clear()
