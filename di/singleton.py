"""
Once-initialized handle for lazily constructed singletons.
"""

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar('T')


class SingletonHandle(Generic[T]):
    """
    Holds a singleton built by a factory on first access.

    Concurrent first accesses construct exactly once and all observe the same
    instance. A factory that raises leaves the handle empty.
    """

    def __init__(self, factory: Callable[[], T]):
        self._factory = factory
        self._lock = threading.Lock()
        self._instance: Optional[T] = None
        self._initialized = False

    @classmethod
    def of(cls, instance: T) -> 'SingletonHandle[T]':
        """Create an already-initialized handle."""
        handle = cls(lambda: instance)
        handle._instance = instance
        handle._initialized = True
        return handle

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def get(self) -> T:
        """
        Return the singleton, constructing it on first call.

        Raises:
            Exception: Whatever the factory raises
        """
        if self._initialized:
            return self._instance

        with self._lock:
            if not self._initialized:
                self._instance = self._factory()
                self._initialized = True
        return self._instance
