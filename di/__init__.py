"""
Dependency injection container and file validator registration.
"""

from .container import DIContainer
from .singleton import SingletonHandle

__all__ = ['DIContainer', 'SingletonHandle']
