"""
File validator service.
"""

from .file_validator import FileValidator

__all__ = ['FileValidator']
