"""
Built-in antimalware scanner plugins.
"""

from .null_plugin import NullScanner
from .signature_plugin import SignatureScanner, SignatureScannerOptions

__all__ = ['NullScanner', 'SignatureScanner', 'SignatureScannerOptions']
