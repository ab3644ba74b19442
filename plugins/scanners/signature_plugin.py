"""
Signature scanner plugin.
Flags files whose leading bytes contain any configured byte signature.
"""

import logging
from dataclasses import dataclass, field
from typing import BinaryIO, List

from interfaces import IConfigurableAntimalwareScanner
from plugins.registry import scanner_plugin
from utils.byte_size import megabytes

logger = logging.getLogger(__name__)

# EICAR anti-malware test file marker
EICAR_SIGNATURE = "EICAR-STANDARD-ANTIVIRUS-TEST-FILE"


@dataclass
class SignatureScannerOptions:
    """Options for the signature scanner."""
    signatures: List[str] = field(default_factory=lambda: [EICAR_SIGNATURE])
    max_scan_bytes: int = megabytes(1)
    case_sensitive: bool = True


@scanner_plugin(name="signature", options_type=SignatureScannerOptions, aliases=["SignatureScanner"])
class SignatureScanner(IConfigurableAntimalwareScanner[SignatureScannerOptions]):
    """Scanner matching raw byte signatures in file content."""

    def __init__(self, options: SignatureScannerOptions):
        """
        Initialize signature scanner.

        Args:
            options: Signature scanner options

        Raises:
            ValueError: If max_scan_bytes is not positive
        """
        if options.max_scan_bytes <= 0:
            raise ValueError("max_scan_bytes must be greater than 0")
        self._options = options
        self._signatures = [
            signature.encode('utf-8') if options.case_sensitive else signature.lower().encode('utf-8')
            for signature in options.signatures if signature
        ]

    @property
    def options(self) -> SignatureScannerOptions:
        return self._options

    def is_clean(self, content: BinaryIO, file_name: str) -> bool:
        data = content.read(self._options.max_scan_bytes)
        if not self._options.case_sensitive:
            data = data.lower()

        for signature in self._signatures:
            if signature in data:
                logger.warning(f"SignatureScanner: signature match in {file_name}")
                return False
        return True
