"""Azure Blob Storage signing strategies."""

from .assembler import AzureSasAssembler
from .canonical import AzureSasCanonicalizer
from .signature import HmacSha256Signature

__all__ = [
    "AzureSasAssembler",
    "AzureSasCanonicalizer",
    "HmacSha256Signature",
]
