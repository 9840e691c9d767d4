"""AWS S3 signing strategies."""

from .assembler import S3HeaderAssembler, S3V2QueryAssembler, S3V4QueryAssembler
from .canonical import S3V2Canonicalizer, S3V2QueryCanonicalizer, S3V4QueryCanonicalizer
from .signature import HmacSha1Signature, SigV4Signature

__all__ = [
    "S3HeaderAssembler",
    "S3V2QueryAssembler",
    "S3V4QueryAssembler",
    "S3V2Canonicalizer",
    "S3V2QueryCanonicalizer",
    "S3V4QueryCanonicalizer",
    "HmacSha1Signature",
    "SigV4Signature",
]
