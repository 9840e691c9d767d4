"""
Blobsigner exception hierarchy.

Every failure the signing engine can report inherits from
:class:`BlobSignerError`. All of them are raised synchronously at call
time and describe programming or configuration errors; none is retried.
"""


# ── Base ──────────────────────────────────────────────────────────────
class BlobSignerError(Exception):
    """Root exception for all Blobsigner errors."""


# ── Inputs ────────────────────────────────────────────────────────────
class InvalidDurationError(BlobSignerError):
    """Caller-supplied validity window is zero, negative or not an integer."""


class InvalidKeyError(BlobSignerError):
    """Secret key material is empty or cannot be decoded."""


class MalformedResourceError(BlobSignerError):
    """Resource path violates the provider's addressing rules."""


# ── Dispatch ──────────────────────────────────────────────────────────
class UnsupportedProviderError(BlobSignerError):
    """No signing strategy is registered for the provider identifier."""


class UnsupportedOperationError(BlobSignerError):
    """Operation kind has no permission mapping for the target provider."""
