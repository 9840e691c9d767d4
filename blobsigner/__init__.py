"""Blobsigner — pre-signed request engine for cloud blob storage.

Entry point for the library. Import :func:`sign` to authorize a blob
operation with a single call::

    from blobsigner import Credentials, SigningOperation, sign

    request = sign(
        "azureblob",
        SigningOperation.get("container", "name"),
        Credentials(identity="account", secret="<base64 key>"),
    )
"""

from .base import (
    CachedClock,
    Credentials,
    ExpiryPolicy,
    FixedClock,
    OperationKind,
    SignedRequest,
    SignerStrategy,
    SigningOperation,
    SystemClock,
    TimeWindow,
)
from .registry import ProviderSignerRegistry, sign

__all__ = [
    "CachedClock",
    "Credentials",
    "ExpiryPolicy",
    "FixedClock",
    "OperationKind",
    "SignedRequest",
    "SignerStrategy",
    "SigningOperation",
    "SystemClock",
    "TimeWindow",
    "ProviderSignerRegistry",
    "sign",
]
