"""Core value objects, blueprints and utilities.

Every provider strategy implements the blueprints defined here. Import
them to type-hint your own code or to register a custom provider.
"""

from .clock import Clock, SystemClock, FixedClock, CachedClock
from .expiry import ExpiryPolicy
from .models import (
    Credentials,
    OperationKind,
    SignedRequest,
    SigningOperation,
    TimeWindow,
)
from .strategy import (
    AssemblerBlueprint,
    CanonicalizationBlueprint,
    SignatureBlueprint,
    SignerStrategy,
)
from .supported_providers import existing_providers, existing_operations


__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "CachedClock",
    "ExpiryPolicy",
    "Credentials",
    "OperationKind",
    "SignedRequest",
    "SigningOperation",
    "TimeWindow",
    "AssemblerBlueprint",
    "CanonicalizationBlueprint",
    "SignatureBlueprint",
    "SignerStrategy",
    "existing_providers",
    "existing_operations",
]
