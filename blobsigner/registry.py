"""Provider signer registry.

Provides :class:`ProviderSignerRegistry` and the module-level :func:`sign`,
the single entry point for turning an operation and credentials into a
:class:`~blobsigner.base.models.SignedRequest`. Dispatch goes through a
table of strategy triples; adding a provider means registering a new
triple, never editing an existing one.
"""

from __future__ import annotations

import uuid
from functools import lru_cache
from typing import Any, Callable

from blobsigner.base import (
    Clock,
    Credentials,
    ExpiryPolicy,
    SignedRequest,
    SignerStrategy,
    SigningOperation,
    SystemClock,
    existing_providers,
)
from blobsigner.base.config import EngineConfig, validate_config
from blobsigner.base.exceptions import BlobSignerError, UnsupportedProviderError
from blobsigner.base.logger import signer_logger
from blobsigner.azure.factory import STRATEGY_REGISTRY as AZURE_STRATEGIES
from blobsigner.aws.factory import STRATEGY_REGISTRY as AWS_STRATEGIES


# Flat builder registry: provider id -> builder(validated config)
_BUILDER_REGISTRY: dict[str, Callable[[Any], SignerStrategy]] = {
    **AZURE_STRATEGIES,
    **AWS_STRATEGIES,
}

ENGINE_CONFIG_KEY = "engine"


class ProviderSignerRegistry:
    """Dispatches signing calls to the strategy registered for a provider.

    The registry holds no mutable per-call state, so one instance can be
    shared across threads.

    Attributes:
        clock: Source of the signing instant.
        expiry: Policy resolving the validity window.
    """

    def __init__(
        self,
        clock: Clock | None = None,
        expiry: ExpiryPolicy | None = None,
        config: dict[str, dict] | None = None,
    ) -> None:
        """Build every built-in strategy from its validated config.

        Args:
            clock: Clock to read "now" from; defaults to the system clock.
            expiry: Expiry policy; defaults to one built from the
                ``"engine"`` section of *config*.
            config: Per-provider raw settings keyed by provider id, plus an
                optional ``"engine"`` section.

        Raises:
            ValueError: If *config* names an unknown provider.
            pydantic.ValidationError: If a section is invalid.
        """
        config = dict(config or {})
        engine = EngineConfig(**config.pop(ENGINE_CONFIG_KEY, {}))
        for provider in config:
            if provider not in _BUILDER_REGISTRY:
                raise ValueError(f"No config model registered for provider: {provider}")

        self.clock = clock or SystemClock()
        self.expiry = expiry or ExpiryPolicy(engine.default_expiry_seconds)
        self._strategies: dict[str, SignerStrategy] = {
            provider: builder(validate_config(provider, config.get(provider)))
            for provider, builder in _BUILDER_REGISTRY.items()
        }

    def providers(self) -> list[str]:
        """Return the registered provider identifiers."""
        return sorted(self._strategies)

    def register(self, provider: str, strategy: SignerStrategy) -> None:
        """Add a provider.

        Raises:
            ValueError: If *provider* is already registered.
        """
        if provider in self._strategies:
            raise ValueError(f"Provider already registered: {provider}")
        self._strategies[provider] = strategy

    def sign(
        self,
        provider: existing_providers | str,
        operation: SigningOperation,
        credentials: Credentials,
        explicit_duration_seconds: int | None = None,
    ) -> SignedRequest:
        """
        Produce a signed request for *operation* under *credentials*.
        Args:
            provider: Registered provider identifier (e.g. 'azureblob').
            operation: The blob operation to authorize.
            credentials: Account identity and encoded secret.
            explicit_duration_seconds: Validity window; the policy default
                applies when omitted.
        Returns:
            The signed request descriptor.
        Raises:
            UnsupportedProviderError: If *provider* is not registered.
            UnsupportedOperationError: If the operation has no permission.
            InvalidDurationError: If the duration is not positive.
            InvalidKeyError: If the secret cannot be decoded.
            MalformedResourceError: If the resource path is invalid.
        """
        request_id = uuid.uuid4().hex[:12]
        log_context = {"provider": str(provider), "operation": operation.kind.value, "request_id": request_id}

        strategy = self._strategies.get(provider)
        if strategy is None:
            signer_logger.warning("Unsupported provider", **log_context)
            raise UnsupportedProviderError(f"Unsupported provider: {provider}")

        try:
            window = self.expiry.resolve(self.clock.now(), explicit_duration_seconds)
            permission = strategy.canonicalizer.permission_for(operation.kind)
            canonical = strategy.canonicalizer.build_canonical_string(
                operation, window, credentials.identity, permission
            )
            key = strategy.signature.decode_key(credentials.secret.get_secret_value())
            signature = strategy.signature.sign(canonical, key)
            signed = strategy.assembler.assemble(
                operation, window, signature, identity=credentials.identity, permission=permission
            )
        except BlobSignerError as e:
            signer_logger.warning("Signing failed", error_type=type(e).__name__, **log_context)
            raise

        signer_logger.debug(f"Signed request valid for {window.duration_seconds}s", **log_context)
        return signed


@lru_cache(maxsize=1)
def default_registry() -> ProviderSignerRegistry:
    """Shared registry using the system clock and default settings."""
    return ProviderSignerRegistry()


def sign(
    provider: existing_providers | str,
    operation: SigningOperation,
    credentials: Credentials,
    explicit_duration_seconds: int | None = None,
) -> SignedRequest:
    """Sign *operation* with the shared default registry.

    See :meth:`ProviderSignerRegistry.sign`.
    """
    return default_registry().sign(provider, operation, credentials, explicit_duration_seconds)
