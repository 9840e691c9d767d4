"""Signing strategy blueprints.

A provider is supported by registering one :class:`SignerStrategy`: a
canonicalizer, a signature computer and a request assembler. Each
provider implements the three blueprints below; nothing else in the
engine branches on the provider.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import NamedTuple

from blobsigner.base.encoding import b64, rfc1123
from blobsigner.base.exceptions import MalformedResourceError, UnsupportedOperationError
from blobsigner.base.models import OperationKind, SignedRequest, SigningOperation, TimeWindow


# Read/write/delete; never caller-overridable.
DEFAULT_PERMISSIONS: dict[OperationKind, str] = {
    OperationKind.GET: "r",
    OperationKind.PUT: "w",
    OperationKind.DELETE: "d",
}


def request_headers(operation: SigningOperation, window: TimeWindow) -> dict[str, str]:
    """Headers that must accompany every signed request.

    Caller-supplied headers come first. The engine-managed ``Date`` and
    payload headers replace caller headers of the same name, compared
    case-insensitively, so the request carries exactly one value for each.
    """
    managed = {"Date": rfc1123(window.signed_at)}
    if operation.payload_length is not None:
        managed["Content-Length"] = str(operation.payload_length)
    if operation.content_type:
        managed["Content-Type"] = operation.content_type
    if operation.content_md5 is not None:
        managed["Content-MD5"] = b64(operation.content_md5)

    overridden = {name.lower() for name in managed}
    headers = {name: value for name, value in operation.headers.items() if name.lower() not in overridden}
    headers.update(managed)
    return headers


def header_value(headers: dict[str, str], name: str) -> str:
    """Case-insensitive header lookup; ``""`` when absent."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


class CanonicalizationBlueprint(ABC):
    """Builds the exact string-to-sign for one protocol variant."""

    permissions: dict[OperationKind, str] = DEFAULT_PERMISSIONS

    def permission_for(self, kind: OperationKind) -> str:
        """Map an operation kind to its single-character permission token.

        Raises:
            UnsupportedOperationError: If *kind* has no mapping.
        """
        try:
            return self.permissions[kind]
        except KeyError:
            raise UnsupportedOperationError(
                f"Operation {kind!r} cannot be signed by {type(self).__name__}"
            ) from None

    @staticmethod
    def require_blob(operation: SigningOperation) -> None:
        """Reject paths that do not name both a container and a blob.

        Raises:
            MalformedResourceError: If either part is empty.
        """
        if not operation.container:
            raise MalformedResourceError(f"Missing container in resource path {operation.resource_path!r}")
        if not operation.blob_name:
            raise MalformedResourceError(f"Missing blob name in resource path {operation.resource_path!r}")

    @abstractmethod
    def build_canonical_string(
        self,
        operation: SigningOperation,
        window: TimeWindow,
        identity: str,
        permission: str,
    ) -> str:
        """Return the newline-delimited string-to-sign.

        Args:
            operation: The operation being signed.
            window: Resolved validity window.
            identity: Account identifier.
            permission: Token from :meth:`permission_for`.
        """
        pass


class SignatureBlueprint(ABC):
    """Keyed hash over a canonical string."""

    @abstractmethod
    def decode_key(self, secret: str) -> bytes:
        """Decode encoded secret material into raw key bytes.

        Raises:
            InvalidKeyError: If the secret is empty or undecodable.
        """
        pass

    @abstractmethod
    def sign(self, canonical: str, key: bytes) -> str:
        """Return the encoded signature of *canonical* under *key*."""
        pass


class AssemblerBlueprint(ABC):
    """Merges a signature into the final request descriptor."""

    @staticmethod
    def common_headers(operation: SigningOperation, window: TimeWindow) -> dict[str, str]:
        return request_headers(operation, window)

    @abstractmethod
    def assemble(
        self,
        operation: SigningOperation,
        window: TimeWindow,
        signature: str,
        *,
        identity: str,
        permission: str,
    ) -> SignedRequest:
        """Build the :class:`SignedRequest` carrying *signature*."""
        pass


class SignerStrategy(NamedTuple):
    """The strategy triple registered for one provider."""

    canonicalizer: CanonicalizationBlueprint
    signature: SignatureBlueprint
    assembler: AssemblerBlueprint
