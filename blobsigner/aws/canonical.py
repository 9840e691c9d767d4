"""S3 strings-to-sign for signature v2 (header and query) and v4 (query)."""

from __future__ import annotations

import hashlib

from blobsigner.aws.addressing import locate
from blobsigner.base.config import S3Config
from blobsigner.base.encoding import amz_date, encode_path, encode_query, rfc1123
from blobsigner.base.exceptions import InvalidDurationError
from blobsigner.base.models import SigningOperation, TimeWindow
from blobsigner.base.strategy import CanonicalizationBlueprint, header_value, request_headers

V4_ALGORITHM = "AWS4-HMAC-SHA256"
V4_MAX_EXPIRES = 7 * 24 * 3600
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"


def canonical_amz_headers(headers: dict[str, str]) -> str:
    """Lowercased, sorted ``x-amz-*`` headers, one ``name:value\\n`` each.

    Repeated names are comma-joined and internal whitespace is folded.
    """
    amz: dict[str, str] = {}
    for name, value in headers.items():
        key = name.lower()
        if not key.startswith("x-amz-"):
            continue
        folded = " ".join(value.split())
        amz[key] = f"{amz[key]},{folded}" if key in amz else folded
    return "".join(f"{key}:{amz[key]}\n" for key in sorted(amz))


class S3V2Canonicalizer(CanonicalizationBlueprint):
    """Signature v2 with the request date on the fourth line (header auth)."""

    def __init__(self, config: S3Config) -> None:
        self.config = config

    def date_field(self, window: TimeWindow) -> str:
        return rfc1123(window.signed_at)

    def build_canonical_string(
        self,
        operation: SigningOperation,
        window: TimeWindow,
        identity: str,
        permission: str,
    ) -> str:
        self.require_blob(operation)
        # v2 signs the path exactly as it appears on the wire
        resource = encode_path(f"/{operation.resource_path}")
        # sign the payload headers exactly as they will be sent
        headers = request_headers(operation, window)
        fields = [
            operation.kind.value,
            header_value(headers, "Content-MD5"),
            header_value(headers, "Content-Type"),
            self.date_field(window),
            canonical_amz_headers(headers) + resource,
        ]
        return "\n".join(fields)


class S3V2QueryCanonicalizer(S3V2Canonicalizer):
    """Signature v2 pre-signed URL: the Date line carries the epoch expiry."""

    def date_field(self, window: TimeWindow) -> str:
        return str(int(window.expires_at.timestamp()))


def v4_scope(window: TimeWindow, region: str) -> str:
    return f"{amz_date(window.signed_at)[:8]}/{region}/s3/aws4_request"


def v4_query_params(identity: str, window: TimeWindow, region: str) -> list[tuple[str, str]]:
    """Authorization parameters of a v4 pre-signed URL, already sorted."""
    return [
        ("X-Amz-Algorithm", V4_ALGORITHM),
        ("X-Amz-Credential", f"{identity}/{v4_scope(window, region)}"),
        ("X-Amz-Date", amz_date(window.signed_at)),
        ("X-Amz-Expires", str(window.duration_seconds)),
        ("X-Amz-SignedHeaders", "host"),
    ]


class S3V4QueryCanonicalizer(CanonicalizationBlueprint):
    """Signature v4 pre-signed URL signing only the ``host`` header."""

    def __init__(self, config: S3Config) -> None:
        self.config = config

    def canonical_request(self, operation: SigningOperation, window: TimeWindow, identity: str) -> str:
        location = locate(self.config, operation)
        return "\n".join(
            [
                operation.kind.value,
                encode_path(location.path),
                encode_query(v4_query_params(identity, window, self.config.region)),
                f"host:{location.host}\n",
                "host",
                UNSIGNED_PAYLOAD,
            ]
        )

    def build_canonical_string(
        self,
        operation: SigningOperation,
        window: TimeWindow,
        identity: str,
        permission: str,
    ) -> str:
        self.require_blob(operation)
        if window.duration_seconds > V4_MAX_EXPIRES:
            raise InvalidDurationError(
                f"Signature v4 URLs expire within {V4_MAX_EXPIRES} seconds, got {window.duration_seconds}"
            )
        request_hash = hashlib.sha256(
            self.canonical_request(operation, window, identity).encode("utf-8")
        ).hexdigest()
        return "\n".join(
            [
                V4_ALGORITHM,
                amz_date(window.signed_at),
                v4_scope(window, self.config.region),
                request_hash,
            ]
        )
