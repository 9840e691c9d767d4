"""Builds signed S3 requests: Authorization header or pre-signed URL."""

from __future__ import annotations

from blobsigner.aws.addressing import locate
from blobsigner.aws.canonical import v4_query_params
from blobsigner.base.config import S3Config
from blobsigner.base.encoding import encode_path, encode_query
from blobsigner.base.models import SignedRequest, SigningOperation, TimeWindow
from blobsigner.base.strategy import AssemblerBlueprint


class _S3Assembler(AssemblerBlueprint):
    def __init__(self, config: S3Config) -> None:
        self.config = config

    def resource_url(self, operation: SigningOperation) -> str:
        location = locate(self.config, operation)
        return location.base_url + encode_path(location.path)


class S3HeaderAssembler(_S3Assembler):
    """Sets ``Authorization: AWS <identity>:<signature>``; URL left unsigned."""

    def assemble(
        self,
        operation: SigningOperation,
        window: TimeWindow,
        signature: str,
        *,
        identity: str,
        permission: str,
    ) -> SignedRequest:
        headers = self.common_headers(operation, window)
        headers["Authorization"] = f"AWS {identity}:{signature}"
        return SignedRequest(method=operation.kind.value, url=self.resource_url(operation), headers=headers)


class S3V2QueryAssembler(_S3Assembler):
    """Appends ``AWSAccessKeyId``, ``Expires`` and ``Signature``."""

    def assemble(
        self,
        operation: SigningOperation,
        window: TimeWindow,
        signature: str,
        *,
        identity: str,
        permission: str,
    ) -> SignedRequest:
        query = encode_query(
            [
                ("AWSAccessKeyId", identity),
                ("Expires", str(int(window.expires_at.timestamp()))),
                ("Signature", signature),
            ]
        )
        return SignedRequest(
            method=operation.kind.value,
            url=f"{self.resource_url(operation)}?{query}",
            headers=self.common_headers(operation, window),
        )


class S3V4QueryAssembler(_S3Assembler):
    """Appends the sorted ``X-Amz-*`` parameters and ``X-Amz-Signature``."""

    def assemble(
        self,
        operation: SigningOperation,
        window: TimeWindow,
        signature: str,
        *,
        identity: str,
        permission: str,
    ) -> SignedRequest:
        params = v4_query_params(identity, window, self.config.region)
        params.append(("X-Amz-Signature", signature))
        return SignedRequest(
            method=operation.kind.value,
            url=f"{self.resource_url(operation)}?{encode_query(params)}",
            headers=self.common_headers(operation, window),
        )
