"""Builds SAS-signed Azure Blob requests."""

from blobsigner.base.config import AzureBlobConfig
from blobsigner.base.encoding import encode_path, encode_query, iso8601_seconds
from blobsigner.base.models import OperationKind, SignedRequest, SigningOperation, TimeWindow
from blobsigner.base.strategy import AssemblerBlueprint

BLOB_TYPE_HEADER = "x-ms-blob-type"


class AzureSasAssembler(AssemblerBlueprint):
    """Appends ``sv``, ``se``, ``sr``, ``sp`` and ``sig`` to the blob URL.

    Values are percent-encoded with ``/`` left literal, so ``:`` becomes
    ``%3A`` and ``+``/``=`` in the signature become ``%2B``/``%3D``.
    """

    def __init__(self, config: AzureBlobConfig) -> None:
        self.endpoint = config.endpoint
        self.api_version = config.api_version

    def assemble(
        self,
        operation: SigningOperation,
        window: TimeWindow,
        signature: str,
        *,
        identity: str,
        permission: str,
    ) -> SignedRequest:
        base_url = self.endpoint.format(identity=identity)
        query = encode_query(
            [
                ("sv", self.api_version),
                ("se", iso8601_seconds(window.expires_at)),
                ("sr", "b"),
                ("sp", permission),
                ("sig", signature),
            ],
            safe="/",
        )
        headers = self.common_headers(operation, window)
        if operation.kind is OperationKind.PUT:
            headers[BLOB_TYPE_HEADER] = "BlockBlob"
        return SignedRequest(
            method=operation.kind.value,
            url=f"{base_url}/{encode_path(operation.resource_path)}?{query}",
            headers=headers,
        )
