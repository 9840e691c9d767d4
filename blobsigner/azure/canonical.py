"""Azure Blob service SAS string-to-sign."""

from blobsigner.base.config import AzureBlobConfig
from blobsigner.base.encoding import iso8601_seconds
from blobsigner.base.models import SigningOperation, TimeWindow
from blobsigner.base.strategy import CanonicalizationBlueprint


class AzureSasCanonicalizer(CanonicalizationBlueprint):
    """Service SAS layout for signed versions 2015-04-05 through 2018-03-28.

    Thirteen newline-separated fields; unused ones are empty lines, never
    omitted.
    """

    def __init__(self, config: AzureBlobConfig) -> None:
        self.api_version = config.api_version

    def build_canonical_string(
        self,
        operation: SigningOperation,
        window: TimeWindow,
        identity: str,
        permission: str,
    ) -> str:
        self.require_blob(operation)
        fields = [
            permission,                                   # sp
            "",                                           # st
            iso8601_seconds(window.expires_at),           # se
            f"/blob/{identity}/{operation.resource_path}",
            "",                                           # si
            "",                                           # sip
            "",                                           # spr
            self.api_version,                             # sv
            "",                                           # rscc
            "",                                           # rscd
            "",                                           # rsce
            "",                                           # rscl
            "",                                           # rsct
        ]
        return "\n".join(fields)
