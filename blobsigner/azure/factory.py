"""Azure strategy factory.

Maps provider identifiers to builders of their strategy triple.
``STRATEGY_REGISTRY`` is consumed by :class:`blobsigner.registry.ProviderSignerRegistry`.
"""

from blobsigner.azure.assembler import AzureSasAssembler
from blobsigner.azure.canonical import AzureSasCanonicalizer
from blobsigner.azure.signature import HmacSha256Signature
from blobsigner.base.config import AzureBlobConfig
from blobsigner.base.strategy import SignerStrategy


def build_blob_sas(config: AzureBlobConfig) -> SignerStrategy:
    return SignerStrategy(
        canonicalizer=AzureSasCanonicalizer(config),
        signature=HmacSha256Signature(),
        assembler=AzureSasAssembler(config),
    )


# Strategy registry for Azure
STRATEGY_REGISTRY = {
    "azureblob": build_blob_sas,
}
