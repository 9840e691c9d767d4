"""AWS strategy factory.

Maps provider identifiers to builders of their strategy triple.
``STRATEGY_REGISTRY`` is consumed by :class:`blobsigner.registry.ProviderSignerRegistry`.
"""

from blobsigner.aws.assembler import S3HeaderAssembler, S3V2QueryAssembler, S3V4QueryAssembler
from blobsigner.aws.canonical import S3V2Canonicalizer, S3V2QueryCanonicalizer, S3V4QueryCanonicalizer
from blobsigner.aws.signature import HmacSha1Signature, SigV4Signature
from blobsigner.base.config import S3Config
from blobsigner.base.strategy import SignerStrategy


def build_v2_header(config: S3Config) -> SignerStrategy:
    return SignerStrategy(S3V2Canonicalizer(config), HmacSha1Signature(), S3HeaderAssembler(config))


def build_v2_query(config: S3Config) -> SignerStrategy:
    return SignerStrategy(S3V2QueryCanonicalizer(config), HmacSha1Signature(), S3V2QueryAssembler(config))


def build_v4_query(config: S3Config) -> SignerStrategy:
    return SignerStrategy(S3V4QueryCanonicalizer(config), SigV4Signature(), S3V4QueryAssembler(config))


# Strategy registry for AWS
STRATEGY_REGISTRY = {
    "s3": build_v2_header,
    "s3-presigned": build_v2_query,
    "s3-v4": build_v4_query,
}
