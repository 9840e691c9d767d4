"""Bucket addressing for S3 endpoints."""

from __future__ import annotations

import re
from typing import NamedTuple
from urllib.parse import urlsplit

from blobsigner.base.config import S3Config
from blobsigner.base.exceptions import MalformedResourceError
from blobsigner.base.models import SigningOperation

_DNS_BUCKET = re.compile(r"^[a-z0-9][a-z0-9-]{1,61}[a-z0-9]$")


class S3Location(NamedTuple):
    base_url: str
    path: str  # decoded, starts with "/"

    @property
    def host(self) -> str:
        return urlsplit(self.base_url).netloc


def is_dns_compatible(bucket: str) -> bool:
    """True when *bucket* can be a single lowercase host label."""
    return bool(_DNS_BUCKET.match(bucket))


def locate(config: S3Config, operation: SigningOperation) -> S3Location:
    """Split an operation into endpoint and request path.

    A ``{bucket}`` placeholder in the endpoint selects virtual-hosted
    addressing (bucket in the host name). Buckets that are not valid host
    labels, such as ``Cont-TestBucket``, and endpoints without the
    placeholder use path-style addressing, with the bucket leading the path.

    Raises:
        MalformedResourceError: If path-style addressing is needed but the
            endpoint template cannot drop its ``{bucket}`` label.
    """
    bucket = operation.container
    if "{bucket}" not in config.endpoint:
        return S3Location(config.endpoint, f"/{operation.resource_path}")
    if is_dns_compatible(bucket):
        return S3Location(config.endpoint.format(bucket=bucket), f"/{operation.blob_name}")

    path_style = config.endpoint.replace("{bucket}.", "", 1)
    if "{bucket}" in path_style:
        raise MalformedResourceError(
            f"Bucket {bucket!r} is not a valid host name and endpoint {config.endpoint!r} "
            "has no path-style form"
        )
    return S3Location(path_style, f"/{operation.resource_path}")
