"""Blobsigner CLI — print a signed blob request from the command line.

Usage examples::

    blobsigner --provider azureblob --identity myaccount --secret <key> get container/name
    blobsigner -p s3-v4 -i AKIA... -c '{"region":"eu-central-1"}' --expires 60 put bucket/key \\
        --content-length 2 --content-type text/plain
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import Any, get_args

from pydantic import ValidationError

from blobsigner.base.supported_providers import existing_operations, existing_providers


def _parse_header(value: str) -> tuple[str, str]:
    name, sep, header_value = value.partition(":")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"Expected NAME:VALUE, got {value!r}")
    return name.strip(), header_value.strip()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the ``blobsigner`` CLI.

    Returns:
        Configured :class:`~argparse.ArgumentParser`.
    """
    parser = argparse.ArgumentParser(
        prog="blobsigner",
        description="Sign a blob storage request without contacting the provider",
    )
    parser.add_argument(
        "--provider", "-p",
        required=True,
        choices=list(get_args(existing_providers)),
        help="Signing provider / protocol variant",
    )
    parser.add_argument(
        "--identity", "-i",
        required=True,
        help="Account name or access key ID",
    )
    parser.add_argument(
        "--secret",
        default=os.environ.get("BLOBSIGNER_SECRET_KEY"),
        help="Encoded secret key (defaults to $BLOBSIGNER_SECRET_KEY)",
    )
    parser.add_argument(
        "--config", "-c",
        type=str,
        default="{}",
        help='JSON provider config (e.g. \'{"region":"eu-west-1"}\')',
    )
    parser.add_argument(
        "--expires", "-e",
        type=int,
        default=None,
        help="Validity window in seconds (provider default when omitted)",
    )
    parser.add_argument("--content-length", type=int, default=None, help="Payload length for put")
    parser.add_argument("--content-type", default=None, help="Payload content type for put")
    parser.add_argument(
        "--header", "-H",
        action="append",
        type=_parse_header,
        default=[],
        help="Extra request header NAME:VALUE (repeatable)",
    )
    parser.add_argument(
        "operation",
        choices=list(get_args(existing_operations)),
        help="Blob operation to sign",
    )
    parser.add_argument(
        "resource",
        help="CONTAINER/BLOB path, not percent-encoded",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point.

    Parses arguments, signs the requested operation through a
    :class:`~blobsigner.registry.ProviderSignerRegistry` and prints the
    signed request as JSON.

    Args:
        argv: Optional argument list (defaults to ``sys.argv``).
    """
    parser = _build_parser()
    ns = parser.parse_args(argv)

    if not ns.secret:
        print("A secret is required (--secret or BLOBSIGNER_SECRET_KEY).", file=sys.stderr)
        sys.exit(1)

    try:
        provider_config: dict[str, Any] = json.loads(ns.config)
    except json.JSONDecodeError as e:
        print(f"Invalid --config JSON: {e}", file=sys.stderr)
        sys.exit(1)

    from blobsigner.base.exceptions import BlobSignerError
    from blobsigner.base.models import Credentials, OperationKind, SigningOperation
    from blobsigner.registry import ProviderSignerRegistry

    try:
        registry = ProviderSignerRegistry(config={ns.provider: provider_config})
        operation = SigningOperation(
            kind=OperationKind(ns.operation.upper()),
            resource_path=ns.resource,
            payload_length=ns.content_length,
            content_type=ns.content_type,
            headers=dict(ns.header),
        )
        credentials = Credentials(identity=ns.identity, secret=ns.secret)
        signed = registry.sign(ns.provider, operation, credentials, ns.expires)
    except (BlobSignerError, ValidationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(json.dumps(signed.model_dump(), indent=2))


if __name__ == "__main__":
    main()
