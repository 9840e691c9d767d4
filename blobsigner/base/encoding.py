"""Timestamp formats and RFC 3986 percent-encoding shared by providers."""

from __future__ import annotations

import base64
from datetime import datetime
from email.utils import format_datetime
from urllib.parse import quote

from blobsigner.base.clock import as_utc


def iso8601_seconds(instant: datetime) -> str:
    """``2008-06-05T16:53:19Z``"""
    return as_utc(instant).strftime("%Y-%m-%dT%H:%M:%SZ")


def rfc1123(instant: datetime) -> str:
    """``Thu, 05 Jun 2008 16:38:19 GMT`` (locale independent)."""
    return format_datetime(as_utc(instant), usegmt=True)


def amz_date(instant: datetime) -> str:
    """``20130524T000000Z``"""
    return as_utc(instant).strftime("%Y%m%dT%H%M%SZ")


def encode_path(path: str) -> str:
    """Percent-encode a decoded resource path, keeping ``/`` separators."""
    return quote(path, safe="/")


def encode_query(params: list[tuple[str, str]], safe: str = "") -> str:
    """Join *params* into a query string, preserving their order.

    Only RFC 3986 unreserved characters and those in *safe* are left
    literal.
    """
    return "&".join(f"{quote(key, safe=safe)}={quote(value, safe=safe)}" for key, value in params)


def b64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")
