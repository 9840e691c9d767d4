"""Value objects passed into and returned from the signing engine.

All models are immutable and built fresh for every signing call.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from urllib.parse import parse_qsl, urlsplit

from pydantic import BaseModel, ConfigDict, Field, SecretStr, model_validator


class OperationKind(str, Enum):
    """Blob operations the engine knows how to sign."""

    GET = "GET"
    PUT = "PUT"
    DELETE = "DELETE"


class Credentials(BaseModel):
    """Already-resolved account credentials.

    Attributes:
        identity: Account identifier (storage account name, access key ID).
        secret: Encoded secret key material. Each provider decodes it once
            per call; it is never shown in ``repr`` or logs.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    identity: str = Field(min_length=1)
    secret: SecretStr


class SigningOperation(BaseModel):
    """A logical blob operation awaiting a signature.

    ``resource_path`` is ``<container>/<blob>``, percent-decoded and case
    sensitive. It is encoded exactly once, when the URL is assembled.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: OperationKind
    resource_path: str
    payload_length: int | None = Field(default=None, ge=0)
    content_type: str | None = None
    content_md5: bytes | None = None
    headers: dict[str, str] = Field(default_factory=dict)

    @property
    def container(self) -> str:
        return self.resource_path.split("/", 1)[0]

    @property
    def blob_name(self) -> str:
        parts = self.resource_path.split("/", 1)
        return parts[1] if len(parts) == 2 else ""

    @classmethod
    def get(cls, container: str, name: str, **kwargs) -> SigningOperation:
        return cls(kind=OperationKind.GET, resource_path=f"{container}/{name}", **kwargs)

    @classmethod
    def put(
        cls,
        container: str,
        name: str,
        *,
        payload_length: int | None = None,
        content_type: str | None = None,
        content_md5: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> SigningOperation:
        return cls(
            kind=OperationKind.PUT,
            resource_path=f"{container}/{name}",
            payload_length=payload_length,
            content_type=content_type,
            content_md5=content_md5,
            headers=headers or {},
        )

    @classmethod
    def delete(cls, container: str, name: str, **kwargs) -> SigningOperation:
        return cls(kind=OperationKind.DELETE, resource_path=f"{container}/{name}", **kwargs)


class TimeWindow(BaseModel):
    """Validity window of a signed request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    signed_at: datetime
    expires_at: datetime

    @model_validator(mode="after")
    def check_order(self) -> TimeWindow:
        if self.expires_at <= self.signed_at:
            raise ValueError("expires_at must be later than signed_at")
        return self

    @property
    def duration_seconds(self) -> int:
        return int((self.expires_at - self.signed_at).total_seconds())


class SignedRequest(BaseModel):
    """Fully authenticated request descriptor handed to an HTTP transport."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    method: str
    url: str
    headers: dict[str, str] = Field(default_factory=dict)

    def request_line(self) -> str:
        return f"{self.method} {self.url} HTTP/1.1"

    def query_params(self) -> dict[str, str]:
        """Percent-decoded query parameters, in URL order."""
        return dict(parse_qsl(urlsplit(self.url).query, keep_blank_values=True))
