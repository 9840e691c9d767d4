"""HMAC-SHA256 signatures keyed with a base64 account key."""

import base64
import binascii
import hashlib
import hmac

from blobsigner.base.encoding import b64
from blobsigner.base.exceptions import InvalidKeyError
from blobsigner.base.strategy import SignatureBlueprint


class HmacSha256Signature(SignatureBlueprint):
    """Azure shared-key signature: base64(HMAC-SHA256(key, canonical))."""

    def decode_key(self, secret: str) -> bytes:
        if not secret:
            raise InvalidKeyError("Account key is empty.")
        try:
            return base64.b64decode(secret, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidKeyError("Account key is not valid base64.") from e

    def sign(self, canonical: str, key: bytes) -> str:
        digest = hmac.new(key, canonical.encode("utf-8"), hashlib.sha256).digest()
        return b64(digest)
