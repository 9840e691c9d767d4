"""S3 signature computers: HMAC-SHA1 (v2) and derived-key HMAC-SHA256 (v4)."""

import hashlib
import hmac

from blobsigner.base.encoding import b64
from blobsigner.base.exceptions import InvalidKeyError
from blobsigner.base.strategy import SignatureBlueprint


def _utf8_key(secret: str, prefix: str = "") -> bytes:
    if not secret:
        raise InvalidKeyError("Secret access key is empty.")
    try:
        return f"{prefix}{secret}".encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidKeyError("Secret access key is not valid text.") from e


class HmacSha1Signature(SignatureBlueprint):
    """Signature v2: base64(HMAC-SHA1(secret, string-to-sign))."""

    def decode_key(self, secret: str) -> bytes:
        return _utf8_key(secret)

    def sign(self, canonical: str, key: bytes) -> str:
        return b64(hmac.new(key, canonical.encode("utf-8"), hashlib.sha1).digest())


class SigV4Signature(SignatureBlueprint):
    """Signature v4: hex HMAC-SHA256 under a key derived from the scope.

    The scope (``date/region/service/aws4_request``) is read from the third
    line of the string-to-sign, so the key always matches what was signed.
    """

    def decode_key(self, secret: str) -> bytes:
        return _utf8_key(secret, prefix="AWS4")

    @staticmethod
    def _hmac(key: bytes, msg: str) -> bytes:
        return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()

    def signing_key(self, key: bytes, scope: str) -> bytes:
        for part in scope.split("/"):
            key = self._hmac(key, part)
        return key

    def sign(self, canonical: str, key: bytes) -> str:
        scope = canonical.split("\n")[2]
        return hmac.new(
            self.signing_key(key, scope), canonical.encode("utf-8"), hashlib.sha256
        ).hexdigest()
