"""Tests for core infrastructure modules."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock
import logging
import pytest
from pydantic import ValidationError

from blobsigner.base.clock import CachedClock, FixedClock, SystemClock
from blobsigner.base.config import AzureBlobConfig, EngineConfig, S3Config, validate_config
from blobsigner.base.encoding import encode_path, encode_query, iso8601_seconds, rfc1123
from blobsigner.base.exceptions import InvalidDurationError
from blobsigner.base.expiry import ExpiryPolicy
from blobsigner.base.logger import SignerLogger, StructuredFormatter
from blobsigner.base.models import Credentials, OperationKind, SignedRequest, SigningOperation, TimeWindow

NOW = datetime(2008, 6, 5, 16, 38, 19, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════════
# Config
# ══════════════════════════════════════════════════════════════════════

class TestEngineConfig:
    def test_default(self):
        assert EngineConfig().default_expiry_seconds == 900

    def test_explicit_value(self):
        assert EngineConfig(default_expiry_seconds=60).default_expiry_seconds == 60

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("BLOBSIGNER_DEFAULT_EXPIRY_SECONDS", "120")
        assert EngineConfig().default_expiry_seconds == 120

    def test_rejects_non_positive(self):
        with pytest.raises(ValidationError):
            EngineConfig(default_expiry_seconds=0)


class TestProviderConfigs:
    def test_azure_defaults(self):
        cfg = AzureBlobConfig()
        assert cfg.endpoint == "https://{identity}.blob.core.windows.net"
        assert cfg.api_version == "2017-04-17"

    def test_endpoint_trailing_slash_stripped(self):
        assert S3Config(endpoint="https://minio.local:9000/").endpoint == "https://minio.local:9000"

    def test_s3_region_env_fallback(self, monkeypatch):
        monkeypatch.setenv("AWS_DEFAULT_REGION", "ap-south-1")
        assert S3Config().region == "ap-south-1"

    def test_s3_region_default(self):
        assert S3Config().region == "us-east-1"

    def test_extra_fields_forbidden(self):
        with pytest.raises(ValidationError):
            AzureBlobConfig(region="us-east-1")


class TestValidateConfig:
    def test_azure(self):
        cfg = validate_config("azureblob", {"api_version": "2016-05-31"})
        assert isinstance(cfg, AzureBlobConfig)
        assert cfg.api_version == "2016-05-31"

    def test_s3_variants_share_model(self):
        for provider in ("s3", "s3-presigned", "s3-v4"):
            assert isinstance(validate_config(provider, None), S3Config)

    def test_unknown_provider(self):
        with pytest.raises(ValueError, match="No config model"):
            validate_config("gcs", {})


# ══════════════════════════════════════════════════════════════════════
# Clock
# ══════════════════════════════════════════════════════════════════════

class TestClocks:
    def test_system_clock_is_utc(self):
        assert SystemClock().now().tzinfo == timezone.utc

    def test_fixed_clock(self):
        assert FixedClock(NOW).now() == NOW

    def test_fixed_clock_naive_is_utc(self):
        assert FixedClock(datetime(2008, 6, 5, 16, 38, 19)).now() == NOW

    def test_fixed_clock_converts_offset(self):
        cet = timezone(timedelta(hours=1))
        assert FixedClock(datetime(2008, 6, 5, 17, 38, 19, tzinfo=cet)).now() == NOW


class TestCachedClock:
    def test_refreshes_after_ttl(self):
        source = MagicMock()
        source.now.side_effect = [NOW, NOW + timedelta(seconds=2)]
        ticks = iter([0.0, 0.5, 1.5])
        clock = CachedClock(source, ttl_seconds=1.0, monotonic=lambda: next(ticks))

        assert clock.now() == NOW
        assert clock.now() == NOW
        assert clock.now() == NOW + timedelta(seconds=2)
        assert source.now.call_count == 2

    def test_clear(self):
        source = MagicMock()
        source.now.side_effect = [NOW, NOW + timedelta(seconds=1)]
        clock = CachedClock(source, ttl_seconds=60.0, monotonic=lambda: 0.0)
        clock.now()
        clock.clear()
        assert clock.now() == NOW + timedelta(seconds=1)

    def test_invalid_ttl(self):
        with pytest.raises(ValueError):
            CachedClock(ttl_seconds=0)


# ══════════════════════════════════════════════════════════════════════
# Expiry
# ══════════════════════════════════════════════════════════════════════

class TestExpiryPolicy:
    def test_default_duration(self):
        window = ExpiryPolicy().resolve(NOW)
        assert window.signed_at == NOW
        assert window.expires_at == NOW + timedelta(minutes=15)

    def test_explicit_duration(self):
        window = ExpiryPolicy().resolve(NOW, 60)
        assert window.expires_at == NOW + timedelta(seconds=60)
        assert window.duration_seconds == 60

    def test_custom_default(self):
        assert ExpiryPolicy(default_seconds=30).resolve(NOW).duration_seconds == 30

    def test_monotonic_in_duration(self):
        policy = ExpiryPolicy()
        short, longer = policy.resolve(NOW, 100), policy.resolve(NOW, 160)
        assert short.signed_at == longer.signed_at
        assert longer.expires_at - short.expires_at == timedelta(seconds=60)

    def test_truncates_to_seconds(self):
        window = ExpiryPolicy().resolve(NOW.replace(microsecond=987654))
        assert window.signed_at == NOW

    @pytest.mark.parametrize("duration", [0, -1, -3600])
    def test_non_positive_duration(self, duration):
        with pytest.raises(InvalidDurationError):
            ExpiryPolicy().resolve(NOW, duration)

    @pytest.mark.parametrize("duration", [True, 1.5, "60"])
    def test_non_integer_duration(self, duration):
        with pytest.raises(InvalidDurationError):
            ExpiryPolicy().resolve(NOW, duration)

    def test_duration_past_calendar_end(self):
        with pytest.raises(InvalidDurationError, match="out of range"):
            ExpiryPolicy().resolve(NOW, 10**12)

    def test_invalid_default(self):
        with pytest.raises(InvalidDurationError):
            ExpiryPolicy(default_seconds=0)


# ══════════════════════════════════════════════════════════════════════
# Models
# ══════════════════════════════════════════════════════════════════════

class TestModels:
    def test_operation_split(self):
        op = SigningOperation.get("container", "dir/Sub/name.txt")
        assert op.kind is OperationKind.GET
        assert op.container == "container"
        assert op.blob_name == "dir/Sub/name.txt"

    def test_operation_without_blob(self):
        op = SigningOperation(kind=OperationKind.DELETE, resource_path="container")
        assert op.blob_name == ""

    def test_operation_is_frozen(self):
        op = SigningOperation.get("container", "name")
        with pytest.raises(ValidationError):
            op.resource_path = "other/name"

    def test_negative_payload_length(self):
        with pytest.raises(ValidationError):
            SigningOperation.put("container", "name", payload_length=-1)

    def test_window_order(self):
        with pytest.raises(ValidationError):
            TimeWindow(signed_at=NOW, expires_at=NOW)

    def test_credentials_hide_secret(self):
        creds = Credentials(identity="identity", secret="aaaabbbb")
        assert "aaaabbbb" not in repr(creds)
        assert creds.secret.get_secret_value() == "aaaabbbb"

    def test_signed_request_helpers(self):
        request = SignedRequest(method="GET", url="https://h/c/n?se=2008-06-05T16%3A53%3A19Z&sig=a%2Bb%3D")
        assert request.request_line() == "GET https://h/c/n?se=2008-06-05T16%3A53%3A19Z&sig=a%2Bb%3D HTTP/1.1"
        assert request.query_params() == {"se": "2008-06-05T16:53:19Z", "sig": "a+b="}


# ══════════════════════════════════════════════════════════════════════
# Encoding
# ══════════════════════════════════════════════════════════════════════

class TestEncoding:
    def test_timestamps(self):
        assert iso8601_seconds(NOW) == "2008-06-05T16:38:19Z"
        assert rfc1123(NOW) == "Thu, 05 Jun 2008 16:38:19 GMT"

    def test_path(self):
        assert encode_path("c/a b+c~d") == "c/a%20b%2Bc~d"

    def test_query_keeps_safe_characters(self):
        params = [("sig", "a/b+c="), ("se", "16:53")]
        assert encode_query(params) == "sig=a%2Fb%2Bc%3D&se=16%3A53"
        assert encode_query(params, safe="/") == "sig=a/b%2Bc%3D&se=16%3A53"


# ══════════════════════════════════════════════════════════════════════
# Logger
# ══════════════════════════════════════════════════════════════════════

class TestSignerLogger:
    def test_log_operation(self, capfd):
        logger = SignerLogger("test_signer")
        logger.logger.setLevel(logging.DEBUG)
        logger.warning("signing failed", provider="azureblob", operation="GET")
        captured = capfd.readouterr()
        assert "signing failed" in captured.err
        assert "azureblob" in captured.err

    def test_error_type_field(self, capfd):
        logger = SignerLogger("test_signer_errors")
        logger.warning("Signing failed", provider="s3", error_type="InvalidKeyError")
        err = capfd.readouterr().err
        assert '"error_type": "InvalidKeyError"' in err
        assert '"provider": "s3"' in err

    def test_structured_formatter(self):
        fmt = StructuredFormatter()
        record = logging.LogRecord(
            name="test", level=logging.INFO, pathname="", lineno=0,
            msg="hi", args=(), exc_info=None,
        )
        record.provider = "s3-v4"
        record.request_id = "abc"
        output = fmt.format(record)
        assert '"provider": "s3-v4"' in output
        assert '"request_id": "abc"' in output
