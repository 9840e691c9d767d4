"""
Structured logging for Blobsigner.

Provides a pre-configured logger that emits JSON-structured log records
with signing context (provider, operation) for easy filtering in log
aggregation tools. Canonical strings, secrets and signatures are never
passed to it.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach any extras injected via SignerLogger.log_operation
        for key in ("request_id", "provider", "operation", "error_type"):
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class SignerLogger:
    """Convenience wrapper around :mod:`logging` for signing calls."""

    def __init__(self, name: str = "blobsigner") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        provider: str | None = None,
        operation: str | None = None,
        request_id: str | None = None,
        error_type: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with signing context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            provider: Provider identifier (e.g. 'azureblob').
            operation: Operation kind (e.g. 'GET').
            request_id: Optional correlation ID; auto-generated if omitted.
            error_type: Exception class name when a signing call failed.
            exc_info: Whether to include exception info.
        """
        extra = {
            "provider": provider,
            "operation": operation,
            "request_id": request_id or uuid.uuid4().hex[:12],
            "error_type": error_type,
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


# Module-level singleton
signer_logger = SignerLogger()
