"""Resolution of a request's validity window."""

from __future__ import annotations

from datetime import datetime, timedelta

from blobsigner.base.clock import as_utc
from blobsigner.base.config import DEFAULT_EXPIRY_SECONDS
from blobsigner.base.exceptions import InvalidDurationError
from blobsigner.base.models import TimeWindow


class ExpiryPolicy:
    """Turn "now" plus an optional duration into a :class:`TimeWindow`.

    Timestamps are truncated to whole seconds because every supported
    protocol signs second-precision values.
    """

    def __init__(self, default_seconds: int = DEFAULT_EXPIRY_SECONDS) -> None:
        self.default_seconds = self._validate(default_seconds)

    @staticmethod
    def _validate(seconds: object) -> int:
        # bool is an int subclass; True must not mean "one second"
        if isinstance(seconds, bool) or not isinstance(seconds, int):
            raise InvalidDurationError(f"Duration must be an integer number of seconds, got {seconds!r}")
        if seconds <= 0:
            raise InvalidDurationError(f"Duration must be positive, got {seconds}")
        return seconds

    def resolve(self, now: datetime, explicit_duration_seconds: int | None = None) -> TimeWindow:
        """Compute the validity window starting at *now*.

        Args:
            now: Current instant; naive values are treated as UTC.
            explicit_duration_seconds: Caller-supplied lifetime in seconds.
                Falls back to the policy default when ``None``.

        Returns:
            The resolved window.

        Raises:
            InvalidDurationError: If the explicit duration is not a
                positive integer or overflows the calendar.
        """
        if explicit_duration_seconds is None:
            duration = self.default_seconds
        else:
            duration = self._validate(explicit_duration_seconds)
        signed_at = as_utc(now).replace(microsecond=0)
        try:
            expires_at = signed_at + timedelta(seconds=duration)
        except OverflowError as e:
            raise InvalidDurationError(f"Duration of {duration} seconds is out of range") from e
        return TimeWindow(signed_at=signed_at, expires_at=expires_at)
