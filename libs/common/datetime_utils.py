"""Timezone-aware UTC helpers.

Usage:
    from libs.common.datetime_utils import utc_now

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now
    )
"""

from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def epoch_millis(moment: Optional[datetime] = None) -> int:
    """Milliseconds since the Unix epoch (used in order numbers)."""
    return int((moment or utc_now()).timestamp() * 1000)


def from_epoch_seconds(seconds: int) -> datetime:
    """Convert a Unix timestamp in seconds (token expiry claims) to UTC."""
    return datetime.fromtimestamp(seconds, tz=timezone.utc)
