"""Relative "time since" labels for list views."""

from datetime import datetime
from typing import Optional

_MINUTE = 60
_HOUR = 60 * _MINUTE
_DAY = 24 * _HOUR
_MONTH = 30 * _DAY
_YEAR = 365 * _DAY

_UNITS = [
    (_YEAR, "year"),
    (_MONTH, "month"),
    (_DAY, "day"),
    (_HOUR, "hour"),
    (_MINUTE, "minute"),
]


def since_label(moment: datetime, now: Optional[datetime] = None) -> str:
    """
    Label the time elapsed since ``moment``.

    Examples: "just now", "1 minute ago", "5 hours ago", "2 months ago".
    Moments in the future (clock skew) read as "just now".
    """
    now = now or datetime.utcnow()
    elapsed = int((now - moment).total_seconds())

    for seconds, unit in _UNITS:
        if elapsed >= seconds:
            amount = elapsed // seconds
            return f"{amount} {unit}{'' if amount == 1 else 's'} ago"
    return "just now"
