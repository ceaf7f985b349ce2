"""Display formatting shared by every dashboard view."""

import math
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

ELLIPSIS = "..."
DEFAULT_TRUNCATE_LIMIT = 60


def _as_aware(value: Union[datetime, str]) -> datetime:
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def days_between(value: Union[datetime, str], now: Optional[datetime] = None) -> int:
    """Absolute difference in days, fractional days rounded up."""
    now = _as_aware(now or datetime.now(timezone.utc))
    delta = abs(now - _as_aware(value))
    return math.ceil(delta / timedelta(days=1))


def format_relative_date(value: Union[datetime, str], now: Optional[datetime] = None) -> str:
    """'1 day ago', 'N days ago', then weeks, months, years (all rounded up)."""
    days = days_between(value, now)
    if days == 1:
        return "1 day ago"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{math.ceil(days / 7)} weeks ago"
    if days < 365:
        return f"{math.ceil(days / 30)} months ago"
    return f"{math.ceil(days / 365)} years ago"


def truncate_text(text: str, limit: int = DEFAULT_TRUNCATE_LIMIT) -> str:
    """First ``limit`` characters plus an ellipsis when ``text`` is longer."""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS
