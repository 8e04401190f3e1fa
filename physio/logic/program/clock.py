from datetime import datetime, timezone
from typing import Optional


def now_iso(now: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a trailing 'Z'."""
    moment = now or datetime.now(timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
