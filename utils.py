# utils.py
import re
import time
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

import config

APP_TZ = ZoneInfo(config.APP_TIMEZONE)

# Characters the Realtime Database refuses in keys
_FORBIDDEN_KEY_CHARS = re.compile(r"[.$#\[\]/]")


def now_ms() -> int:
    # Epoch milliseconds, the timestamp format used across the stores
    return int(time.time() * 1000)


def today_key(now: datetime | None = None) -> str:
    """ISO calendar date (YYYY-MM-DD) in the configured timezone."""
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(APP_TZ).date().isoformat()


def parse_iso_date(value: str) -> date | None:
    # Accepts "2024-05-01" and full ISO datetimes; None when unparseable
    try:
        return date.fromisoformat(value[:10])
    except (TypeError, ValueError):
        return None


def is_valid_key(value: str) -> bool:
    return bool(value) and not _FORBIDDEN_KEY_CHARS.search(value)
