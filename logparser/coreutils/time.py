import time
from datetime import datetime, timezone


def epoch_now() -> int:
    """Current UNIX time in whole seconds."""
    return int(time.time())


def dt_fromtimestamp(ts: int) -> str:
    """Convert UNIX timestamp to YYYY-MM-DD HH:MM:SS string (UTC)."""
    return datetime.fromtimestamp(ts, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
