from __future__ import annotations

import time


def utc_timestamp() -> int:
    """Current UTC timestamp in seconds."""
    return int(time.time())


def local_asctime(timestamp: int) -> str:
    """Render an epoch timestamp the way asctime does, in local time."""
    try:
        return time.asctime(time.localtime(timestamp))
    except (OverflowError, OSError, ValueError):
        # Peer clock values outside the platform's time_t range.
        return f"@{timestamp}"


__all__ = ["utc_timestamp", "local_asctime"]
