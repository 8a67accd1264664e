from __future__ import annotations

import math
from datetime import datetime, timedelta

SECONDS_PER_DAY = 86_400.0


def date_scheduler(now: datetime, t: float, is_day: bool = False) -> datetime:
    """Offset `now` by `t` days, or by `t` minutes when `is_day` is false."""
    if is_day:
        return now + timedelta(days=t)
    return now + timedelta(minutes=t)


def date_diff(now: datetime, pre: datetime, unit: str = "days") -> int:
    seconds = (now - pre).total_seconds()
    if unit == "days":
        return int(math.floor(seconds / SECONDS_PER_DAY))
    if unit == "minutes":
        return int(math.floor(seconds / 60.0))
    raise ValueError(f"Invalid unit '{unit}'. Use 'days' or 'minutes'.")


__all__ = ["SECONDS_PER_DAY", "date_scheduler", "date_diff"]
