from __future__ import annotations

import math

from fsrs6.fsrs_defaults import DEFAULT_MAXIMUM_INTERVAL
from fsrs6.math.fsrs import round_half_up

FUZZ_RANGES: list[tuple[float, float, float]] = [
    (2.5, 7.0, 0.15),
    (7.0, 20.0, 0.1),
    (20.0, float("inf"), 0.05),
]


def fuzz_delta(interval: float) -> float:
    delta = 1.0
    if interval < 2.5:
        return delta
    for start, end, factor in FUZZ_RANGES:
        delta += factor * max(0.0, min(interval, end) - start)
    return delta


def get_fuzz_range(
    interval: float,
    elapsed_days: int,
    maximum_interval: int = DEFAULT_MAXIMUM_INTERVAL,
) -> tuple[int, int]:
    """Return the inclusive (min_ivl, max_ivl) window a fuzzed interval may land in."""
    delta = fuzz_delta(interval)
    interval = min(interval, maximum_interval)
    min_ivl = max(2, round_half_up(interval - delta))
    max_ivl = min(round_half_up(interval + delta), maximum_interval)
    if interval > elapsed_days:
        min_ivl = max(min_ivl, elapsed_days + 1)
    if min_ivl > max_ivl:
        min_ivl = max_ivl
    return min_ivl, max_ivl


def with_review_fuzz(
    fuzz_factor: float,
    interval: float,
    elapsed_days: int,
    maximum_interval: int,
) -> int:
    min_ivl, max_ivl = get_fuzz_range(interval, elapsed_days, maximum_interval)
    return int(math.floor(fuzz_factor * (max_ivl - min_ivl + 1) + min_ivl))


__all__ = ["FUZZ_RANGES", "fuzz_delta", "get_fuzz_range", "with_review_fuzz"]
