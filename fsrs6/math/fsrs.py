from __future__ import annotations

import math
from typing import Sequence, Tuple

from fsrs6.core import Rating
from fsrs6.fsrs_defaults import D_MAX, D_MIN, S_MAX, S_MIN

# --------------------------- rounding helpers --------------------------- #


def round8(value: float) -> float:
    """Round half away from zero to 8 decimals, matching the TypeScript fixtures."""
    return math.copysign(math.floor(abs(value) * 100_000_000 + 0.5), value) / 100_000_000.0


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


# --------------------------- FSRS6 helpers --------------------------- #


def compute_decay_factor(w: Sequence[float] | float) -> Tuple[float, float]:
    decay = -w if isinstance(w, (int, float)) else -w[20]
    factor = math.exp(math.log(0.9) / decay) - 1.0
    return decay, round8(factor)


def forgetting_curve(w: Sequence[float], elapsed_days: float, stability: float) -> float:
    decay, factor = compute_decay_factor(w)
    return round8((1.0 + factor * elapsed_days / stability) ** decay)


def interval_modifier(w: Sequence[float], request_retention: float) -> float:
    decay, factor = compute_decay_factor(w)
    return round8((request_retention ** (1.0 / decay) - 1.0) / factor)


def init_stability(w: Sequence[float], rating: int) -> float:
    return max(w[rating - 1], S_MIN)


def init_difficulty(w: Sequence[float], rating: int) -> float:
    return round8(w[4] - math.exp((rating - 1) * w[5]) + 1.0)


def linear_damping(delta_d: float, old_d: float) -> float:
    return round8(delta_d * (10.0 - old_d) / 9.0)


def mean_reversion(w: Sequence[float], init: float, current: float) -> float:
    return round8(w[7] * init + (1.0 - w[7]) * current)


def next_difficulty(w: Sequence[float], d: float, rating: int) -> float:
    delta_d = -w[6] * (rating - 3)
    next_d = d + linear_damping(delta_d, d)
    return clamp(mean_reversion(w, init_difficulty(w, Rating.EASY), next_d), D_MIN, D_MAX)


def stability_after_success(
    w: Sequence[float], s: float, r: float, d: float, rating: int
) -> float:
    hard_penalty = w[15] if rating == Rating.HARD else 1.0
    easy_bonus = w[16] if rating == Rating.EASY else 1.0
    new_s = s * (
        1.0
        + math.exp(w[8])
        * (11.0 - d)
        * (s ** -w[9])
        * (math.exp((1.0 - r) * w[10]) - 1.0)
        * hard_penalty
        * easy_bonus
    )
    return clamp(round8(new_s), S_MIN, S_MAX)


def stability_after_failure(w: Sequence[float], s: float, r: float, d: float) -> float:
    new_s = (
        w[11]
        * (d ** -w[12])
        * ((s + 1.0) ** w[13] - 1.0)
        * math.exp((1.0 - r) * w[14])
    )
    return clamp(round8(new_s), S_MIN, S_MAX)


def stability_short_term(w: Sequence[float], s: float, rating: int) -> float:
    sinc = (s ** -w[19]) * math.exp(w[17] * (rating - 3 + w[18]))
    if rating >= Rating.HARD:
        sinc = max(sinc, 1.0)
    return clamp(round8(s * sinc), S_MIN, S_MAX)


__all__ = [
    "round8",
    "round_half_up",
    "clamp",
    "compute_decay_factor",
    "forgetting_curve",
    "interval_modifier",
    "init_stability",
    "init_difficulty",
    "linear_damping",
    "mean_reversion",
    "next_difficulty",
    "stability_after_success",
    "stability_after_failure",
    "stability_short_term",
]
