from __future__ import annotations

import math
import time
from typing import Any, Mapping, NamedTuple, Optional, Sequence, Tuple

from fsrs6.alea import Alea, Seed
from fsrs6.core import Rating
from fsrs6.errors import (
    InvalidElapsed,
    InvalidGrade,
    InvalidMemoryState,
    InvalidRetention,
)
from fsrs6.fsrs_defaults import D_MAX, D_MIN, S_MIN
from fsrs6.fuzz import with_review_fuzz
from fsrs6.math import fsrs as fmath
from fsrs6.parameters import Parameters, generate_parameters


class MemoryState(NamedTuple):
    difficulty: float
    stability: float


class Algorithm:
    """
    FSRS v6 memory model bound to one set of parameters.

    Instances are read-only once built: use `with_parameters` to derive a model
    with different parameters (the interval modifier is recomputed).
    """

    def __init__(
        self,
        params: Parameters | Mapping[str, Any] | None = None,
        *,
        seed: Seed = None,
    ) -> None:
        if not isinstance(params, Parameters):
            params = generate_parameters(params)
        self._parameters = params
        self._interval_modifier = self.calculate_interval_modifier(
            params.request_retention
        )
        self._seed = seed

    @property
    def parameters(self) -> Parameters:
        return self._parameters

    @property
    def interval_modifier(self) -> float:
        return self._interval_modifier

    @property
    def seed(self) -> Seed:
        return self._seed

    def with_parameters(
        self, params: Parameters | Mapping[str, Any] | None = None
    ) -> "Algorithm":
        return type(self)(params, seed=self._seed)

    # ------------------------------------------------------------------ #

    def compute_decay_factor(self, w: Sequence[float] | float) -> Tuple[float, float]:
        return fmath.compute_decay_factor(w)

    def forgetting_curve(
        self, w: Sequence[float], elapsed_days: float, stability: float
    ) -> float:
        return fmath.forgetting_curve(w, elapsed_days, stability)

    def calculate_interval_modifier(self, request_retention: float) -> float:
        if not 0 < request_retention <= 1:
            raise InvalidRetention(
                "Requested retention rate should be in the range (0,1], "
                f"got {request_retention}"
            )
        return fmath.interval_modifier(self._parameters.w, request_retention)

    def init_stability(self, grade: int) -> float:
        return fmath.init_stability(self._parameters.w, grade)

    def init_difficulty(self, grade: int) -> float:
        return fmath.init_difficulty(self._parameters.w, grade)

    def next_difficulty(self, d: float, grade: int) -> float:
        return fmath.next_difficulty(self._parameters.w, d, grade)

    def next_recall_stability(self, d: float, s: float, r: float, grade: int) -> float:
        return fmath.stability_after_success(self._parameters.w, s, r, d, grade)

    def next_forget_stability(self, d: float, s: float, r: float) -> float:
        return fmath.stability_after_failure(self._parameters.w, s, r, d)

    def next_short_term_stability(self, s: float, grade: int) -> float:
        return fmath.stability_short_term(self._parameters.w, s, grade)

    # ------------------------------------------------------------------ #

    def apply_fuzz(self, interval: float, elapsed_days: int, seed: Seed = None) -> int:
        if not self._parameters.enable_fuzz or interval < 2.5:
            return fmath.round_half_up(interval)
        if seed is None:
            seed = self._seed
        if seed is None:
            seed = int(time.time())
        fuzz_factor = Alea(seed).next()
        return with_review_fuzz(
            fuzz_factor, interval, elapsed_days, self._parameters.maximum_interval
        )

    def next_interval(
        self, stability: float, elapsed_days: int = 0, seed: Seed = None
    ) -> int:
        interval = fmath.round_half_up(stability * self._interval_modifier)
        interval = min(max(interval, 1), self._parameters.maximum_interval)
        return self.apply_fuzz(interval, elapsed_days, seed)

    def next_state(
        self,
        memory_state: Optional[Tuple[float, float]],
        t: float,
        grade: int,
        r: Optional[float] = None,
    ) -> MemoryState:
        """
        Advance a (difficulty, stability) pair by one review `t` days after the last.

        `grade` 0 is a manual override and leaves the state untouched.
        """
        d, s = memory_state if memory_state is not None else (0.0, 0.0)
        if t < 0:
            raise InvalidElapsed(f'Invalid delta_t "{t}"')
        if grade < 0 or grade > 4:
            raise InvalidGrade(f'Invalid grade "{grade}"')

        if d == 0 and s == 0:
            if grade == Rating.MANUAL:
                return MemoryState(0.0, 0.0)
            return MemoryState(
                difficulty=fmath.clamp(self.init_difficulty(grade), D_MIN, D_MAX),
                stability=self.init_stability(grade),
            )
        if grade == Rating.MANUAL:
            return MemoryState(d, s)
        if d < D_MIN or s < S_MIN:
            raise InvalidMemoryState(
                f"Invalid memory state {{ difficulty: {d}, stability: {s} }}"
            )

        w = self._parameters.w
        if r is None:
            r = self.forgetting_curve(w, t, s)
        s_after_success = self.next_recall_stability(d, s, r, grade)
        s_after_fail = self.next_forget_stability(d, s, r)
        s_after_short_term = self.next_short_term_stability(s, grade)

        new_s = s_after_success
        if grade == Rating.AGAIN:
            w_17, w_18 = (w[17], w[18]) if self._parameters.enable_short_term else (0.0, 0.0)
            next_s_min = s / math.exp(w_17 * w_18)
            new_s = fmath.clamp(fmath.round8(next_s_min), S_MIN, s_after_fail)
        if t == 0 and self._parameters.enable_short_term:
            new_s = s_after_short_term

        return MemoryState(difficulty=self.next_difficulty(d, grade), stability=new_s)


__all__ = ["Algorithm", "MemoryState"]
