"""Pluggable hooks consumed by the schedulers: learning-step tables and fuzz seeds."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from fsrs6.core import Rating, State
from fsrs6.errors import InvalidStepDuration
from fsrs6.math.fsrs import round_half_up

if TYPE_CHECKING:
    from fsrs6.parameters import Parameters
    from fsrs6.schedulers.base import Scheduler

_STEP_PATTERN = re.compile(r"^\s*(-?\d+)\s*([mhd])\s*$")
_UNIT_MINUTES = {"m": 1, "h": 60, "d": 1440}


@dataclass(frozen=True, slots=True)
class StepInfo:
    scheduled_minutes: int
    next_step: int


LearningStepsStrategy = Callable[["Parameters", State, int], Dict[Rating, StepInfo]]
SeedStrategy = Callable[["Scheduler"], Any]


def convert_step_unit_to_minutes(step: str) -> int:
    """Convert "1m", "5h" or "2d" to minutes."""
    if not isinstance(step, str):
        raise InvalidStepDuration(f"Invalid step: {step!r}, expected a string like '10m'")
    match = _STEP_PATTERN.match(step)
    if match is None:
        raise InvalidStepDuration(f"Invalid step unit: {step!r}, expected m/h/d")
    value = int(match.group(1))
    if value < 0:
        raise InvalidStepDuration(f"Invalid step value: {step!r}")
    return value * _UNIT_MINUTES[match.group(2)]


def basic_learning_steps_strategy(
    parameters: "Parameters", state: State, cur_step: int
) -> Dict[Rating, StepInfo]:
    """
    Map each grade to the (minutes, next step index) it schedules from `cur_step`.

    Review and Relearning cards walk the relearning steps, everything else the
    learning steps. A grade missing from the result means "graduate to Review".
    """
    if state in (State.RELEARNING, State.REVIEW):
        steps = parameters.relearning_steps
    else:
        steps = parameters.learning_steps
    steps_length = len(steps)
    if steps_length == 0 or cur_step >= steps_length:
        return {}

    first_minutes = convert_step_unit_to_minutes(steps[0])
    result = {Rating.AGAIN: StepInfo(scheduled_minutes=first_minutes, next_step=0)}
    if state == State.REVIEW:
        return result

    if steps_length == 1:
        hard_minutes = round_half_up(first_minutes * 1.5)
    else:
        second_minutes = convert_step_unit_to_minutes(steps[1])
        hard_minutes = round_half_up((first_minutes + second_minutes) / 2.0)
    result[Rating.HARD] = StepInfo(scheduled_minutes=hard_minutes, next_step=cur_step)

    next_index = cur_step + 1
    if next_index < steps_length:
        result[Rating.GOOD] = StepInfo(
            scheduled_minutes=convert_step_unit_to_minutes(steps[next_index]),
            next_step=next_index,
        )
    return result


def default_init_seed_strategy(scheduler: "Scheduler") -> str:
    current = scheduler.current
    timestamp = int(scheduler.review_time.timestamp())
    mul = round(current.difficulty * current.stability, 2)
    return f"{timestamp}_{current.reps}_{mul}"


def gen_seed_strategy_with_card_id(card_id_field: str) -> SeedStrategy:
    """Seed from an identifier attribute of the card plus its review count."""

    def strategy(scheduler: "Scheduler") -> str:
        card_id = getattr(scheduler.current, card_id_field)
        reps = scheduler.current.reps or 0
        return f"{card_id}{reps}"

    return strategy


@dataclass(frozen=True)
class Strategies:
    learning_steps: Optional[LearningStepsStrategy] = None
    seed: Optional[SeedStrategy] = None
    scheduler: Optional[type] = None

    MODES = ("learning_steps", "seed", "scheduler")

    def with_handler(self, mode: str, handler: Any) -> "Strategies":
        if mode not in self.MODES:
            raise ValueError(f"Unknown strategy mode '{mode}'")
        if not callable(handler):
            raise TypeError("Strategy handler must be callable.")
        return replace(self, **{mode: handler})

    def without(self, mode: Optional[str] = None) -> "Strategies":
        if mode is None:
            return Strategies()
        if mode not in self.MODES:
            raise ValueError(f"Unknown strategy mode '{mode}'")
        return replace(self, **{mode: None})


__all__ = [
    "StepInfo",
    "Strategies",
    "LearningStepsStrategy",
    "SeedStrategy",
    "convert_step_unit_to_minutes",
    "basic_learning_steps_strategy",
    "default_init_seed_strategy",
    "gen_seed_strategy_with_card_id",
]
