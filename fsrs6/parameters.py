from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Mapping, Sequence

from fsrs6.errors import InvalidParameters
from fsrs6.fsrs_defaults import (
    DEFAULT_ENABLE_FUZZ,
    DEFAULT_ENABLE_SHORT_TERM,
    DEFAULT_FSRS6_WEIGHTS,
    DEFAULT_LEARNING_STEPS,
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_RELEARNING_STEPS,
    DEFAULT_REQUEST_RETENTION,
    FSRS5_DEFAULT_DECAY,
    W17_W18_CEILING,
    clamp_ranges,
)
from fsrs6.math.fsrs import clamp, round8
from fsrs6.strategies import convert_step_unit_to_minutes

VALID_LENGTHS = (17, 19, 21)

PARAMETER_FIELDS = (
    "request_retention",
    "maximum_interval",
    "w",
    "enable_fuzz",
    "enable_short_term",
    "learning_steps",
    "relearning_steps",
)


@dataclass(frozen=True)
class Parameters:
    request_retention: float = DEFAULT_REQUEST_RETENTION
    maximum_interval: int = DEFAULT_MAXIMUM_INTERVAL
    w: tuple[float, ...] = DEFAULT_FSRS6_WEIGHTS
    enable_fuzz: bool = DEFAULT_ENABLE_FUZZ
    enable_short_term: bool = DEFAULT_ENABLE_SHORT_TERM
    learning_steps: tuple[str, ...] = field(default=DEFAULT_LEARNING_STEPS)
    relearning_steps: tuple[str, ...] = field(default=DEFAULT_RELEARNING_STEPS)

    def __post_init__(self) -> None:
        if len(self.w) != 21:
            raise InvalidParameters(
                f"Parameters expects 21 weights, got {len(self.w)}; "
                "use generate_parameters() to migrate older vectors."
            )
        object.__setattr__(self, "w", tuple(float(x) for x in self.w))
        object.__setattr__(self, "learning_steps", tuple(self.learning_steps))
        object.__setattr__(self, "relearning_steps", tuple(self.relearning_steps))

    def to_dict(self) -> dict[str, Any]:
        return {
            "request_retention": self.request_retention,
            "maximum_interval": self.maximum_interval,
            "w": list(self.w),
            "enable_fuzz": self.enable_fuzz,
            "enable_short_term": self.enable_short_term,
            "learning_steps": list(self.learning_steps),
            "relearning_steps": list(self.relearning_steps),
        }


def _is_finite_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def check_parameters(parameters: Sequence[float]) -> Sequence[float]:
    if any(not _is_finite_number(x) for x in parameters):
        raise InvalidParameters(f"Non-finite or NaN value in parameters: {list(parameters)}")
    if len(parameters) not in VALID_LENGTHS:
        raise InvalidParameters(
            f"Invalid parameter length: {len(parameters)}. "
            "Must be 17, 19 or 21 for FSRSv4, 5 and 6 respectively."
        )
    return parameters


def w17_w18_ceiling(parameters: Sequence[float], num_relearning_steps: int) -> float:
    """
    Upper bound shared by w17 and w18.

    With several relearning steps the short-term boost must not outgrow a lapse:
    w17 * w18 <= -[ln(w11) + ln(2^w13 - 1) + w14 * 0.3] / num_relearning_steps.
    """
    if max(num_relearning_steps, 0) <= 1:
        return W17_W18_CEILING
    # w11 and w13 are held in range first so both logarithms stay defined.
    ranges = clamp_ranges()
    w11 = clamp(parameters[11], *ranges[11])
    w13 = clamp(parameters[13], *ranges[13])
    value = -(
        math.log(w11) + math.log(2.0 ** w13 - 1.0) + parameters[14] * 0.3
    ) / num_relearning_steps
    return clamp(round8(value), 0.01, 2.0)


def clip_parameters(
    parameters: Sequence[float],
    num_relearning_steps: int,
    enable_short_term: bool = True,
) -> list[float]:
    ceiling = w17_w18_ceiling(parameters, num_relearning_steps)
    ranges = clamp_ranges(ceiling, enable_short_term)[: len(parameters)]
    return [
        clamp(float(parameters[index]), lower, upper)
        for index, (lower, upper) in enumerate(ranges)
    ]


def migrate_parameters(
    parameters: Sequence[float] | None = None,
    num_relearning_steps: int = 0,
    enable_short_term: bool = True,
) -> tuple[float, ...]:
    """Bring a v4 (17), v5 (19) or v6 (21) weight vector to the 21-weight v6 layout."""
    if parameters is None:
        return DEFAULT_FSRS6_WEIGHTS
    length = len(parameters)
    if length == 21:
        return tuple(clip_parameters(parameters, num_relearning_steps, enable_short_term))
    if length == 19:
        logging.warning("[FSRS-6] Auto fill w from %d to 21 length", length)
        clipped = clip_parameters(parameters, num_relearning_steps, enable_short_term)
        return tuple(clipped + [0.0, FSRS5_DEFAULT_DECAY])
    if length == 17:
        w = clip_parameters(parameters, num_relearning_steps, enable_short_term)
        w[4] = round8(w[5] * 2.0 + w[4])
        w[5] = round8(math.log(w[5] * 3.0 + 1.0) / 3.0)
        w[6] = round8(w[6] + 0.5)
        logging.warning("[FSRS-6] Auto fill w from %d to 21 length", length)
        return tuple(w + [0.0, 0.0, 0.0, FSRS5_DEFAULT_DECAY])
    logging.warning(
        "[FSRS] Invalid parameters length %d, using default parameters", length
    )
    return DEFAULT_FSRS6_WEIGHTS


def _pick(props: Mapping[str, Any], key: str, default: Any) -> Any:
    value = props.get(key)
    return default if value is None else value


def generate_parameters(
    props: Mapping[str, Any] | None = None, **overrides: Any
) -> Parameters:
    """
    Build a complete `Parameters` from a partial mapping and/or keyword overrides.

    Omitted (or None) fields take their defaults and unknown fields are ignored
    with a warning. Supplied weights must be finite;
    unsupported lengths fall back to the defaults with a warning.
    """
    merged: dict[str, Any] = dict(props or {})
    merged.update(overrides)
    unknown = sorted(set(merged) - set(PARAMETER_FIELDS))
    if unknown:
        logging.warning("[FSRS] Ignoring unknown parameter fields: %s", ", ".join(unknown))
        for key in unknown:
            del merged[key]

    learning_steps = tuple(_pick(merged, "learning_steps", DEFAULT_LEARNING_STEPS))
    relearning_steps = tuple(_pick(merged, "relearning_steps", DEFAULT_RELEARNING_STEPS))
    for step in learning_steps + relearning_steps:
        convert_step_unit_to_minutes(step)
    enable_short_term = bool(_pick(merged, "enable_short_term", DEFAULT_ENABLE_SHORT_TERM))

    weights = merged.get("w")
    if weights is not None:
        weights = list(weights)
        if any(not _is_finite_number(x) for x in weights):
            raise InvalidParameters(f"Non-finite or NaN value in parameters: {weights}")

    maximum_interval = _pick(merged, "maximum_interval", DEFAULT_MAXIMUM_INTERVAL)
    if not _is_finite_number(maximum_interval) or maximum_interval < 1:
        raise InvalidParameters(
            f"maximum_interval must be a positive number of days, got {maximum_interval!r}"
        )

    return Parameters(
        request_retention=float(
            _pick(merged, "request_retention", DEFAULT_REQUEST_RETENTION)
        ),
        maximum_interval=int(maximum_interval),
        w=migrate_parameters(weights, len(relearning_steps), enable_short_term),
        enable_fuzz=bool(_pick(merged, "enable_fuzz", DEFAULT_ENABLE_FUZZ)),
        enable_short_term=enable_short_term,
        learning_steps=learning_steps,
        relearning_steps=relearning_steps,
    )


__all__ = [
    "Parameters",
    "VALID_LENGTHS",
    "check_parameters",
    "clip_parameters",
    "generate_parameters",
    "migrate_parameters",
    "w17_w18_ceiling",
]
