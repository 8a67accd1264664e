from __future__ import annotations

DEFAULT_REQUEST_RETENTION = 0.9
DEFAULT_MAXIMUM_INTERVAL = 36500
DEFAULT_ENABLE_FUZZ = False
DEFAULT_ENABLE_SHORT_TERM = True
DEFAULT_LEARNING_STEPS: tuple[str, ...] = ("1m", "10m")
DEFAULT_RELEARNING_STEPS: tuple[str, ...] = ("10m",)

S_MIN = 0.001
S_MAX = 36500.0
INIT_S_MAX = 100.0
D_MIN = 1.0
D_MAX = 10.0

FSRS5_DEFAULT_DECAY = 0.5
FSRS6_DEFAULT_DECAY = 0.1542

W17_W18_CEILING = 2.0

DEFAULT_FSRS6_WEIGHTS: tuple[float, ...] = (
    0.212,
    1.2931,
    2.3065,
    8.2956,
    6.4133,
    0.8334,
    3.0194,
    0.001,
    1.8722,
    0.1666,
    0.796,
    1.4835,
    0.0614,
    0.2629,
    1.6483,
    0.6014,
    1.8729,
    0.5425,
    0.0912,
    0.0658,
    FSRS6_DEFAULT_DECAY,
)


def clamp_ranges(
    w17_w18_ceiling: float = W17_W18_CEILING, enable_short_term: bool = True
) -> tuple[tuple[float, float], ...]:
    """Per-weight (min, max) pairs; w17/w18 share a ceiling derived from relearning steps."""
    return (
        (S_MIN, INIT_S_MAX),
        (S_MIN, INIT_S_MAX),
        (S_MIN, INIT_S_MAX),
        (S_MIN, INIT_S_MAX),
        (1.0, 10.0),
        (0.001, 4.0),
        (0.001, 4.0),
        (0.001, 0.75),
        (0.0, 4.5),
        (0.0, 0.8),
        (0.001, 3.5),
        (0.001, 5.0),
        (0.001, 0.25),
        (0.001, 0.9),
        (0.0, 4.0),
        (0.0, 1.0),
        (1.0, 6.0),
        (0.0, w17_w18_ceiling),
        (0.0, w17_w18_ceiling),
        (0.01 if enable_short_term else 0.0, 0.8),
        (0.1, 0.8),
    )


__all__ = [
    "DEFAULT_REQUEST_RETENTION",
    "DEFAULT_MAXIMUM_INTERVAL",
    "DEFAULT_ENABLE_FUZZ",
    "DEFAULT_ENABLE_SHORT_TERM",
    "DEFAULT_LEARNING_STEPS",
    "DEFAULT_RELEARNING_STEPS",
    "DEFAULT_FSRS6_WEIGHTS",
    "FSRS5_DEFAULT_DECAY",
    "FSRS6_DEFAULT_DECAY",
    "S_MIN",
    "S_MAX",
    "INIT_S_MAX",
    "D_MIN",
    "D_MAX",
    "W17_W18_CEILING",
    "clamp_ranges",
]
