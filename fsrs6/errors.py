from __future__ import annotations


class FSRSError(ValueError):
    """Base class for every error raised by the scheduling core."""


class InvalidParameters(FSRSError):
    """Weight vector or scheduling knob cannot be used."""


class InvalidRetention(FSRSError):
    """Requested retention outside (0, 1]."""


class InvalidGrade(FSRSError):
    pass


class InvalidElapsed(FSRSError):
    pass


class InvalidMemoryState(FSRSError):
    pass


class InvalidStepDuration(FSRSError):
    """Learning step string that is not `<non-negative int><m|h|d>`."""


class UnknownCardState(FSRSError):
    pass


__all__ = [
    "FSRSError",
    "InvalidParameters",
    "InvalidRetention",
    "InvalidGrade",
    "InvalidElapsed",
    "InvalidMemoryState",
    "InvalidStepDuration",
    "UnknownCardState",
]
