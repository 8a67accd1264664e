"""
Alea pseudo-random generator (Johannes Baagøe), as bundled with seedrandom.

The arithmetic follows the JavaScript reference step for step so that a seed yields
the same sequence here as in the other FSRS implementations: doubles everywhere,
with `>>> 0` style truncation to 32 bits at each mixing stage of Mash.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Union

_TWO_32 = 0x100000000
_TWO_NEG_32 = 2.3283064365386963e-10
_TWO_NEG_53 = 1.1102230246251565e-16

Seed = Union[str, int, float, Sequence[Any], None]


def _to_uint32(value: float) -> int:
    return int(value) & 0xFFFFFFFF


def _seed_text(seed: Any) -> str:
    """Render a seed the way JavaScript's String() would."""
    if isinstance(seed, str):
        return seed
    if isinstance(seed, bool):
        return "true" if seed else "false"
    if isinstance(seed, int):
        return str(seed)
    if isinstance(seed, float):
        if seed.is_integer():
            return str(int(seed))
        return repr(seed)
    if isinstance(seed, (list, tuple)):
        return ",".join(_seed_text(item) for item in seed)
    return str(seed)


class Mash:
    def __init__(self) -> None:
        self.n: float = 0xEFC8249D

    def __call__(self, data: Any) -> float:
        n = self.n
        for char in _seed_text(data):
            n += ord(char)
            h = 0.02519603282416938 * n
            n = _to_uint32(h)
            h -= n
            h *= n
            n = _to_uint32(h)
            h -= n
            n += h * _TWO_32
        self.n = n
        return _to_uint32(n) * _TWO_NEG_32


@dataclass(frozen=True, slots=True)
class AleaState:
    c: float
    s0: float
    s1: float
    s2: float

    def to_dict(self) -> dict[str, float]:
        return {"c": self.c, "s0": self.s0, "s1": self.s1, "s2": self.s2}


class Alea:
    """Seeded generator producing floats in [0, 1)."""

    def __init__(self, seed: Seed = None) -> None:
        if seed is None:
            seed = int(time.time())
        mash = Mash()
        self.c: float = 1
        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")

        self.s0 -= mash(seed)
        if self.s0 < 0:
            self.s0 += 1
        self.s1 -= mash(seed)
        if self.s1 < 0:
            self.s1 += 1
        self.s2 -= mash(seed)
        if self.s2 < 0:
            self.s2 += 1

    def next(self) -> float:
        t = 2091639 * self.s0 + self.c * _TWO_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    __call__ = next

    def int32(self) -> int:
        """Unsigned 32-bit integer."""
        return int(self.next() * _TWO_32)

    def double(self) -> float:
        """53-bit precision float built from two draws."""
        return self.next() + int(self.next() * 0x200000) * _TWO_NEG_53

    @property
    def state(self) -> AleaState:
        return AleaState(c=self.c, s0=self.s0, s1=self.s1, s2=self.s2)

    def import_state(self, state: AleaState | Mapping[str, float]) -> "Alea":
        if isinstance(state, AleaState):
            state = state.to_dict()
        self.c = state["c"]
        self.s0 = state["s0"]
        self.s1 = state["s1"]
        self.s2 = state["s2"]
        return self


def alea(seed: Seed = None) -> Alea:
    return Alea(seed)


__all__ = ["Alea", "AleaState", "Mash", "alea"]
