from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Optional

from fsrs6.errors import InvalidGrade, UnknownCardState


class State(IntEnum):
    NEW = 0
    LEARNING = 1
    REVIEW = 2
    RELEARNING = 3

    @classmethod
    def coerce(cls, value: object) -> "State":
        """Accept a State, its integer code or its (case-insensitive) name."""
        if isinstance(value, State):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise UnknownCardState(f"Invalid state: {value!r}") from None
        try:
            return cls(value)
        except ValueError:
            raise UnknownCardState(f"Invalid state value: {value!r}") from None


class Rating(IntEnum):
    MANUAL = 0
    AGAIN = 1
    HARD = 2
    GOOD = 3
    EASY = 4

    @classmethod
    def coerce(cls, value: object) -> "Rating":
        if isinstance(value, Rating):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise InvalidGrade(f"Invalid rating: {value!r}") from None
        try:
            return cls(value)
        except ValueError:
            raise InvalidGrade(f"Invalid rating value: {value!r}") from None


GRADES: tuple[Rating, ...] = (Rating.AGAIN, Rating.HARD, Rating.GOOD, Rating.EASY)


@dataclass(frozen=True, slots=True)
class Card:
    """Immutable snapshot of a card's scheduling state."""

    due: datetime
    stability: float = 0.0
    difficulty: float = 0.0
    elapsed_days: int = 0
    scheduled_days: int = 0
    learning_steps: int = 0
    reps: int = 0
    lapses: int = 0
    state: State = State.NEW
    last_review: Optional[datetime] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "stability", float(self.stability))
        object.__setattr__(self, "difficulty", float(self.difficulty))
        object.__setattr__(self, "state", State.coerce(self.state))


@dataclass(frozen=True, slots=True)
class ReviewLog:
    """
    Single review event.

    `state`, `due`, `stability` and `difficulty` describe the card *before* the
    review; `scheduled_days` and `learning_steps` the card after it. The trailing
    `last_*` fields keep the rest of the previous snapshot so a review can be
    rolled back exactly.
    """

    rating: Rating
    state: State
    due: datetime
    stability: float
    difficulty: float
    elapsed_days: int
    last_elapsed_days: int
    scheduled_days: int
    learning_steps: int
    review: datetime
    last_review: Optional[datetime] = None
    last_learning_steps: int = 0
    last_card_elapsed_days: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "rating": int(self.rating),
            "state": int(self.state),
            "due": self.due,
            "stability": self.stability,
            "difficulty": self.difficulty,
            "elapsed_days": self.elapsed_days,
            "last_elapsed_days": self.last_elapsed_days,
            "scheduled_days": self.scheduled_days,
            "learning_steps": self.learning_steps,
            "review": self.review,
            "last_review": self.last_review,
            "last_learning_steps": self.last_learning_steps,
            "last_card_elapsed_days": self.last_card_elapsed_days,
        }


@dataclass(frozen=True, slots=True)
class RecordLogItem:
    card: Card
    log: ReviewLog


def create_empty_card(now: Optional[datetime] = None) -> Card:
    if now is None:
        now = datetime.now(timezone.utc)
    return Card(due=now)


__all__ = [
    "State",
    "Rating",
    "GRADES",
    "Card",
    "ReviewLog",
    "RecordLogItem",
    "create_empty_card",
]
