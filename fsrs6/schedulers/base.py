from __future__ import annotations

import abc
from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Any, Dict, Optional

from fsrs6.core import GRADES, Card, Rating, RecordLogItem, ReviewLog, State
from fsrs6.dates import date_diff, date_scheduler
from fsrs6.errors import InvalidGrade, UnknownCardState
from fsrs6.strategies import Strategies, default_init_seed_strategy

if TYPE_CHECKING:
    from fsrs6.algorithm import Algorithm


class Scheduler(abc.ABC):
    """
    Schedules one card at one review time.

    The constructor snapshots the card (`last`), derives the working copy
    (`current`, with the review counted) and the fuzz seed. `review(grade)` then
    dispatches on the card state to the policy implemented by the subclass.
    Outcomes are cached per grade.
    """

    def __init__(
        self,
        card: Card,
        now: datetime,
        algorithm: "Algorithm",
        strategies: Optional[Strategies] = None,
    ) -> None:
        self.last = card
        self.review_time = now
        self.algorithm = algorithm
        self.strategies = strategies or Strategies()
        self._cache: Dict[Rating, RecordLogItem] = {}

        if card.last_review is not None:
            self.elapsed_days = date_diff(now, card.last_review, "days")
        else:
            self.elapsed_days = 0
        self.current = replace(
            card,
            last_review=now,
            reps=card.reps + 1,
            elapsed_days=self.elapsed_days,
        )
        seed_strategy = self.strategies.seed or default_init_seed_strategy
        self.seed: Any = seed_strategy(self)

    def preview(self) -> Dict[Rating, RecordLogItem]:
        return {grade: self.review(grade) for grade in GRADES}

    def review(self, grade: int) -> RecordLogItem:
        rating = Rating.coerce(grade)
        if rating == Rating.MANUAL:
            raise InvalidGrade("Cannot review a manual rating")
        if rating in self._cache:
            return self._cache[rating]

        state = self.last.state
        if state == State.NEW:
            item = self.new_state(rating)
        elif state in (State.LEARNING, State.RELEARNING):
            item = self.learning_state(rating)
        elif state == State.REVIEW:
            item = self.review_state(rating)
        else:
            raise UnknownCardState(f"Invalid card state: {state!r}")
        self._cache[rating] = item
        return item

    @abc.abstractmethod
    def new_state(self, grade: Rating) -> RecordLogItem:
        """Outcome of the first review of a New card."""

    @abc.abstractmethod
    def learning_state(self, grade: Rating) -> RecordLogItem:
        """Outcome for a card in Learning or Relearning."""

    @abc.abstractmethod
    def review_state(self, grade: Rating) -> RecordLogItem:
        """Outcome for a card in Review."""

    # ------------------------------------------------------------------ #

    def next_interval(self, stability: float) -> int:
        return self.algorithm.next_interval(stability, self.elapsed_days, self.seed)

    def schedule_days(self, card: Card, interval: int, **changes: Any) -> Card:
        return replace(
            card,
            scheduled_days=interval,
            due=date_scheduler(self.review_time, interval, is_day=True),
            **changes,
        )

    def build_log(self, grade: Rating, card: Card) -> ReviewLog:
        return ReviewLog(
            rating=grade,
            state=self.last.state,
            due=self.last.due,
            stability=self.last.stability,
            difficulty=self.last.difficulty,
            elapsed_days=self.elapsed_days,
            last_elapsed_days=self.last.scheduled_days,
            scheduled_days=card.scheduled_days,
            learning_steps=card.learning_steps,
            review=self.review_time,
            last_review=self.last.last_review,
            last_learning_steps=self.last.learning_steps,
            last_card_elapsed_days=self.last.elapsed_days,
        )

    def record(self, grade: Rating, card: Card) -> RecordLogItem:
        return RecordLogItem(card=card, log=self.build_log(grade, card))


__all__ = ["Scheduler"]
