from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from fsrs6.alea import Seed
from fsrs6.algorithm import Algorithm
from fsrs6.core import Card, Rating, RecordLogItem, ReviewLog, State, create_empty_card
from fsrs6.dates import date_diff
from fsrs6.errors import InvalidGrade
from fsrs6.parameters import Parameters
from fsrs6.schedulers import BasicScheduler, LongTermScheduler, Scheduler
from fsrs6.strategies import Strategies


class FSRS:
    """
    Public entry point: schedules cards with an `Algorithm` and optional strategies.

    Instances never change after construction. `use_strategy` and
    `clear_strategy` return new instances sharing the same algorithm.
    """

    def __init__(
        self,
        params: Parameters | Mapping[str, Any] | None = None,
        *,
        strategies: Optional[Strategies] = None,
        seed: Seed = None,
    ) -> None:
        self.algorithm = Algorithm(params, seed=seed)
        self.strategies = strategies or Strategies()

    @property
    def parameters(self) -> Parameters:
        return self.algorithm.parameters

    def use_strategy(self, mode: str, handler: Any) -> "FSRS":
        return self._derive(self.strategies.with_handler(mode, handler))

    def clear_strategy(self, mode: Optional[str] = None) -> "FSRS":
        return self._derive(self.strategies.without(mode))

    def _derive(self, strategies: Strategies) -> "FSRS":
        clone = object.__new__(type(self))
        clone.algorithm = self.algorithm
        clone.strategies = strategies
        return clone

    def scheduler(self, card: Card, now: datetime) -> Scheduler:
        scheduler_cls = self.strategies.scheduler
        if scheduler_cls is None:
            if self.parameters.enable_short_term:
                scheduler_cls = BasicScheduler
            else:
                scheduler_cls = LongTermScheduler
        return scheduler_cls(card, now, self.algorithm, self.strategies)

    def repeat(self, card: Card, now: datetime) -> Dict[Rating, RecordLogItem]:
        return self.scheduler(card, now).preview()

    def next(self, card: Card, now: datetime, grade: int) -> RecordLogItem:
        return self.scheduler(card, now).review(grade)

    def get_retrievability(self, card: Card, now: Optional[datetime] = None) -> float:
        if card.state == State.NEW or card.last_review is None or card.stability <= 0:
            return 0.0
        if now is None:
            now = datetime.now(timezone.utc)
        elapsed_days = max(date_diff(now, card.last_review, "days"), 0)
        return self.algorithm.forgetting_curve(
            self.parameters.w, elapsed_days, card.stability
        )

    def rollback(self, card: Card, log: ReviewLog) -> Card:
        """Undo the review recorded in `log`, returning the card as it was before."""
        if log.rating == Rating.MANUAL:
            raise InvalidGrade("Cannot rollback a manual rating")
        lapses = card.lapses
        if log.rating == Rating.AGAIN and log.state == State.REVIEW:
            lapses = max(lapses - 1, 0)
        return replace(
            card,
            due=log.due,
            stability=log.stability,
            difficulty=log.difficulty,
            elapsed_days=log.last_card_elapsed_days,
            scheduled_days=log.last_elapsed_days,
            learning_steps=log.last_learning_steps,
            reps=max(card.reps - 1, 0),
            lapses=lapses,
            state=log.state,
            last_review=log.last_review,
        )

    def forget(
        self, card: Card, now: datetime, reset_count: bool = False
    ) -> RecordLogItem:
        fresh = create_empty_card(now)
        if not reset_count:
            fresh = replace(fresh, reps=card.reps, lapses=card.lapses)
        log = ReviewLog(
            rating=Rating.MANUAL,
            state=card.state,
            due=card.due,
            stability=card.stability,
            difficulty=card.difficulty,
            elapsed_days=0,
            last_elapsed_days=card.scheduled_days,
            scheduled_days=0,
            learning_steps=0,
            review=now,
            last_review=card.last_review,
            last_learning_steps=card.learning_steps,
            last_card_elapsed_days=card.elapsed_days,
        )
        return RecordLogItem(card=fresh, log=log)


__all__ = ["FSRS"]
