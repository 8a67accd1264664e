from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import TYPE_CHECKING, Optional

from fsrs6.core import Card, Rating, RecordLogItem, State
from fsrs6.dates import date_scheduler
from fsrs6.schedulers.base import Scheduler
from fsrs6.strategies import Strategies, basic_learning_steps_strategy

if TYPE_CHECKING:
    from fsrs6.algorithm import Algorithm

MINUTES_PER_DAY = 1440


class BasicScheduler(Scheduler):
    """Short-term policy: New/Learning/Relearning cards walk minute-level steps."""

    def __init__(
        self,
        card: Card,
        now: datetime,
        algorithm: "Algorithm",
        strategies: Optional[Strategies] = None,
    ) -> None:
        super().__init__(card, now, algorithm, strategies)
        self.learning_steps_strategy = (
            self.strategies.learning_steps or basic_learning_steps_strategy
        )

    def apply_learning_steps(self, card: Card, grade: Rating, to_state: State) -> Card:
        steps = self.learning_steps_strategy(
            self.algorithm.parameters, self.current.state, self.current.learning_steps
        )
        info = steps.get(grade)
        if info is not None and 0 < info.scheduled_minutes < MINUTES_PER_DAY:
            return replace(
                card,
                state=to_state,
                scheduled_days=0,
                learning_steps=info.next_step,
                due=date_scheduler(self.review_time, info.scheduled_minutes),
            )
        return self.schedule_days(
            card,
            self.next_interval(card.stability),
            state=State.REVIEW,
            learning_steps=0,
        )

    def new_state(self, grade: Rating) -> RecordLogItem:
        memory = self.algorithm.next_state(None, 0, grade)
        card = replace(
            self.current, difficulty=memory.difficulty, stability=memory.stability
        )
        card = self.apply_learning_steps(card, grade, State.LEARNING)
        return self.record(grade, card)

    def learning_state(self, grade: Rating) -> RecordLogItem:
        memory = self.algorithm.next_state(
            (self.last.difficulty, self.last.stability), self.elapsed_days, grade
        )
        card = replace(
            self.current, difficulty=memory.difficulty, stability=memory.stability
        )
        if self.last.state == State.RELEARNING:
            to_state = State.RELEARNING
        else:
            to_state = State.LEARNING
        card = self.apply_learning_steps(card, grade, to_state)
        return self.record(grade, card)

    def review_state(self, grade: Rating) -> RecordLogItem:
        memory_state = (self.last.difficulty, self.last.stability)
        t = self.elapsed_days
        w = self.algorithm.parameters.w
        r = self.algorithm.forgetting_curve(w, t, self.last.stability)

        if grade == Rating.AGAIN:
            memory = self.algorithm.next_state(memory_state, t, grade, r)
            card = replace(
                self.current,
                difficulty=memory.difficulty,
                stability=memory.stability,
                lapses=self.current.lapses + 1,
            )
            card = self.apply_learning_steps(card, grade, State.RELEARNING)
            return self.record(grade, card)

        hard = self.algorithm.next_state(memory_state, t, Rating.HARD, r)
        good = self.algorithm.next_state(memory_state, t, Rating.GOOD, r)
        easy = self.algorithm.next_state(memory_state, t, Rating.EASY, r)
        hard_ivl = self.next_interval(hard.stability)
        good_ivl = self.next_interval(good.stability)
        easy_ivl = self.next_interval(easy.stability)
        hard_ivl = min(hard_ivl, good_ivl)
        good_ivl = max(good_ivl, hard_ivl + 1)
        easy_ivl = max(easy_ivl, good_ivl + 1)

        memory, interval = {
            Rating.HARD: (hard, hard_ivl),
            Rating.GOOD: (good, good_ivl),
            Rating.EASY: (easy, easy_ivl),
        }[grade]
        card = self.schedule_days(
            self.current,
            interval,
            difficulty=memory.difficulty,
            stability=memory.stability,
            state=State.REVIEW,
            learning_steps=0,
        )
        return self.record(grade, card)


__all__ = ["BasicScheduler"]
