from __future__ import annotations

from typing import Dict, Optional, Tuple

from fsrs6.algorithm import MemoryState
from fsrs6.core import GRADES, Rating, RecordLogItem, State
from fsrs6.schedulers.base import Scheduler


class LongTermScheduler(Scheduler):
    """Day-granularity policy: every review lands the card in Review."""

    def _outcomes(
        self, memory_state: Optional[Tuple[float, float]], t: int
    ) -> Dict[Rating, Tuple[MemoryState, int]]:
        states = {
            grade: self.algorithm.next_state(memory_state, t, grade) for grade in GRADES
        }
        again, hard, good, easy = (self.next_interval(states[g].stability) for g in GRADES)

        maximum_interval = self.algorithm.parameters.maximum_interval
        again = min(again, hard)
        if good <= hard and hard < maximum_interval:
            good = hard + 1
        if easy <= good and good < maximum_interval:
            easy = good + 1

        intervals = dict(zip(GRADES, (again, hard, good, easy)))
        return {grade: (states[grade], intervals[grade]) for grade in GRADES}

    def _schedule(
        self, grade: Rating, memory_state: Optional[Tuple[float, float]], t: int
    ) -> RecordLogItem:
        memory, interval = self._outcomes(memory_state, t)[grade]
        lapses = self.current.lapses
        if grade == Rating.AGAIN and self.last.state == State.REVIEW:
            lapses += 1
        card = self.schedule_days(
            self.current,
            interval,
            difficulty=memory.difficulty,
            stability=memory.stability,
            state=State.REVIEW,
            learning_steps=0,
            lapses=lapses,
        )
        return self.record(grade, card)

    def new_state(self, grade: Rating) -> RecordLogItem:
        return self._schedule(grade, None, 0)

    def learning_state(self, grade: Rating) -> RecordLogItem:
        return self._schedule(
            grade, (self.last.difficulty, self.last.stability), self.elapsed_days
        )

    def review_state(self, grade: Rating) -> RecordLogItem:
        return self._schedule(
            grade, (self.last.difficulty, self.last.stability), self.elapsed_days
        )


__all__ = ["LongTermScheduler"]
