import unittest
from datetime import datetime, timedelta, timezone

from fsrs6 import FSRS, Card, Rating, State, create_empty_card
from fsrs6.errors import InvalidGrade
from fsrs6.schedulers import LongTermScheduler

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _review_history(f, card, steps):
    """Replay (minutes offset, grade) pairs, returning every (before, item)."""
    history = []
    for minutes, grade in steps:
        item = f.next(card, T0 + timedelta(minutes=minutes), grade)
        history.append((card, item))
        card = item.card
    return history


class TestFSRS(unittest.TestCase):
    def setUp(self):
        self.f = FSRS()
        self.card = create_empty_card(T0)

    def test_repeat_previews_all_grades(self):
        preview = self.f.repeat(self.card, T0)
        self.assertEqual(set(preview), {Rating.AGAIN, Rating.HARD, Rating.GOOD, Rating.EASY})
        self.assertEqual(preview[Rating.GOOD].card, self.f.next(self.card, T0, Rating.GOOD).card)

    def test_scheduler_follows_short_term_flag(self):
        long_term = FSRS({"enable_short_term": False})
        self.assertEqual(long_term.next(self.card, T0, Rating.GOOD).card.state, State.REVIEW)
        self.assertEqual(self.f.next(self.card, T0, Rating.GOOD).card.state, State.LEARNING)

    def test_scheduler_strategy_overrides_default(self):
        f = self.f.use_strategy("scheduler", LongTermScheduler)

        self.assertIsNot(f, self.f)
        self.assertEqual(f.next(self.card, T0, Rating.GOOD).card.state, State.REVIEW)
        self.assertEqual(
            f.clear_strategy("scheduler").next(self.card, T0, Rating.GOOD).card.state,
            State.LEARNING,
        )

    def test_rollback_undoes_each_review(self):
        steps = [
            (0, Rating.GOOD),
            (10, Rating.GOOD),
            (10 + 3 * 1440, Rating.AGAIN),
            (20 + 3 * 1440, Rating.HARD),
            (20 + 3 * 1440, Rating.GOOD),
            (20 + 20 * 1440, Rating.EASY),
        ]
        for before, item in _review_history(self.f, self.card, steps):
            with self.subTest(rating=item.log.rating, state=before.state):
                self.assertEqual(self.f.rollback(item.card, item.log), before)

    def test_log_to_dict_keeps_rollback_fields(self):
        _, item = _review_history(
            self.f, self.card, [(0, Rating.EASY), (8 * 1440, Rating.GOOD)]
        )[-1]

        data = item.log.to_dict()

        self.assertEqual(data["rating"], 3)
        self.assertEqual(data["state"], 2)
        self.assertEqual(data["last_review"], T0)
        self.assertEqual(data["last_learning_steps"], 0)
        self.assertEqual(data["last_card_elapsed_days"], 0)
        self.assertEqual(data["elapsed_days"], 8)

    def test_rollback_counts_lapses(self):
        history = _review_history(
            self.f, self.card, [(0, Rating.EASY), (8 * 1440, Rating.AGAIN)]
        )
        before, item = history[-1]
        self.assertEqual(item.card.lapses, 1)
        self.assertEqual(self.f.rollback(item.card, item.log).lapses, 0)

    def test_forget(self):
        reviewed = _review_history(
            self.f, self.card, [(0, Rating.EASY), (8 * 1440, Rating.AGAIN)]
        )[-1][1].card
        now = T0 + timedelta(days=9)

        kept = self.f.forget(reviewed, now)
        reset = self.f.forget(reviewed, now, reset_count=True)

        self.assertEqual(kept.card.state, State.NEW)
        self.assertEqual(kept.card.due, now)
        self.assertEqual(kept.card.stability, 0.0)
        self.assertEqual((kept.card.reps, kept.card.lapses), (2, 1))
        self.assertEqual((reset.card.reps, reset.card.lapses), (0, 0))
        self.assertEqual(kept.log.rating, Rating.MANUAL)
        self.assertEqual(kept.log.state, State.RELEARNING)
        self.assertEqual(kept.log.scheduled_days, 0)
        with self.assertRaises(InvalidGrade):
            self.f.rollback(kept.card, kept.log)

    def test_retrievability(self):
        self.assertEqual(self.f.get_retrievability(self.card, T0), 0.0)
        card = self.f.next(self.card, T0, Rating.EASY).card

        self.assertEqual(self.f.get_retrievability(card, T0), 1.0)
        later = self.f.get_retrievability(card, T0 + timedelta(days=8))
        much_later = self.f.get_retrievability(card, T0 + timedelta(days=80))
        self.assertGreater(later, much_later)
        self.assertGreater(much_later, 0.0)
        self.assertAlmostEqual(later, 0.9, places=2)

    def test_seeded_fuzz_is_reproducible(self):
        f = FSRS({"enable_fuzz": True}, seed="deck-1")
        card = Card(
            due=T0,
            stability=40.0,
            difficulty=5.0,
            state=State.REVIEW,
            last_review=T0 - timedelta(days=40),
            reps=5,
        )

        first = f.next(card, T0, Rating.GOOD).card.scheduled_days
        second = f.next(card, T0, Rating.GOOD).card.scheduled_days

        self.assertEqual(first, second)


if __name__ == "__main__":
    unittest.main()
