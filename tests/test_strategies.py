import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock

from fsrs6.core import Rating, State
from fsrs6.errors import InvalidStepDuration
from fsrs6.parameters import generate_parameters
from fsrs6.strategies import (
    StepInfo,
    Strategies,
    basic_learning_steps_strategy,
    convert_step_unit_to_minutes,
    default_init_seed_strategy,
    gen_seed_strategy_with_card_id,
)


class TestStepUnits(unittest.TestCase):
    def test_units(self):
        self.assertEqual(convert_step_unit_to_minutes("1m"), 1)
        self.assertEqual(convert_step_unit_to_minutes("5h"), 300)
        self.assertEqual(convert_step_unit_to_minutes("2d"), 2880)

    def test_invalid_steps(self):
        for step in ("10", "m", "1w", "-5m", 10):
            with self.subTest(step=step):
                with self.assertRaises(InvalidStepDuration):
                    convert_step_unit_to_minutes(step)


class TestBasicLearningSteps(unittest.TestCase):
    def setUp(self):
        self.params = generate_parameters()

    def test_new_card_first_step(self):
        steps = basic_learning_steps_strategy(self.params, State.NEW, 0)
        self.assertEqual(steps[Rating.AGAIN], StepInfo(1, 0))
        self.assertEqual(steps[Rating.HARD], StepInfo(6, 0))
        self.assertEqual(steps[Rating.GOOD], StepInfo(10, 1))
        self.assertNotIn(Rating.EASY, steps)

    def test_last_learning_step_has_no_good(self):
        steps = basic_learning_steps_strategy(self.params, State.LEARNING, 1)
        self.assertIn(Rating.HARD, steps)
        self.assertNotIn(Rating.GOOD, steps)

    def test_review_only_maps_again(self):
        steps = basic_learning_steps_strategy(self.params, State.REVIEW, 0)
        self.assertEqual(steps, {Rating.AGAIN: StepInfo(10, 0)})

    def test_single_relearning_step_hard(self):
        steps = basic_learning_steps_strategy(self.params, State.RELEARNING, 0)
        self.assertEqual(steps[Rating.HARD], StepInfo(15, 0))
        self.assertNotIn(Rating.GOOD, steps)

    def test_exhausted_or_empty_steps(self):
        self.assertEqual(basic_learning_steps_strategy(self.params, State.LEARNING, 2), {})
        params = generate_parameters(learning_steps=[])
        self.assertEqual(basic_learning_steps_strategy(params, State.NEW, 0), {})


class TestSeedStrategies(unittest.TestCase):
    def test_default_seed(self):
        scheduler = MagicMock()
        scheduler.review_time = datetime(2024, 1, 1, tzinfo=timezone.utc)
        scheduler.current.reps = 3
        scheduler.current.difficulty = 5.0
        scheduler.current.stability = 2.5

        self.assertEqual(default_init_seed_strategy(scheduler), "1704067200_3_12.5")

    def test_card_id_seed(self):
        scheduler = MagicMock()
        scheduler.current.card_id = 99
        scheduler.current.reps = 4

        strategy = gen_seed_strategy_with_card_id("card_id")

        self.assertEqual(strategy(scheduler), "994")


class TestStrategies(unittest.TestCase):
    def test_with_handler_and_without(self):
        handler = MagicMock()
        strategies = Strategies().with_handler("seed", handler)
        self.assertIs(strategies.seed, handler)
        self.assertIsNone(strategies.without("seed").seed)
        self.assertEqual(strategies.without(), Strategies())

    def test_rejects_unknown_mode_and_non_callable(self):
        with self.assertRaises(ValueError):
            Strategies().with_handler("unknown", MagicMock())
        with self.assertRaises(TypeError):
            Strategies().with_handler("seed", 42)


if __name__ == "__main__":
    unittest.main()
