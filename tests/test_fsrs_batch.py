import unittest

import torch

from fsrs6.algorithm import Algorithm
from fsrs6.math.fsrs_batch import FSRS6BatchOps


class TestFSRS6BatchOps(unittest.TestCase):
    def setUp(self):
        self.algorithm = Algorithm()
        self.ops = FSRS6BatchOps(self.algorithm)
        self.states = [(5.0, 10.0), (2.1, 2.3), (8.5, 120.0), (1.0, 0.5)]
        self.elapsed = [0, 1, 7, 30, 200]

    def test_retrievability_matches_scalar(self):
        w = self.algorithm.parameters.w
        t = torch.tensor(self.elapsed, dtype=torch.float64)
        for _, s in self.states:
            batch = self.ops.retrievability(t, s)
            for i, elapsed in enumerate(self.elapsed):
                expected = self.algorithm.forgetting_curve(w, elapsed, s)
                self.assertAlmostEqual(batch[i].item(), expected, places=6)

    def test_next_state_matches_scalar(self):
        rows = [
            (d, s, t, g)
            for d, s in self.states + [(0.0, 0.0)]
            for t in self.elapsed
            for g in (0, 1, 2, 3, 4)
        ]
        d, s, t, g = (list(col) for col in zip(*rows))

        new_d, new_s = self.ops.next_state(d, s, t, g)

        for i, (di, si, ti, gi) in enumerate(rows):
            expected = self.algorithm.next_state((di, si), ti, gi)
            with self.subTest(d=di, s=si, t=ti, g=gi):
                self.assertAlmostEqual(new_d[i].item(), expected.difficulty, places=5)
                self.assertAlmostEqual(
                    new_s[i].item() / max(expected.stability, 1.0),
                    expected.stability / max(expected.stability, 1.0),
                    places=5,
                )

    def test_next_state_without_short_term(self):
        algorithm = Algorithm({"enable_short_term": False})
        ops = FSRS6BatchOps(algorithm)

        new_d, new_s = ops.next_state([5.0, 5.0], [10.0, 10.0], [0, 0], [1, 3])

        for i, grade in enumerate((1, 3)):
            expected = algorithm.next_state((5.0, 10.0), 0, grade)
            self.assertAlmostEqual(new_s[i].item(), expected.stability, places=5)
            self.assertAlmostEqual(new_d[i].item(), expected.difficulty, places=5)

    def test_next_interval_matches_scalar(self):
        stabilities = [0.212, 1.2931, 2.3065, 8.2956, 40.0, 100000.0]

        intervals = self.ops.next_interval(stabilities)

        self.assertEqual(intervals.dtype, torch.long)
        self.assertEqual(
            intervals.tolist(), [self.algorithm.next_interval(s) for s in stabilities]
        )


if __name__ == "__main__":
    unittest.main()
