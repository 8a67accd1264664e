import json
import tempfile
import unittest
from pathlib import Path

from fsrs6.config_loader import load_parameters
from fsrs6.errors import InvalidParameters


class TestLoadParameters(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def _write(self, name, payload):
        path = self.root / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_loads_partial_object(self):
        path = self._write(
            "params.json",
            {"request_retention": 0.85, "learning_steps": ["2m"], "enable_fuzz": True},
        )

        params = load_parameters(path, maximum_interval=1000)

        self.assertEqual(params.request_retention, 0.85)
        self.assertEqual(params.learning_steps, ("2m",))
        self.assertTrue(params.enable_fuzz)
        self.assertEqual(params.maximum_interval, 1000)
        self.assertEqual(len(params.w), 21)

    def test_rejects_non_object(self):
        path = self._write("list.json", [0.9])
        with self.assertRaises(ValueError):
            load_parameters(path)

    def test_extra_keys_are_ignored(self):
        path = self._write("stored.json", {"id": 3, "request_retention": 0.8})

        with self.assertLogs(level="WARNING"):
            params = load_parameters(path)

        self.assertEqual(params.request_retention, 0.8)
        self.assertEqual(params.learning_steps, ("1m", "10m"))

    def test_error_names_the_file(self):
        path = self._write("bad.json", {"maximum_interval": 0})
        with self.assertRaises(InvalidParameters) as ctx:
            load_parameters(str(path))
        self.assertIn("bad.json", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
