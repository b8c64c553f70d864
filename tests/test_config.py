import os
import unittest
from unittest import mock

from roll.config import Settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.detail_threshold, 20)
        self.assertEqual(settings.max_times, 100_000)
        self.assertEqual(settings.log_level, "WARNING")

    def test_environment(self) -> None:
        with mock.patch.dict(
            os.environ,
            {"ROLL_DETAIL_THRESHOLD": "7", "ROLL_MAX_TIMES": "50"},
        ):
            settings = Settings(_env_file=None)
        self.assertEqual(settings.detail_threshold, 7)
        self.assertEqual(settings.max_times, 50)


if __name__ == "__main__":
    unittest.main()
