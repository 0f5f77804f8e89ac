import os
import unittest
from unittest import mock

from core.config import _env_bool, _env_int


class TestEnvParsing(unittest.TestCase):
    def test_int_reads_value(self):
        with mock.patch.dict(os.environ, {"DENTAL_UPCOMING_LIMIT": "25"}):
            self.assertEqual(_env_int("DENTAL_UPCOMING_LIMIT", 10), 25)

    def test_int_unset_or_blank_uses_default(self):
        with mock.patch.dict(os.environ, {"DENTAL_UPCOMING_LIMIT": "  "}):
            self.assertEqual(_env_int("DENTAL_UPCOMING_LIMIT", 10), 10)
        with mock.patch.dict(os.environ, clear=True):
            self.assertEqual(_env_int("DENTAL_UPCOMING_LIMIT", 10), 10)

    def test_non_numeric_int_falls_back_with_warning(self):
        with mock.patch.dict(os.environ, {"DENTAL_UPCOMING_LIMIT": "ten"}):
            with self.assertLogs("core.config", level="WARNING") as logs:
                self.assertEqual(_env_int("DENTAL_UPCOMING_LIMIT", 10), 10)
        self.assertIn("DENTAL_UPCOMING_LIMIT", logs.output[0])

    def test_bool_values(self):
        with mock.patch.dict(os.environ, {"DENTAL_SEED_DEFAULTS": "Yes"}):
            self.assertTrue(_env_bool("DENTAL_SEED_DEFAULTS", False))
        with mock.patch.dict(os.environ, {"DENTAL_SEED_DEFAULTS": "0"}):
            self.assertFalse(_env_bool("DENTAL_SEED_DEFAULTS", True))


if __name__ == "__main__":
    unittest.main(verbosity=2)
