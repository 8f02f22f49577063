"""Tests for the settings file.

Covers: et.core.config
"""

import json
import os
import shutil
import tempfile
import unittest
from pathlib import Path


class TestSettings(unittest.TestCase):
    """Tests for loading, validating and saving settings.json."""

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self._tmppath = Path(self.tmpdir)

        # Monkey-patch the settings path to use temp dir
        from et.core import config
        self._orig_settings_path = config.SETTINGS_PATH
        config.SETTINGS_PATH = self._tmppath / "settings.json"

    def tearDown(self):
        from et.core import config
        config.SETTINGS_PATH = self._orig_settings_path
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _write(self, payload):
        from et.core import config
        with open(config.SETTINGS_PATH, "w", encoding="utf-8") as f:
            if isinstance(payload, str):
                f.write(payload)
            else:
                json.dump(payload, f)

    def test_fresh_start_returns_defaults(self):
        """No settings file → defaults."""
        from et.core.config import load_settings
        settings = load_settings()
        self.assertEqual(settings["window_title"], "Egg timer")
        self.assertEqual(settings["window_width"], 400)
        self.assertEqual(settings["window_height"], 600)
        self.assertEqual(settings["tick_interval_ms"], 40)
        self.assertAlmostEqual(settings["tick_increment"], 0.004)
        self.assertEqual(settings["input_placeholder"], "sec")
        self.assertEqual(settings["schema_version"], 1)

    def test_fresh_start_writes_settings_file(self):
        from et.core import config
        config.load_settings()
        self.assertTrue(os.path.exists(config.SETTINGS_PATH))
        with open(config.SETTINGS_PATH, encoding="utf-8") as f:
            on_disk = json.load(f)
        self.assertEqual(on_disk["egg_b"], 150.0)

    def test_save_and_load_roundtrip(self):
        from et.core.config import load_settings, save_settings
        settings = load_settings()
        settings["tick_interval_ms"] = 100
        settings["window_title"] = "Soft boiled"
        settings["always_on_top"] = True
        save_settings(settings)

        loaded = load_settings()
        self.assertEqual(loaded["tick_interval_ms"], 100)
        self.assertEqual(loaded["window_title"], "Soft boiled")
        self.assertTrue(loaded["always_on_top"])

    def test_missing_keys_are_filled(self):
        from et.core import config
        self._write({"window_title": "Eggs"})
        with self.assertLogs("eggtimer", level="WARNING"):
            loaded = config.load_settings()
        self.assertEqual(loaded["window_title"], "Eggs")
        self.assertEqual(loaded["tick_interval_ms"], 40)
        self.assertEqual(loaded["schema_version"], 1)
        self.assertFalse(loaded["log_console"])

    def test_wrong_types_are_defaulted(self):
        from et.core import config
        self._write({
            "window_width": "wide",
            "tick_interval_ms": True,
            "tick_increment": "fast",
            "always_on_top": 1,
        })
        loaded = config.load_settings()
        self.assertEqual(loaded["window_width"], 400)
        self.assertEqual(loaded["tick_interval_ms"], 40)
        self.assertAlmostEqual(loaded["tick_increment"], 0.004)
        self.assertFalse(loaded["always_on_top"])

    def test_out_of_range_values_are_defaulted(self):
        from et.core import config
        self._write({
            "window_height": 0,
            "tick_interval_ms": -5,
            "tick_increment": 2,
            "egg_a": -1,
        })
        loaded = config.load_settings()
        self.assertEqual(loaded["window_height"], 600)
        self.assertEqual(loaded["tick_interval_ms"], 40)
        self.assertAlmostEqual(loaded["tick_increment"], 0.004)
        self.assertEqual(loaded["egg_a"], 110.0)

    def test_integer_increment_is_accepted(self):
        from et.core import config
        self._write({"tick_increment": 1})
        self.assertEqual(config.load_settings()["tick_increment"], 1)

    def test_egg_tilt_must_stay_below_height(self):
        from et.core import config
        self._write({"egg_b": 50.0, "egg_d": 60.0})
        loaded = config.load_settings()
        self.assertEqual(loaded["egg_b"], 150.0)
        self.assertEqual(loaded["egg_d"], 20.0)

    def test_egg_tilt_equal_to_height_is_rejected_but_zero_tilt_is_fine(self):
        from et.core import config
        self._write({"egg_b": 40.0, "egg_d": 40.0})
        loaded = config.load_settings()
        self.assertEqual((loaded["egg_b"], loaded["egg_d"]), (150.0, 20.0))

        self._write({"egg_b": 40.0, "egg_d": 0})
        loaded = config.load_settings()
        self.assertEqual((loaded["egg_b"], loaded["egg_d"]), (40.0, 0))

    def test_corrupted_json_falls_back_to_defaults(self):
        self._write("{invalid json!!")
        from et.core import config
        settings = config.load_settings()
        self.assertEqual(settings["window_title"], "Egg timer")

    def test_non_object_json_falls_back_to_defaults(self):
        self._write([1, 2, 3])
        from et.core import config
        settings = config.load_settings()
        self.assertEqual(settings["tick_interval_ms"], 40)

    def test_defaults_are_fresh_copies(self):
        from et.core.config import build_default_settings
        a = build_default_settings()
        a["window_title"] = "changed"
        self.assertEqual(build_default_settings()["window_title"], "Egg timer")


if __name__ == "__main__":
    unittest.main()
