from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory
import json
import unittest

from core.errors import SettingsError
from core.settings import EditorSettings, load_settings, settings_from_raw


class SettingsTests(unittest.TestCase):
    def test_no_path_gives_defaults(self) -> None:
        self.assertEqual(load_settings(None), EditorSettings())
        self.assertEqual(load_settings(""), EditorSettings())

    def test_defaults(self) -> None:
        s = EditorSettings()
        self.assertEqual(s.window_name, "Raster Graphics Editor")
        self.assertEqual(s.default_color, (255, 255, 255))
        self.assertEqual(s.fill_lower_diff, (0, 0, 0))
        self.assertEqual(s.fill_upper_diff, (0, 0, 0))
        self.assertFalse(s.fill_fixed_range)

    def test_load_from_file(self) -> None:
        with TemporaryDirectory() as td:
            path = Path(td) / "settings.json"
            path.write_text(
                json.dumps(
                    {
                        "window_name": "Edit",
                        "fill_lower_diff": 20,
                        "fill_upper_diff": [1, 2, 3],
                        "fill_fixed_range": True,
                        "log_level": "debug",
                    }
                ),
                encoding="utf-8",
            )
            s = load_settings(str(path))

        self.assertEqual(s.window_name, "Edit")
        self.assertEqual(s.fill_lower_diff, (20, 20, 20))
        self.assertEqual(s.fill_upper_diff, (1, 2, 3))
        self.assertTrue(s.fill_fixed_range)
        self.assertEqual(s.log_level, "DEBUG")
        self.assertEqual(s.default_color, (255, 255, 255))

    def test_bad_values(self) -> None:
        for raw in (
            {"fill_lower_diff": [1, 2]},
            {"fill_upper_diff": 300},
            {"default_color": "red"},
            {"default_color": [0, 0, -1]},
            {"fill_lower_diff": True},
            {"fill_fixed_range": "false"},
            {"fill_fixed_range": 1},
        ):
            with self.assertRaises(SettingsError):
                settings_from_raw(raw)
        with self.assertRaises(SettingsError):
            settings_from_raw([1, 2, 3])

    def test_unreadable_file(self) -> None:
        with TemporaryDirectory() as td:
            missing = Path(td) / "missing.json"
            with self.assertRaises(SettingsError):
                load_settings(str(missing))
            broken = Path(td) / "broken.json"
            broken.write_text("{not json", encoding="utf-8")
            with self.assertRaises(SettingsError):
                load_settings(str(broken))


if __name__ == "__main__":
    unittest.main()
