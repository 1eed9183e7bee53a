from __future__ import annotations

from pathlib import Path
from tempfile import TemporaryDirectory
from unittest import mock
import io
import os
import unittest

try:
    import app
except ImportError as exc:  # pragma: no cover - environment dependency
    app = None
    _IMPORT_ERROR = exc

from core.errors import UsageError
from core.settings import SETTINGS_ENV


class AppEntryTests(unittest.TestCase):
    def setUp(self) -> None:
        if app is None:
            self.skipTest(f"missing runtime dependency: {_IMPORT_ERROR}")

    def test_parse_args(self) -> None:
        self.assertEqual(app.parse_args(["editor", "img.png"]), "img.png")
        for argv in (["editor"], ["editor", "a.png", "b.png"], []):
            with self.assertRaises(UsageError):
                app.parse_args(argv)

    def test_wrong_argument_count_prints_usage(self) -> None:
        err = io.StringIO()
        with mock.patch("sys.stderr", err):
            self.assertEqual(app.main(["/usr/bin/editor"]), 1)
        self.assertIn("USAGE: editor <image_path>", err.getvalue())

    def test_decode_failure_prints_error(self) -> None:
        err = io.StringIO()
        with TemporaryDirectory() as td:
            missing = str(Path(td) / "missing.png")
            env = {k: v for k, v in os.environ.items() if k != SETTINGS_ENV}
            with mock.patch.dict(os.environ, env, clear=True), mock.patch("sys.stderr", err):
                self.assertEqual(app.main(["editor", missing]), 1)
        self.assertIn(f"Error while opening file {missing}", err.getvalue())

    def test_bad_settings_file_exits(self) -> None:
        err = io.StringIO()
        with TemporaryDirectory() as td:
            settings = Path(td) / "settings.json"
            settings.write_text("[", encoding="utf-8")
            with mock.patch.dict(os.environ, {SETTINGS_ENV: str(settings)}), mock.patch("sys.stderr", err):
                self.assertEqual(app.main(["editor", "whatever.png"]), 1)
        self.assertIn("Error while reading settings", err.getvalue())


if __name__ == "__main__":
    unittest.main()
