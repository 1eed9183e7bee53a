import os
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from core.canvas import Canvas
from core.engine import EditEngine
from core.errors import DecodeError, SettingsError, UsageError
from core.log import configure, log
from core.session import EditorSession
from core.settings import SETTINGS_ENV, load_settings
from ui.main_window import MainWindow


def parse_args(argv: List[str]) -> str:
    if len(argv) != 2:
        prog = Path(argv[0]).name if argv else "raster-editor"
        raise UsageError(f"USAGE: {prog} <image_path>")
    return argv[1]


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv if argv is None else argv)
    try:
        image_path = parse_args(argv)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        settings = load_settings(os.environ.get(SETTINGS_ENV))
    except SettingsError as exc:
        print(f"Error while reading settings: {exc}", file=sys.stderr)
        return 1
    configure(settings.log_level)

    try:
        canvas = Canvas.load(image_path)
    except DecodeError as exc:
        print(f"Error while opening file {image_path}", file=sys.stderr)
        log.debug("%s", exc)
        return 1
    log.info("Loaded %s (%d x %d)", image_path, canvas.width, canvas.height)

    app = QApplication.instance() or QApplication(argv[:1])
    app.setApplicationName("Raster Editor")

    window = MainWindow(settings.window_name)
    engine = EditEngine(canvas, settings=settings)
    session = EditorSession(engine, window, settings.window_name)
    return session.run()


if __name__ == "__main__":
    raise SystemExit(main())
