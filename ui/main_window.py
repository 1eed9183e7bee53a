from __future__ import annotations
from typing import Callable, Optional

import numpy as np
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QApplication, QMainWindow, QFileDialog, QMessageBox

from core.engine import PointerEvent
from core.io import save_image
from ui.canvas_widget import CanvasWidget


class MainWindow(QMainWindow):
    """Single-canvas editor window; also the session's presentation surface."""

    def __init__(self, title: str = "Raster Graphics Editor"):
        super().__init__()
        self.setWindowTitle(title)

        self._buffer: Optional[np.ndarray] = None

        self.canvas = CanvasWidget()
        self.setCentralWidget(self.canvas)

        self._build_menu()
        self.resize(1000, 750)

    # ---------------------------
    # Menu / Actions
    # ---------------------------
    def _build_menu(self) -> None:
        save_act = QAction("Save As…", self)
        save_act.setShortcut(QKeySequence.StandardKey.SaveAs)
        save_act.triggered.connect(self.save_as)

        quit_act = QAction("Quit", self)
        quit_act.setShortcut(QKeySequence.StandardKey.Quit)
        quit_act.triggered.connect(self.close)

        reset_view = QAction("Reset View", self)
        reset_view.triggered.connect(self.canvas.reset_view)

        mfile = self.menuBar().addMenu("File")
        mfile.addAction(save_act)
        mfile.addSeparator()
        mfile.addAction(quit_act)

        mview = self.menuBar().addMenu("View")
        mview.addAction(reset_view)

    def save_as(self) -> None:
        if self._buffer is None or self._buffer.size == 0:
            QMessageBox.information(self, "Save As", "Nothing to save: the canvas is empty.")
            return
        path, _ = QFileDialog.getSaveFileName(
            self, "Save Image", "", "Images (*.png *.jpg *.jpeg *.bmp *.tif *.tiff)"
        )
        if not path:
            return
        try:
            save_image(path, self._buffer)
        except (OSError, ValueError) as exc:
            QMessageBox.critical(self, "Save failed", str(exc))
            return
        self.statusBar().showMessage(f"Saved {path}", 3000)

    # ---------------------------
    # Presentation surface
    # ---------------------------
    def show_window(self, name: str) -> None:
        self.setWindowTitle(name)
        self.show()

    def render(self, name: str, buffer: np.ndarray) -> None:
        self._buffer = buffer
        self.canvas.set_buffer(buffer)

    def register_pointer_handler(self, name: str, callback: Callable[[PointerEvent], None]) -> None:
        self.canvas.set_on_pointer(callback)

    def show_status(self, name: str, text: str) -> None:
        self.statusBar().showMessage(text)

    def block_for_input(self) -> int:
        return QApplication.instance().exec()
