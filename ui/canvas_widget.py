from __future__ import annotations
from typing import Optional, Callable, Tuple

import numpy as np
from PySide6.QtCore import Qt, QPoint, QRectF
from PySide6.QtGui import QPainter, QImage, QPixmap, QColor, QPen
from PySide6.QtWidgets import QWidget

from core.engine import Button, EventKind, PointerEvent


def bgr_to_qimage(bgr: np.ndarray) -> Optional[QImage]:
    if bgr.size == 0:
        return None
    h, w, _ = bgr.shape
    data = np.ascontiguousarray(bgr).tobytes()
    qimg = QImage(data, w, h, w * 3, QImage.Format_BGR888)
    # Important: keep a copy because Python-owned bytes may be freed
    return qimg.copy()


class CanvasWidget(QWidget):
    """
    Shows the working buffer with view zoom/pan and forwards mouse input as
    PointerEvent values in canvas pixel coords:
      - left press/release/double-click and left-drag moves
      - right press (and right double-click) as a secondary press
      - wheel: view zoom
      - middle-drag: pan view
    """
    def __init__(
        self,
        on_pointer: Optional[Callable[[PointerEvent], None]] = None,
        parent: Optional[QWidget] = None,
    ):
        super().__init__(parent)
        self.setFocusPolicy(Qt.StrongFocus)

        self._preview: Optional[QImage] = None
        self._out_size: Tuple[int, int] = (0, 0)

        # View transform
        self._view_zoom = 1.0
        self._view_pan_x = 0.0
        self._view_pan_y = 0.0

        # Interaction
        self._dragging_mid = False
        self._last_pos = QPoint()
        self._last_move_canvas_xy: Optional[Tuple[int, int]] = None

        self._on_pointer = on_pointer

    def set_on_pointer(self, on_pointer: Callable[[PointerEvent], None]) -> None:
        self._on_pointer = on_pointer

    def set_buffer(self, bgr: np.ndarray) -> None:
        self._preview = bgr_to_qimage(bgr)
        self._out_size = (int(bgr.shape[1]), int(bgr.shape[0]))
        # Synchronous: the new buffer is on screen before the next event
        self.repaint()

    def reset_view(self) -> None:
        self._view_zoom = 1.0
        self._view_pan_x = 0.0
        self._view_pan_y = 0.0
        self.update()

    def _canvas_rect(self) -> Tuple[float, float, float, float]:
        out_w, out_h = self._out_size
        cx = self.width() * 0.5 + self._view_pan_x
        cy = self.height() * 0.5 + self._view_pan_y
        draw_w = out_w * self._view_zoom
        draw_h = out_h * self._view_zoom
        return (cx - draw_w * 0.5, cy - draw_h * 0.5, draw_w, draw_h)

    def paintEvent(self, _) -> None:
        p = QPainter(self)
        p.fillRect(self.rect(), QColor(30, 30, 30))

        if self._preview is None:
            p.setPen(QPen(QColor(220, 220, 220)))
            p.drawText(self.rect(), Qt.AlignCenter, "Empty canvas: double-click with Reset to restore")
            return

        x0, y0, draw_w, draw_h = self._canvas_rect()

        # Nearest neighbor so zoomed pixels stay crisp
        p.setRenderHint(QPainter.SmoothPixmapTransform, False)
        pm = QPixmap.fromImage(self._preview)
        p.drawPixmap(int(x0), int(y0), int(draw_w), int(draw_h), pm)

        p.setPen(QPen(QColor(240, 240, 240), 1))
        p.drawRect(QRectF(x0 - 1, y0 - 1, draw_w + 1, draw_h + 1))

        p.setPen(QPen(QColor(220, 220, 220)))
        p.drawText(10, self.height() - 10, "Right-click: next tool | Wheel: view zoom | Middle-drag: pan view")

    def _widget_to_canvas_xy(
        self, pos: QPoint, clamp: bool = False, edge: bool = False
    ) -> Optional[Tuple[int, int]]:
        """
        Convert widget coords to canvas pixel coords.
        Returns None if outside canvas, unless clamp is set. With edge set,
        positions past the right/bottom side clamp to width/height instead
        of the last pixel (an exclusive rectangle corner).
        An empty canvas maps everything to (0, 0) so clicks still reach
        the tools (Reset in particular).
        """
        out_w, out_h = self._out_size
        if out_w <= 0 or out_h <= 0:
            return (0, 0)
        x0, y0, draw_w, draw_h = self._canvas_rect()

        x = pos.x()
        y = pos.y()
        if not clamp and (x < x0 or y < y0 or x >= x0 + draw_w or y >= y0 + draw_h):
            return None

        u = (x - x0) / draw_w
        v = (y - y0) / draw_h
        cx_px = int(np.floor(u * out_w))
        cy_px = int(np.floor(v * out_h))
        max_x = out_w if edge else out_w - 1
        max_y = out_h if edge else out_h - 1
        cx_px = max(0, min(max_x, cx_px))
        cy_px = max(0, min(max_y, cy_px))
        return (cx_px, cy_px)

    def _emit(self, kind: EventKind, xy: Tuple[int, int], button: Button) -> None:
        if self._on_pointer is not None:
            self._on_pointer(PointerEvent(kind, xy[0], xy[1], button))

    def wheelEvent(self, e) -> None:
        delta = e.angleDelta().y()
        if delta == 0:
            return
        factor = 1.1 if delta > 0 else (1.0 / 1.1)
        self._view_zoom = max(0.05, min(64.0, self._view_zoom * factor))
        self.update()
        e.accept()

    def mousePressEvent(self, e) -> None:
        self._last_pos = e.position().toPoint()

        if e.button() == Qt.LeftButton:
            canvas_xy = self._widget_to_canvas_xy(self._last_pos)
            if canvas_xy is not None:
                self._last_move_canvas_xy = canvas_xy
                self._emit(EventKind.BUTTON_DOWN, canvas_xy, Button.PRIMARY)
        elif e.button() == Qt.RightButton:
            # Tool switching works anywhere in the widget
            canvas_xy = self._widget_to_canvas_xy(self._last_pos, clamp=True) or (0, 0)
            self._emit(EventKind.BUTTON_DOWN, canvas_xy, Button.SECONDARY)
        elif e.button() == Qt.MiddleButton:
            self._dragging_mid = True

    def mouseDoubleClickEvent(self, e) -> None:
        self._last_pos = e.position().toPoint()

        if e.button() == Qt.LeftButton:
            canvas_xy = self._widget_to_canvas_xy(self._last_pos)
            if canvas_xy is not None:
                self._emit(EventKind.DOUBLE_CLICK, canvas_xy, Button.PRIMARY)
        elif e.button() == Qt.RightButton:
            canvas_xy = self._widget_to_canvas_xy(self._last_pos, clamp=True) or (0, 0)
            self._emit(EventKind.BUTTON_DOWN, canvas_xy, Button.SECONDARY)

    def mouseMoveEvent(self, e) -> None:
        pos = e.position().toPoint()
        dx = pos.x() - self._last_pos.x()
        dy = pos.y() - self._last_pos.y()
        self._last_pos = pos

        if self._dragging_mid:
            self._view_pan_x += dx
            self._view_pan_y += dy
            self.update()
        elif e.buttons() & Qt.LeftButton:
            canvas_xy = self._widget_to_canvas_xy(pos, clamp=True)
            if canvas_xy is not None and canvas_xy != self._last_move_canvas_xy:
                self._last_move_canvas_xy = canvas_xy
                self._emit(EventKind.MOVE, canvas_xy, Button.NONE)

    def mouseReleaseEvent(self, e) -> None:
        if e.button() == Qt.LeftButton:
            self._last_move_canvas_xy = None
            canvas_xy = self._widget_to_canvas_xy(e.position().toPoint(), clamp=True, edge=True)
            if canvas_xy is not None:
                self._emit(EventKind.BUTTON_UP, canvas_xy, Button.PRIMARY)
        elif e.button() == Qt.MiddleButton:
            self._dragging_mid = False
