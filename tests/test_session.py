from __future__ import annotations

import unittest

import numpy as np

from core.canvas import Canvas
from core.engine import Button, EditEngine, EventDropped, EventKind, PointerEvent
from core.session import EditorSession


class FakePort:
    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.handler = None

    def show_window(self, name: str) -> None:
        self.calls.append(("show_window", name))

    def render(self, name: str, buffer: np.ndarray) -> None:
        self.calls.append(("render", name, buffer.shape))

    def register_pointer_handler(self, name: str, callback) -> None:
        self.calls.append(("register", name))
        self.handler = callback

    def show_status(self, name: str, text: str) -> None:
        self.calls.append(("status", name, text))

    def block_for_input(self) -> int:
        self.calls.append(("block",))
        return 0

    def renders(self) -> list[tuple]:
        return [c for c in self.calls if c[0] == "render"]


class EditorSessionTests(unittest.TestCase):
    def setUp(self) -> None:
        self.engine = EditEngine(Canvas(np.zeros((4, 6, 3), dtype=np.uint8)))
        self.port = FakePort()
        self.session = EditorSession(self.engine, self.port, "Editor")

    def test_run_shows_renders_and_blocks(self) -> None:
        with self.assertLogs("raster_editor", level="INFO") as logs:
            self.assertEqual(self.session.run(), 0)
        self.assertEqual(
            [c[0] for c in self.port.calls],
            ["show_window", "render", "register", "status", "block"],
        )
        self.assertEqual(self.port.calls[1], ("render", "Editor", (4, 6, 3)))
        self.assertIsNotNone(self.port.handler)
        self.assertIn("ACTIVE TOOL: Eyedropper", logs.output[0])

    def test_status_text(self) -> None:
        self.assertEqual(self.session.status_text(), "Eyedropper | color (255, 255, 255) | 6 x 4")

    def test_tool_change_reports_without_render(self) -> None:
        with self.assertLogs("raster_editor", level="INFO") as logs:
            self.session.on_pointer(PointerEvent(EventKind.BUTTON_DOWN, 0, 0, Button.SECONDARY))
        self.assertIn("ACTIVE TOOL: Crop", logs.output[0])
        self.assertEqual(self.port.renders(), [])
        self.assertTrue(self.port.calls[-1][2].startswith("Crop |"))

    def test_sample_reports_color(self) -> None:
        with self.assertLogs("raster_editor", level="INFO") as logs:
            self.session.on_pointer(PointerEvent(EventKind.BUTTON_DOWN, 1, 1, Button.PRIMARY))
        self.assertIn("New eyedropper value = 0 0 0", logs.output[0])
        self.assertEqual(self.port.renders(), [])

    def test_redisplay_renders_current_buffer(self) -> None:
        self.session.on_pointer(PointerEvent(EventKind.BUTTON_DOWN, 0, 0, Button.SECONDARY))
        self.session.on_pointer(PointerEvent(EventKind.BUTTON_DOWN, 1, 1, Button.PRIMARY))
        self.assertEqual(self.port.renders(), [])
        self.session.on_pointer(PointerEvent(EventKind.BUTTON_UP, 4, 3, Button.PRIMARY))
        self.assertEqual(self.port.renders(), [("render", "Editor", (2, 3, 3))])
        self.assertTrue(self.port.calls[-1][2].endswith("3 x 2"))

    def test_dropped_event_is_logged_and_not_rendered(self) -> None:
        with self.assertLogs("raster_editor", level="WARNING"):
            effects = self.engine.handle(PointerEvent(EventKind.BUTTON_DOWN, 40, 40, Button.PRIMARY))
        self.assertIsInstance(effects[0], EventDropped)
        self.session.apply(effects)
        self.assertEqual(self.port.calls, [])

    def test_unknown_effect_raises(self) -> None:
        with self.assertRaises(TypeError):
            self.session.apply([object()])


if __name__ == "__main__":
    unittest.main()
