from __future__ import annotations

from typing import Callable, Iterable, Protocol

import numpy as np

from core.engine import (
    ColorSampled,
    EditEngine,
    Effect,
    EventDropped,
    PointerEvent,
    Redisplay,
    ToolChanged,
)
from core.log import log

PointerHandler = Callable[[PointerEvent], None]


class PresentationPort(Protocol):
    def show_window(self, name: str) -> None: ...

    def render(self, name: str, buffer: np.ndarray) -> None: ...

    def register_pointer_handler(self, name: str, callback: PointerHandler) -> None: ...

    def show_status(self, name: str, text: str) -> None: ...

    def block_for_input(self) -> int: ...


class EditorSession:
    """
    Wires an EditEngine to a presentation surface. Events are processed one
    at a time and every effect is carried out before on_pointer returns.
    """
    def __init__(self, engine: EditEngine, port: PresentationPort, window_name: str):
        self.engine = engine
        self.port = port
        self.window_name = window_name

    def run(self) -> int:
        self.port.show_window(self.window_name)
        self._render()
        self.port.register_pointer_handler(self.window_name, self.on_pointer)
        self._publish_status()
        log.info("ACTIVE TOOL: %s", self.engine.active_tool.label)
        return self.port.block_for_input()

    def on_pointer(self, event: PointerEvent) -> None:
        self.apply(self.engine.handle(event))

    def apply(self, effects: Iterable[Effect]) -> None:
        for effect in effects:
            if isinstance(effect, Redisplay):
                self._render()
                self._publish_status()
            elif isinstance(effect, ColorSampled):
                b, g, r = effect.color
                log.info("New eyedropper value = %d %d %d", b, g, r)
                self._publish_status()
            elif isinstance(effect, ToolChanged):
                log.info("ACTIVE TOOL: %s", effect.tool.label)
                self._publish_status()
            elif isinstance(effect, EventDropped):
                # Already logged by the engine
                continue
            else:
                raise TypeError(f"unknown effect {effect!r}")

    def status_text(self) -> str:
        canvas = self.engine.canvas
        return (
            f"{self.engine.active_tool.label} | color {self.engine.color.current()}"
            f" | {canvas.width} x {canvas.height}"
        )

    def _render(self) -> None:
        self.port.render(self.window_name, self.engine.canvas.working)

    def _publish_status(self) -> None:
        self.port.show_status(self.window_name, self.status_text())
