from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

from core.canvas import Canvas, Color
from core.errors import OutOfBounds
from core.fill import Rect
from core.log import log
from core.settings import EditorSettings
from core.state import ActiveColor, StrokeState, ToolKind, ToolSelector


class EventKind(Enum):
    BUTTON_DOWN = "down"
    BUTTON_UP = "up"
    MOVE = "move"
    DOUBLE_CLICK = "double_click"


class Button(Enum):
    NONE = 0
    PRIMARY = 1
    SECONDARY = 2
    MIDDLE = 3


@dataclass(frozen=True)
class PointerEvent:
    kind: EventKind
    x: int
    y: int
    button: Button = Button.NONE


@dataclass(frozen=True)
class Redisplay:
    pass


@dataclass(frozen=True)
class ColorSampled:
    color: Color


@dataclass(frozen=True)
class ToolChanged:
    tool: ToolKind


@dataclass(frozen=True)
class EventDropped:
    event: PointerEvent
    reason: str


Effect = Union[Redisplay, ColorSampled, ToolChanged, EventDropped]


class EditEngine:
    """
    Interprets pointer events against the canvas for the active tool.

    handle() never touches a display: it mutates the canvas and returns the
    effects (redisplay, reports) the caller has to carry out before feeding
    the next event.
    """
    def __init__(
        self,
        canvas: Canvas,
        settings: Optional[EditorSettings] = None,
        tools: Optional[ToolSelector] = None,
        color: Optional[ActiveColor] = None,
    ):
        self.settings = settings or EditorSettings()
        self.canvas = canvas
        self.tools = tools or ToolSelector()
        if color is None:
            color = ActiveColor()
            color.sample_from(self.settings.default_color)
        self.color = color
        self.stroke = StrokeState()
        self.last_fill_rect: Optional[Rect] = None

    @property
    def active_tool(self) -> ToolKind:
        return self.tools.current()

    def handle(self, event: PointerEvent) -> List[Effect]:
        # The secondary button always switches tools, whatever is active.
        if event.kind == EventKind.BUTTON_DOWN and event.button == Button.SECONDARY:
            return self._advance_tool()

        try:
            return self._dispatch(event)
        except OutOfBounds as exc:
            log.warning("Dropped %s event at (%d, %d): %s", event.kind.value, event.x, event.y, exc)
            return [EventDropped(event, str(exc))]

    def _advance_tool(self) -> List[Effect]:
        self.stroke.drawing = False
        tool = self.tools.advance()
        return [ToolChanged(tool)]

    def _dispatch(self, event: PointerEvent) -> List[Effect]:
        tool = self.tools.current()
        primary = event.button == Button.PRIMARY
        x, y = event.x, event.y

        if tool == ToolKind.EYEDROPPER:
            if event.kind == EventKind.BUTTON_DOWN and primary:
                self.color.sample_from(self.canvas.get_pixel(x, y))
                return [ColorSampled(self.color.current())]
            return []

        if tool == ToolKind.CROP:
            if event.kind == EventKind.BUTTON_DOWN and primary:
                self.stroke.crop_anchor = (x, y)
                return []
            if event.kind == EventKind.BUTTON_UP and primary:
                return self._crop(event)
            return []

        if tool == ToolKind.PENCIL:
            if event.kind == EventKind.BUTTON_DOWN and primary:
                self.canvas.set_pixel(x, y, self.color.current())
                self.stroke.drawing = True
                return []
            if event.kind == EventKind.MOVE and self.stroke.drawing:
                self.canvas.set_pixel(x, y, self.color.current())
                return []
            if event.kind == EventKind.BUTTON_UP and primary:
                self.stroke.drawing = False
                return [Redisplay()]
            return []

        if tool == ToolKind.PAINT_BUCKET:
            if event.kind == EventKind.BUTTON_DOWN and primary:
                self.last_fill_rect = self.canvas.flood_fill(
                    (x, y),
                    self.color.current(),
                    lower_diff=self.settings.fill_lower_diff,
                    upper_diff=self.settings.fill_upper_diff,
                    fixed_range=self.settings.fill_fixed_range,
                )
                log.debug("Filled region %s from (%d, %d)", self.last_fill_rect, x, y)
                return [Redisplay()]
            return []

        if tool == ToolKind.RESET:
            if event.kind == EventKind.DOUBLE_CLICK and primary:
                self.canvas.reset_to_original()
                return [Redisplay()]
            return []

        raise AssertionError(f"unhandled tool {tool!r}")

    def _crop(self, event: PointerEvent) -> List[Effect]:
        x, y = event.x, event.y
        anchor: Optional[Tuple[int, int]] = self.stroke.crop_anchor
        if anchor is None:
            log.warning("Dropped crop release at (%d, %d): no anchor point", x, y)
            return [EventDropped(event, "crop released without a starting point")]
        region = self.canvas.extract_region(anchor, (x, y))
        self.canvas.replace_working(region)
        log.debug("Cropped %s..%s to %dx%d", anchor, (x, y), self.canvas.width, self.canvas.height)
        return [Redisplay()]
