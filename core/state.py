from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


class ToolKind(Enum):
    EYEDROPPER = 0
    CROP = 1
    PENCIL = 2
    PAINT_BUCKET = 3
    RESET = 4

    @property
    def label(self) -> str:
        return _TOOL_LABELS[self]


_TOOL_LABELS = {
    ToolKind.EYEDROPPER: "Eyedropper",
    ToolKind.CROP: "Crop",
    ToolKind.PENCIL: "Pencil",
    ToolKind.PAINT_BUCKET: "Paint Bucket",
    ToolKind.RESET: "Reset",
}

TOOL_ORDER: Tuple[ToolKind, ...] = tuple(ToolKind)


class ToolSelector:
    """Cycles through TOOL_ORDER; the index alone decides the active tool."""

    def __init__(self, start: ToolKind = ToolKind.EYEDROPPER):
        self._index = TOOL_ORDER.index(start)

    @property
    def index(self) -> int:
        return self._index

    def current(self) -> ToolKind:
        return TOOL_ORDER[self._index]

    def advance(self) -> ToolKind:
        self._index = (self._index + 1) % len(TOOL_ORDER)
        return self.current()


@dataclass
class ActiveColor:
    blue: int = 255
    green: int = 255
    red: int = 255

    def sample_from(self, color: Sequence[int]) -> None:
        self.blue = int(color[0])
        self.green = int(color[1])
        self.red = int(color[2])

    def current(self) -> Tuple[int, int, int]:
        return (self.blue, self.green, self.red)


@dataclass
class StrokeState:
    # True between a pencil press and its release
    drawing: bool = False
    # Last crop press; kept after the crop completes
    crop_anchor: Optional[Tuple[int, int]] = None
