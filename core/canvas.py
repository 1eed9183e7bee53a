from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np

from core.errors import OutOfBounds
from core.fill import Diff, Rect, flood_fill
from core.io import load_image_bgr

Color = Tuple[int, int, int]
Point = Tuple[int, int]


class Canvas:
    """
    Two BGR pixel buffers shaped (h, w, 3):
      - original: captured at load time, read-only afterwards
      - working: what every tool edits and what gets displayed
    """
    def __init__(self, pixels: np.ndarray):
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"expected an (h, w, 3) buffer, got shape {pixels.shape}")
        self._original = np.array(pixels, dtype=np.uint8, copy=True)
        self._original.setflags(write=False)
        self.working = self._original.copy()

    @classmethod
    def load(cls, path: str) -> "Canvas":
        return cls(load_image_bgr(path))

    @property
    def original(self) -> np.ndarray:
        return self._original

    @property
    def width(self) -> int:
        return int(self.working.shape[1])

    @property
    def height(self) -> int:
        return int(self.working.shape[0])

    def _check(self, x: int, y: int) -> None:
        if x < 0 or y < 0 or x >= self.width or y >= self.height:
            raise OutOfBounds(x, y, self.width, self.height)

    def get_pixel(self, x: int, y: int) -> Color:
        self._check(x, y)
        b, g, r = self.working[y, x]
        return (int(b), int(g), int(r))

    def set_pixel(self, x: int, y: int, color: Sequence[int]) -> None:
        self._check(x, y)
        self.working[y, x] = (int(color[0]), int(color[1]), int(color[2]))

    def extract_region(self, p1: Point, p2: Point) -> np.ndarray:
        # Corners may come in any order; the max corner is exclusive.
        x0, x1 = sorted((int(p1[0]), int(p2[0])))
        y0, y1 = sorted((int(p1[1]), int(p2[1])))
        x0 = max(0, min(self.width, x0))
        x1 = max(0, min(self.width, x1))
        y0 = max(0, min(self.height, y0))
        y1 = max(0, min(self.height, y1))
        return self.working[y0:y1, x0:x1].copy()

    def replace_working(self, buffer: np.ndarray) -> None:
        if buffer.ndim != 3 or buffer.shape[2] != 3:
            raise ValueError(f"expected an (h, w, 3) buffer, got shape {buffer.shape}")
        self.working = np.ascontiguousarray(buffer, dtype=np.uint8)

    def reset_to_original(self) -> None:
        self.working = self._original.copy()

    def flood_fill(
        self,
        seed: Point,
        color: Color,
        lower_diff: Diff = 0,
        upper_diff: Diff = 0,
        fixed_range: bool = False,
        connectivity: int = 4,
    ) -> Rect:
        x, y = seed
        self._check(x, y)
        return flood_fill(
            self.working,
            (x, y),
            color,
            lower_diff=lower_diff,
            upper_diff=upper_diff,
            connectivity=connectivity,
            fixed_range=fixed_range,
        )
