from __future__ import annotations

from collections import deque
from typing import Optional, Sequence, Tuple, Union

import numpy as np

Rect = Tuple[int, int, int, int]
Diff = Union[int, Sequence[int]]

_DIRS_4 = ((1, 0), (-1, 0), (0, 1), (0, -1))
_DIRS_8 = _DIRS_4 + ((1, 1), (1, -1), (-1, 1), (-1, -1))


def _as_triple(diff: Diff) -> np.ndarray:
    if np.isscalar(diff):
        vals = [int(diff)] * 3
    else:
        vals = [int(v) for v in diff]
        if len(vals) != 3:
            raise ValueError(f"tolerance needs 3 channels, got {len(vals)}")
    if any(v < 0 for v in vals):
        raise ValueError("tolerance values must be non-negative")
    return np.array(vals, dtype=np.int16)


def _in_range(ref: np.ndarray, cand: np.ndarray, lo: np.ndarray, up: np.ndarray) -> np.ndarray:
    return np.all((cand >= ref - lo) & (cand <= ref + up), axis=-1)


def _neighbor_ok(src: np.ndarray, lo: np.ndarray, up: np.ndarray, dirs) -> dict:
    """
    For each direction (dx, dy), a bool grid telling whether the pixel at
    (x + dx, y + dy) may join a region that already holds (x, y).
    """
    h, w, _ = src.shape
    out = {}
    for dx, dy in dirs:
        ok = np.zeros((h, w), dtype=bool)
        ys_ref = slice(max(0, -dy), h - max(0, dy))
        xs_ref = slice(max(0, -dx), w - max(0, dx))
        ys_cand = slice(max(0, dy), h - max(0, -dy))
        xs_cand = slice(max(0, dx), w - max(0, -dx))
        ok[ys_ref, xs_ref] = _in_range(src[ys_ref, xs_ref], src[ys_cand, xs_cand], lo, up)
        out[(dx, dy)] = ok
    return out


def fill_mask(
    buffer: np.ndarray,
    seed_xy: Tuple[int, int],
    lower_diff: Diff = 0,
    upper_diff: Diff = 0,
    connectivity: int = 4,
    fixed_range: bool = False,
) -> np.ndarray:
    if connectivity not in (4, 8):
        raise ValueError(f"connectivity must be 4 or 8, got {connectivity}")
    h, w, _ = buffer.shape
    x0, y0 = seed_xy
    if x0 < 0 or y0 < 0 or x0 >= w or y0 >= h:
        return np.zeros((h, w), dtype=bool)

    src = buffer.astype(np.int16)
    lo = _as_triple(lower_diff)
    up = _as_triple(upper_diff)
    dirs = _DIRS_4 if connectivity == 4 else _DIRS_8

    if fixed_range:
        seed_ok = _in_range(src[y0, x0], src, lo, up)
        edge_ok = None
    else:
        seed_ok = None
        edge_ok = _neighbor_ok(src, lo, up, dirs)

    out = np.zeros((h, w), dtype=bool)
    q: deque[tuple[int, int]] = deque()
    q.append((x0, y0))
    out[y0, x0] = True

    while q:
        cx, cy = q.popleft()
        for dx, dy in dirs:
            nx, ny = cx + dx, cy + dy
            if nx < 0 or ny < 0 or nx >= w or ny >= h:
                continue
            if out[ny, nx]:
                continue
            if seed_ok is not None:
                if not seed_ok[ny, nx]:
                    continue
            elif not edge_ok[(dx, dy)][cy, cx]:
                continue
            out[ny, nx] = True
            q.append((nx, ny))

    return out


def bounding_rect(mask: np.ndarray) -> Optional[Rect]:
    ys, xs = np.where(mask)
    if ys.size == 0 or xs.size == 0:
        return None
    x0 = int(xs.min())
    y0 = int(ys.min())
    x1 = int(xs.max()) + 1
    y1 = int(ys.max()) + 1
    return (x0, y0, x1 - x0, y1 - y0)


def flood_fill(
    buffer: np.ndarray,
    seed_xy: Tuple[int, int],
    color: Tuple[int, int, int],
    lower_diff: Diff = 0,
    upper_diff: Diff = 0,
    connectivity: int = 4,
    fixed_range: bool = False,
) -> Rect:
    """
    Recolor, in place, the region grown from seed_xy and return its
    bounding rectangle (x, y, w, h). Candidates are compared against the
    pre-fill pixel values, either of the seed (fixed range) or of the
    neighbor they are reached from (floating range).
    """
    mask = fill_mask(buffer, seed_xy, lower_diff, upper_diff, connectivity, fixed_range)
    buffer[mask] = np.array(color, dtype=buffer.dtype)
    rect = bounding_rect(mask)
    return rect if rect is not None else (0, 0, 0, 0)
