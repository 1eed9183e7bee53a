from __future__ import annotations

import numpy as np
from PIL import Image, UnidentifiedImageError

from core.errors import DecodeError


def load_image_bgr(path: str) -> np.ndarray:
    try:
        with Image.open(path) as img:
            # Flatten any mode (palette, RGBA, L...) to three channels
            rgb = np.array(img.convert("RGB"), dtype=np.uint8)
    except (OSError, UnidentifiedImageError, ValueError) as exc:
        raise DecodeError(f"could not decode image {path!r}: {exc}") from exc
    return np.ascontiguousarray(rgb[..., ::-1])


def save_image(path: str, bgr: np.ndarray) -> None:
    if bgr.size == 0:
        raise ValueError("cannot save an empty image")
    rgb = np.ascontiguousarray(bgr[..., ::-1])
    Image.fromarray(rgb).save(path)
