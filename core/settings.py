from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from core.errors import SettingsError

SETTINGS_ENV = "RASTER_EDITOR_SETTINGS"


@dataclass
class EditorSettings:
    window_name: str = "Raster Graphics Editor"

    # Starting eyedropper color, B,G,R
    default_color: Tuple[int, int, int] = (255, 255, 255)

    # Paint bucket tolerance per channel; zero means exact match only
    fill_lower_diff: Tuple[int, int, int] = (0, 0, 0)
    fill_upper_diff: Tuple[int, int, int] = (0, 0, 0)
    # Compare against the seed pixel instead of the neighboring pixel
    fill_fixed_range: bool = False

    log_level: str = "INFO"


def _channels_from_raw(raw, key: str, lo: int, hi: int) -> Tuple[int, int, int]:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        vals = [int(raw)] * 3
    elif isinstance(raw, list) and len(raw) == 3:
        try:
            vals = [int(v) for v in raw]
        except (TypeError, ValueError) as exc:
            raise SettingsError(f"{key}: expected numbers, got {raw!r}") from exc
    else:
        raise SettingsError(f"{key}: expected a number or a list of 3 numbers, got {raw!r}")
    if any(v < lo or v > hi for v in vals):
        raise SettingsError(f"{key}: values must be within [{lo}, {hi}], got {vals}")
    return (vals[0], vals[1], vals[2])


def _flag_from_raw(raw, key: str) -> bool:
    if not isinstance(raw, bool):
        raise SettingsError(f"{key}: expected true or false, got {raw!r}")
    return raw


def settings_from_raw(raw: dict) -> EditorSettings:
    if not isinstance(raw, dict):
        raise SettingsError("settings must be a JSON object")
    defaults = EditorSettings()
    return EditorSettings(
        window_name=str(raw.get("window_name", defaults.window_name)),
        default_color=_channels_from_raw(
            raw.get("default_color", list(defaults.default_color)), "default_color", 0, 255
        ),
        fill_lower_diff=_channels_from_raw(
            raw.get("fill_lower_diff", list(defaults.fill_lower_diff)), "fill_lower_diff", 0, 255
        ),
        fill_upper_diff=_channels_from_raw(
            raw.get("fill_upper_diff", list(defaults.fill_upper_diff)), "fill_upper_diff", 0, 255
        ),
        fill_fixed_range=_flag_from_raw(
            raw.get("fill_fixed_range", defaults.fill_fixed_range), "fill_fixed_range"
        ),
        log_level=str(raw.get("log_level", defaults.log_level)).upper(),
    )


def load_settings(path: Optional[str]) -> EditorSettings:
    if not path:
        return EditorSettings()
    settings_file = Path(path)
    try:
        raw = json.loads(settings_file.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise SettingsError(f"could not read settings {path!r}: {exc}") from exc
    return settings_from_raw(raw)
