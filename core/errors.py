from __future__ import annotations


class EditorError(Exception):
    """Base class for errors raised by the editor."""


class UsageError(EditorError):
    pass


class DecodeError(EditorError):
    pass


class SettingsError(EditorError):
    pass


class OutOfBounds(EditorError, IndexError):
    """A pixel coordinate fell outside the working buffer."""

    def __init__(self, x: int, y: int, width: int, height: int):
        super().__init__(f"pixel ({x}, {y}) outside {width}x{height} canvas")
        self.x = x
        self.y = y
        self.width = width
        self.height = height
