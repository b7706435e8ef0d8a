from __future__ import annotations

from pathlib import Path
from typing import Optional


class RenderError(Exception):
    """Hard failure while producing an image; the request gets a 500."""

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class SourceImageError(RenderError):
    pass


class FontError(RenderError):
    pass


class EncodeError(RenderError):
    pass


class MissingGlyphError(Exception):
    """The font has no glyph for `char`. Soft: the overlay is skipped."""

    def __init__(self, char: str):
        super().__init__(f"no glyph for {char!r} (U+{ord(char):04X})")
        self.char = char
