from __future__ import annotations

"""
Font face loading and glyph-advance measurement.

The font file is read once per call into memory; the same bytes feed the
Pillow rasterizer and the fontTools character map used for coverage checks.
"""

import io
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, List

from fontTools.ttLib import TTFont
from PIL import ImageFont

from daysince.errors import FontError, MissingGlyphError


@dataclass(frozen=True)
class FontFace:
    """A rasterizable font at one size plus the set of code points it maps."""
    font: ImageFont.FreeTypeFont
    codepoints: FrozenSet[int]
    size: float

    def has_glyph(self, char: str) -> bool:
        return ord(char) in self.codepoints

    def advance(self, char: str) -> int:
        """Horizontal advance of one character, floored to whole pixels."""
        if not self.has_glyph(char):
            raise MissingGlyphError(char)
        return int(math.floor(self.font.getlength(char)))

    def advances(self, label: str) -> List[int]:
        return [self.advance(ch) for ch in label]

    def text_width(self, label: str) -> int:
        """Sum of per-glyph advances; no kerning."""
        return sum(self.advances(label))


def _read_cmap(data: bytes) -> FrozenSet[int]:
    tt = TTFont(io.BytesIO(data), lazy=True)
    try:
        cmap: Dict[int, str] = tt.getBestCmap() or {}
    finally:
        tt.close()
    return frozenset(cmap.keys())


def load_face(path: Path, size: float) -> FontFace:
    """
    Load a TrueType/OpenType font at `size` (points at 72 DPI, i.e. pixels).

    Raises:
        FontError: file missing/unreadable or not a parseable font.
    """
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise FontError(f"cannot read font: {e}", path) from e

    try:
        codepoints = _read_cmap(data)
        font = ImageFont.truetype(io.BytesIO(data), size=size, layout_engine=ImageFont.Layout.BASIC)
    except Exception as e:
        raise FontError(f"cannot parse font: {e}", path) from e

    if not codepoints:
        raise FontError("font has no usable character map", path)
    return FontFace(font=font, codepoints=codepoints, size=size)
