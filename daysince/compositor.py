from __future__ import annotations

"""
Image compositor: source PNG + centered label (+ optional downscale) -> PNG bytes.

Nothing is cached; every call re-reads the source image and the font.
"""

import io
from pathlib import Path
from typing import Optional, Tuple

from PIL import Image, ImageDraw, UnidentifiedImageError

from common.logging_setup import get_logger
from common.types import RenderParams, RenderResult
from common.utils import clamp
from daysince.errors import EncodeError, MissingGlyphError, SourceImageError
from daysince.glyphs import FontFace, load_face


log = get_logger(__name__)

# Bicubic in Pillow uses a = -0.5, i.e. Catmull-Rom.
RESAMPLE = Image.Resampling.BICUBIC


def load_source(path: Path) -> Image.Image:
    """
    Decode the source image and copy it into a fresh RGBA surface of the same size.

    Raises:
        SourceImageError: missing, unreadable or undecodable file.
    """
    try:
        with Image.open(path) as src:
            src.load()
            canvas = Image.new("RGBA", src.size)
            canvas.paste(src.convert("RGBA"), (0, 0))
    except FileNotFoundError as e:
        raise SourceImageError(f"source image not found: {path}", path) from e
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise SourceImageError(f"cannot decode source image: {e}", path) from e
    return canvas


def label_origin(image_width: int, text_width: int, y: int) -> Tuple[int, int]:
    """Left-baseline origin that centers `text_width` horizontally (truncating)."""
    return int((image_width - text_width) / 2), y


def draw_label(canvas: Image.Image, label: str, face: FontFace, y: int, fill=(255, 255, 255, 255)) -> bool:
    """
    Draw `label` centered on `canvas` with its baseline at `y`.

    Returns False (and leaves `canvas` untouched) when the font lacks a glyph.
    """
    try:
        total = face.text_width(label)
    except MissingGlyphError as e:
        log.warning(
            "skipping overlay, glyph missing from font",
            extra={"extra": {"label": label, "char": e.char}},
        )
        return False
    if not label:
        return True

    draw = ImageDraw.Draw(canvas)
    draw.fontmode = "L"
    draw.text(label_origin(canvas.width, total, y), label, font=face.font, fill=fill, anchor="ls")
    return True


def scaled_size(size: Tuple[int, int], target_width: int) -> Tuple[int, int]:
    """Exactly `target_width` wide; height scaled in integer math, floored, at least 1px."""
    w, h = size
    return clamp(target_width, 1, w), clamp(h * target_width // w, 1, h)


def maybe_scale(canvas: Image.Image, target_width: Optional[int]) -> Image.Image:
    if target_width is None:
        return canvas
    if target_width < 1:
        raise ValueError("target width must be >= 1")
    if target_width >= canvas.width:
        return canvas
    return canvas.resize(scaled_size(canvas.size, target_width), RESAMPLE)


def encode_png(img: Image.Image) -> bytes:
    buf = io.BytesIO()
    try:
        img.save(buf, format="PNG")
    except (OSError, ValueError) as e:
        raise EncodeError(f"cannot encode PNG: {e}") from e
    return buf.getvalue()


def render(label: str, params: RenderParams, target_width: Optional[int] = None) -> RenderResult:
    """
    Full pipeline for one request.

    Raises:
        SourceImageError, FontError, EncodeError: the request must fail.
        ValueError: target_width < 1.
    """
    canvas = load_source(params.source_image)
    face = load_face(params.font_file, params.font_size)
    drawn = draw_label(canvas, label, face, params.y_offset, fill=params.fill)
    out = maybe_scale(canvas, target_width)
    png = encode_png(out)
    return RenderResult(png=png, width=out.width, height=out.height, overlay_drawn=drawn)
