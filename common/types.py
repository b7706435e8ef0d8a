from __future__ import annotations

from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Tuple, Any, Dict


RGBA = Tuple[int, int, int, int]

WHITE: RGBA = (255, 255, 255, 255)


def parse_rgba(value: Any) -> RGBA:
    """[r, g, b] or [r, g, b, a] (0..255 each) -> RGBA tuple; alpha defaults to 255."""
    parts = [int(v) for v in value]
    if len(parts) == 3:
        parts.append(255)
    if len(parts) != 4 or not all(0 <= v <= 255 for v in parts):
        raise ValueError("fill must be 3 or 4 integers in 0..255")
    return (parts[0], parts[1], parts[2], parts[3])


@dataclass(frozen=True, slots=True)
class OverlayRequest:
    """
    What the caller asked to be drawn.

    Attributes:
        days: literal day string, drawn verbatim.
        date: calendar date `YYYY-MM-DD`; takes precedence over `days`.
    """
    days: Optional[str] = None
    date: Optional[str] = None

    def __post_init__(self) -> None:
        if self.days is None and self.date is None:
            raise ValueError("either days or date is required")

    @property
    def kind(self) -> str:
        return "date" if self.date is not None else "days"


@dataclass(frozen=True, slots=True)
class ResolvedLabel:
    """
    Output of the day-count resolver.

    Attributes:
        text: string drawn onto the image.
        days: computed day count (None when `text` came verbatim from the path).
        fallback: True when the date did not parse and the zero-value date was used.
    """
    text: str
    days: Optional[int] = None
    fallback: bool = False


@dataclass(frozen=True, slots=True)
class RenderParams:
    """
    Fixed per-process render settings (see config/params.yaml).

    Attributes:
        source_image: PNG the label is drawn onto.
        font_file: TrueType/OpenType font used for the label.
        font_size: size in points at 72 DPI (== pixels).
        y_offset: baseline of the label, in pixels from the top.
        fill: RGBA text colour.
    """
    source_image: Path
    font_file: Path
    font_size: float = 144.0
    y_offset: int = 345
    fill: RGBA = WHITE

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise ValueError("font_size must be > 0")

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "RenderParams":
        return cls(
            source_image=Path(cfg["source_image"]),
            font_file=Path(cfg["font_file"]),
            font_size=float(cfg.get("font_size", 144)),
            y_offset=int(cfg.get("y_offset", 345)),
            fill=parse_rgba(cfg.get("fill", WHITE)),
        )


@dataclass(slots=True)
class RenderResult:
    """Encoded PNG plus what happened while producing it."""
    png: bytes
    width: int
    height: int
    overlay_drawn: bool = True

    def to_meta(self) -> Dict[str, Any]:
        """Metadata without image bytes (safe to log/serialize)."""
        d = asdict(self)
        d["png"] = len(self.png)
        return d
