#!/usr/bin/env python3
"""
Build the source image the server draws day counts onto.

Writes assets/images/src/base.png (800x600 by default):
- If --src-image is given: resize it to the requested size.
- Else: synthesize a dark textured background with a framed label area
  around the default baseline (y=345).

Examples:
  python scripts/build_source_image.py
  python scripts/build_source_image.py --src-image my_photo.jpg --size 1024x768
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Tuple

import numpy as np
from PIL import Image, ImageDraw


def parse_size(s: str) -> Tuple[int, int]:
    w, h = s.lower().split("x")
    return int(w), int(h)


def load_image_as_source(src_image: str, out_size: Tuple[int, int]) -> Image.Image:
    with Image.open(src_image) as img:
        return img.convert("RGBA").resize(out_size, Image.Resampling.LANCZOS)


def synthesize_source(out_size: Tuple[int, int], seed: int = 1234, baseline: int = 345) -> Image.Image:
    """Dark vertical gradient + mild noise, with a panel behind the label."""
    w, h = out_size
    rng = np.random.default_rng(seed)
    grad = np.linspace(70, 20, h, dtype=np.float32)[:, None, None]
    noise = rng.normal(0, 6, size=(h, w, 3)).astype(np.float32)
    tint = np.array([0.55, 0.75, 1.0], dtype=np.float32)[None, None, :]
    base = (grad * tint + noise).clip(0, 255).astype(np.uint8)

    img = Image.fromarray(base).convert("RGBA")
    draw = ImageDraw.Draw(img)
    bottom = min(h - 1, baseline + 50)
    top = min(max(0, baseline - 150), bottom)
    draw.rectangle([w // 10, top, w - w // 10, bottom], outline=(200, 200, 220, 255), width=3)
    draw.text((w // 10, bottom + 12), "DAYS SINCE", fill=(220, 220, 230, 255))
    return img


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("--out", default="assets/images/src/base.png", help="Output PNG path")
    ap.add_argument("--size", default="800x600", help="Output size WxH")
    ap.add_argument("--src-image", default="", help="Optional PNG/JPG used as the base")
    ap.add_argument("--baseline", type=int, default=345, help="Label baseline used to place the panel")
    ap.add_argument("--seed", type=int, default=1234, help="Seed for the synthetic background")
    args = ap.parse_args()

    out_size = parse_size(args.size)
    if args.src_image:
        img = load_image_as_source(args.src_image, out_size)
    else:
        img = synthesize_source(out_size, seed=args.seed, baseline=args.baseline)

    out = Path(args.out)
    out.parent.mkdir(parents=True, exist_ok=True)
    img.save(out, format="PNG")
    print(f"[ok] wrote {out} ({img.width}x{img.height})")
    print("You can now run the image API:")
    print("  PORT=8080 python -m daysince.server")


if __name__ == "__main__":
    main()
