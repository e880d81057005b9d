from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from swipechart.raster.canvas import RGBA, blend_mask


TextAnchor = Literal["top_left", "top_center", "middle_left"]
Font = ImageFont.FreeTypeFont | ImageFont.ImageFont

DEFAULT_FONT_SIZE_PX = 12.0
# Proportional sans faces, first match wins.
SANS_FONT_PATTERNS = ("helvetica", "arial", "dejavusans", "liberationsans", "notosans")
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


def draw_text(
    dst: np.ndarray,
    x: float,
    y: float,
    text: str,
    color: RGBA,
    *,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    anchor: TextAnchor = "top_left",
) -> None:
    """Blend ``text`` into ``dst`` with its ``anchor`` point placed at (x, y)."""

    if not text:
        return
    mask = _render_mask(text, _load_font(font_size_px))
    h, w = mask.shape
    if anchor == "top_center":
        x -= w / 2.0
    elif anchor == "middle_left":
        y -= h / 2.0
    blend_mask(dst, int(round(x)), int(round(y)), mask, color)


def text_size(text: str, *, font_size_px: float = DEFAULT_FONT_SIZE_PX) -> tuple[int, int]:
    font = _load_font(font_size_px)
    if not text:
        ascent, descent = font.getmetrics()
        return (0, max(1, int(ascent + descent)))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


@lru_cache(maxsize=256)
def _render_mask(text: str, font: Font) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=16)
def _load_font(font_size_px: float) -> Font:
    size = max(1, int(round(font_size_px)))
    path = _sans_font_path()
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError:
            return ImageFont.load_default(size=size)
    # Pillow's bundled face; scalable from Pillow 10.1.
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=1)
def _sans_font_path() -> Path | None:
    found: list[Path] = []
    for base in FONT_DIRS:
        if base.is_dir():
            found.extend(p for p in base.rglob("*") if p.suffix.lower() in {".ttf", ".otf", ".ttc"})
    stems = [(p.stem.lower().replace(" ", "").replace("-", ""), p) for p in found]
    for pattern in SANS_FONT_PATTERNS:
        for stem, path in stems:
            # Skip bold/italic/mono variants of the family.
            if stem.startswith(pattern) and not any(tag in stem for tag in ("bold", "oblique", "italic", "mono")):
                return path
    return None
