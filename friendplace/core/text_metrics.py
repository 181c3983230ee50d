# friendplace/core/text_metrics.py
"""
Measure label text width in px using Pillow, and convert to normalized width.
Precise alternative to sizes.estimate_label_width when the font is available;
the CLI switches to it with --measure-text.
"""

from __future__ import annotations

import warnings
from collections.abc import Callable
from functools import lru_cache

from PIL import Image, ImageDraw, ImageFont

from friendplace.core.config import DEFAULT_FONT_FAMILY
from friendplace.core.sizes import GraphSizeConfig

# Tried after the requested family, in order.
FALLBACK_FONT_FILES: tuple[str, ...] = ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf")

_warned_families: set[str] = set()


def font_file_candidates(font_family: str) -> list[str]:
    """TrueType file names to try for a family: as named, without spaces, then fallbacks. No repeats."""
    names = [f"{font_family}.ttf", f"{font_family.replace(' ', '')}.ttf", *FALLBACK_FONT_FILES]
    return list(dict.fromkeys(names))


@lru_cache(maxsize=32)
def _font_for(font_family: str, size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    for name in font_file_candidates(font_family):
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            pass
    if font_family not in _warned_families:
        _warned_families.add(font_family)
        warnings.warn(f"No TrueType file for {font_family!r}; measuring with Pillow's default font.", UserWarning)
    return ImageFont.load_default()


def measure_text_px(text: str, font_family: str, font_size_px: float) -> tuple[float, float]:
    """Return (width_px, height_px) of the rendered text. Empty text measures (0, 0)."""
    if not text:
        return (0.0, 0.0)
    font = _font_for(font_family, max(1, round(font_size_px)))
    draw = ImageDraw.Draw(Image.new("RGB", (1, 1)))
    left, top, right, bottom = draw.textbbox((0, 0), text, font=font)
    # bitmap default font ignores size
    loaded = float(getattr(font, "size", 0) or font_size_px)
    scale = font_size_px / max(1.0, loaded)
    return (float(right - left) * scale, float(bottom - top) * scale)


def measured_label_width(
    text: str,
    font_family: str,
    cfg: GraphSizeConfig,
    graph_width: float,
) -> float:
    """Normalized label width from measured text plus horizontal padding."""
    if graph_width <= 0:
        raise ValueError(f"Graph width must be positive, got {graph_width}")
    w_px, _ = measure_text_px(text, font_family, cfg.label_font_size)
    return (w_px + 2 * cfg.label_pad_x) / graph_width


def measured_width_fn(
    cfg: GraphSizeConfig,
    graph_width: float,
    font_family: str = DEFAULT_FONT_FAMILY,
) -> Callable[[str], float]:
    """Width callable for self_label_inputs / guess_label_inputs backed by measured_label_width."""
    if graph_width <= 0:
        raise ValueError(f"Graph width must be positive, got {graph_width}")
    return lambda text: measured_label_width(text, font_family, cfg, graph_width)
