# friendplace/core/sizes.py
"""
Configurable dot and label sizes for mobile / desktop.

Pixel-level values are what the display layer draws; to_normalized_sizes
converts them into normalized 0-1 metrics for label layout so the algorithm
models what the user actually sees. Call it again whenever the graph resizes.
"""

from __future__ import annotations

from dataclasses import dataclass

from friendplace.core.config import (
    BREATHING_ROOM_PX,
    CHAR_WIDTH_RATIO,
    LINE_HEIGHT_RATIO,
)
from friendplace.core.types import PlacementSizes


@dataclass(frozen=True)
class GraphSizeConfig:
    """Pixel sizes of markers and labels."""
    dot_size: float
    """Self-placement dot diameter (px)."""
    guess_dot_size: float
    """Guess dot diameter (px)."""
    label_offset: float
    """Gap from dot to label edge (px)."""
    label_font_size: float
    label_pad_x: float
    """Horizontal padding, each side (px)."""
    label_pad_y: float
    """Vertical padding, each side (px)."""


MOBILE_SIZES = GraphSizeConfig(
    dot_size=14,
    guess_dot_size=10,
    label_offset=8,
    label_font_size=16,
    label_pad_x=4,
    label_pad_y=1,
)

DESKTOP_SIZES = GraphSizeConfig(
    dot_size=18,
    guess_dot_size=12,
    label_offset=10,
    label_font_size=18,
    label_pad_x=6,
    label_pad_y=2,
)


def to_normalized_sizes(
    cfg: GraphSizeConfig,
    graph_width: float,
    graph_height: float,
) -> PlacementSizes:
    """
    Convert pixel sizes into normalized placement sizes for a graph of the given size.
    Raises ValueError if the graph has no area.
    """
    if graph_width <= 0 or graph_height <= 0:
        raise ValueError(f"Graph size must be positive, got {graph_width}x{graph_height}")
    line_h = cfg.label_font_size * LINE_HEIGHT_RATIO
    label_h_px = line_h + 2 * cfg.label_pad_y
    ref_dim = min(graph_width, graph_height)
    return PlacementSizes(
        label_h=label_h_px / graph_height,
        offset=cfg.label_offset / ref_dim,
        margin=BREATHING_ROOM_PX / ref_dim,
        char_width=(cfg.label_font_size * CHAR_WIDTH_RATIO) / graph_width,
        pad_width=(2 * cfg.label_pad_x) / graph_width,
    )


def estimate_label_width(text: str, sizes: PlacementSizes) -> float:
    """Average-glyph estimate of a label's normalized width, padding included."""
    return len(text) * sizes.char_width + sizes.pad_width


def dot_obstacle_radius(
    dot_size_px: float,
    extra_px: float,
    graph_width: float,
    graph_height: float,
) -> float:
    """Normalized obstacle radius: half the dot plus breathing room, over the smaller graph side."""
    ref_dim = min(graph_width, graph_height)
    if ref_dim <= 0:
        return 0.0
    return (dot_size_px / 2 + extra_px) / ref_dim
