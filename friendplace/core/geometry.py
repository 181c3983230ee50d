# friendplace/core/geometry.py
"""
Geometry helpers for label rectangles: candidate rect per anchor, bounds,
rect/rect overlap, rect/circle intersection. Rects are (x1, y1, x2, y2) with
x1 <= x2 and y1 <= y2, y growing upwards.
"""

from __future__ import annotations

import numpy as np
from shapely.geometry import Point, box

from friendplace.core.types import ANCHOR_ORDER, Anchor, Obstacle, Position

Rect = tuple[float, float, float, float]


def candidate_rect(
    position: Position,
    anchor: Anchor,
    width: float,
    height: float,
    offset: float,
) -> Rect:
    """
    Rectangle for a label at anchor relative to the point.
    Diagonal anchors touch the point's corner at offset; N/S are centered
    horizontally, E/W centered vertically.
    """
    x, y = position.x, position.y
    hw = width / 2.0
    hh = height / 2.0
    if anchor is Anchor.NE:
        return (x + offset, y + offset, x + offset + width, y + offset + height)
    if anchor is Anchor.E:
        return (x + offset, y - hh, x + offset + width, y + hh)
    if anchor is Anchor.SE:
        return (x + offset, y - offset - height, x + offset + width, y - offset)
    if anchor is Anchor.N:
        return (x - hw, y + offset, x + hw, y + offset + height)
    if anchor is Anchor.NW:
        return (x - offset - width, y + offset, x - offset, y + offset + height)
    if anchor is Anchor.S:
        return (x - hw, y - offset - height, x + hw, y - offset)
    if anchor is Anchor.SW:
        return (x - offset - width, y - offset - height, x - offset, y - offset)
    if anchor is Anchor.W:
        return (x - offset - width, y - hh, x - offset, y + hh)
    raise ValueError(f"Unknown anchor: {anchor!r}")


def inflate(rect: Rect, margin: float) -> Rect:
    x1, y1, x2, y2 = rect
    return (x1 - margin, y1 - margin, x2 + margin, y2 + margin)


def is_in_bounds(rect: Rect) -> bool:
    """True if rect lies fully within the unit square."""
    x1, y1, x2, y2 = rect
    return x1 >= 0.0 and y1 >= 0.0 and x2 <= 1.0 and y2 <= 1.0


def rects_overlap(a: Rect, b: Rect) -> bool:
    """Positive-area intersection; touching edges do not count."""
    return a[0] < b[2] and a[2] > b[0] and a[1] < b[3] and a[3] > b[1]


def rect_hits_obstacle(rect: Rect, obstacle: Obstacle) -> bool:
    """True if the circle reaches inside the rectangle (tangent does not count)."""
    center = Point(obstacle.position.x, obstacle.position.y)
    return box(*rect).distance(center) < obstacle.radius


def candidate_table(
    positions: np.ndarray,
    widths: np.ndarray,
    heights: np.ndarray,
    offsets: np.ndarray,
) -> np.ndarray:
    """
    Rects for every label and anchor as an (n, 8, 4) array, anchors in ANCHOR_ORDER.
    positions is (n, 2); widths/heights/offsets are (n,).
    """
    n = positions.shape[0]
    out = np.zeros((n, len(ANCHOR_ORDER), 4), dtype=np.float64)
    for i in range(n):
        pos = Position(float(positions[i, 0]), float(positions[i, 1]))
        for a, anchor in enumerate(ANCHOR_ORDER):
            out[i, a] = candidate_rect(pos, anchor, float(widths[i]), float(heights[i]), float(offsets[i]))
    return out


def count_overlaps(rect: np.ndarray, others: np.ndarray) -> int:
    """Number of rects in others ((m, 4)) that rect ((4,)) overlaps with positive area."""
    if others.shape[0] == 0:
        return 0
    hit = (
        (rect[0] < others[:, 2])
        & (rect[2] > others[:, 0])
        & (rect[1] < others[:, 3])
        & (rect[3] > others[:, 1])
    )
    return int(np.count_nonzero(hit))
