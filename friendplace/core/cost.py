# friendplace/core/cost.py
"""
Cost of a candidate label placement. Lower is better.

    cost = anchor preference + OVERLAP_WEIGHT * (labels hit + obstacles hit)
           + OUT_OF_BOUNDS_WEIGHT * (rect leaves the unit square)

Weights are ordered bounds >> overlap >> preference, so staying on the chart
wins over avoiding overlap, which wins over cosmetic direction choice.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

import numpy as np

from friendplace.core.config import (
    ANCHOR_PREFERENCE_STEP,
    LABEL_MARGIN,
    OUT_OF_BOUNDS_WEIGHT,
    OVERLAP_WEIGHT,
)
from friendplace.core.geometry import (
    Rect,
    count_overlaps,
    inflate,
    is_in_bounds,
    rect_hits_obstacle,
    rects_overlap,
)
from friendplace.core.types import ANCHOR_ORDER, Anchor, Obstacle

_PREFERENCE: dict[Anchor, float] = {
    anchor: rank * ANCHOR_PREFERENCE_STEP for rank, anchor in enumerate(ANCHOR_ORDER)
}


def anchor_preference(anchor: Anchor) -> float:
    """0.0 for NE rising to just under 1.0 for W."""
    return _PREFERENCE[anchor]


def obstacle_hits(rect: Rect, obstacles: Iterable[Obstacle]) -> int:
    return sum(1 for ob in obstacles if rect_hits_obstacle(rect, ob))


def out_of_bounds_penalty(rect: Rect) -> float:
    return 0.0 if is_in_bounds(rect) else OUT_OF_BOUNDS_WEIGHT


def static_cost(rect: Rect, anchor: Anchor, obstacles: Sequence[Obstacle]) -> float:
    """The part of the cost that does not depend on other labels."""
    return (
        anchor_preference(anchor)
        + OVERLAP_WEIGHT * obstacle_hits(rect, obstacles)
        + out_of_bounds_penalty(rect)
    )


def placement_cost(
    rect: Rect,
    anchor: Anchor,
    placed_rects: Iterable[Rect],
    obstacles: Sequence[Obstacle] = (),
    margin: float = LABEL_MARGIN,
) -> float:
    """
    Full cost of rect (the label at anchor) against already placed label rects and obstacles.
    The candidate is inflated by margin for label/label tests only.
    """
    padded = inflate(rect, margin)
    label_hits = sum(1 for other in placed_rects if rects_overlap(padded, other))
    return static_cost(rect, anchor, obstacles) + OVERLAP_WEIGHT * label_hits


def static_cost_table(
    rects: np.ndarray,
    obstacles: Sequence[Obstacle],
) -> np.ndarray:
    """(n, 8) static costs for a candidate table from geometry.candidate_table."""
    n, k, _ = rects.shape
    table = np.zeros((n, k), dtype=np.float64)
    for i in range(n):
        for a, anchor in enumerate(ANCHOR_ORDER):
            table[i, a] = static_cost(tuple(float(v) for v in rects[i, a]), anchor, obstacles)
    return table


def dynamic_cost(padded_rect: np.ndarray, other_rects: np.ndarray) -> float:
    """Overlap cost of a (margin-inflated) candidate against the other labels' current rects."""
    return OVERLAP_WEIGHT * count_overlaps(padded_rect, other_rects)
