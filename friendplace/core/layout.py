# friendplace/core/layout.py
"""
Label anchor assignment with collision avoidance.

1. Greedy: labels in the given order, each takes its cheapest anchor against
   the labels already placed before it.
2. Improvement: coordinate descent over all labels against the full current
   assignment, switching only on a strictly lower cost; stops after a pass
   with no change or after max_iterations passes.

Obstacles are fixed and only add overlap cost. Always returns one anchor per id.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterable, Sequence

import numpy as np

from friendplace.core.config import (
    COST_EPSILON,
    LABEL_HEIGHT,
    LABEL_MARGIN,
    LABEL_OFFSET,
    MAX_LAYOUT_ITERATIONS,
)
from friendplace.core.cost import dynamic_cost, static_cost_table
from friendplace.core.geometry import candidate_table, count_overlaps, is_in_bounds, rect_hits_obstacle
from friendplace.core.sizes import estimate_label_width
from friendplace.core.types import (
    ANCHOR_ORDER,
    Anchor,
    Guess,
    GuessScoreDetail,
    LabelInput,
    LabelLayout,
    Obstacle,
    PlacementSizes,
    PlayerRecord,
    Position,
)

logger = logging.getLogger(__name__)


def _resolve(value: float | None, sized: float | None, default: float) -> float:
    if value is not None:
        return value
    if sized is not None:
        return sized
    return default


def _label_arrays(
    labels: Sequence[LabelInput],
    sizes: PlacementSizes | None,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """positions (n, 2), widths, heights, offsets, margins (n,)."""
    positions = np.array([[lab.position.x, lab.position.y] for lab in labels], dtype=np.float64).reshape(-1, 2)
    widths = np.array([lab.label_width for lab in labels], dtype=np.float64)
    heights = np.array(
        [_resolve(lab.label_height, sizes.label_h if sizes else None, LABEL_HEIGHT) for lab in labels],
        dtype=np.float64,
    )
    offsets = np.array(
        [_resolve(lab.offset, sizes.offset if sizes else None, LABEL_OFFSET) for lab in labels],
        dtype=np.float64,
    )
    margins = np.array(
        [_resolve(lab.margin, sizes.margin if sizes else None, LABEL_MARGIN) for lab in labels],
        dtype=np.float64,
    )
    return positions, widths, heights, offsets, margins


def _anchor_costs(
    i: int,
    others: np.ndarray,
    static: np.ndarray,
    padded: np.ndarray,
) -> np.ndarray:
    """Costs of all 8 anchors for label i against the given other rects."""
    return np.array(
        [static[i, a] + dynamic_cost(padded[i, a], others) for a in range(len(ANCHOR_ORDER))],
        dtype=np.float64,
    )


def compute_label_layout(
    labels: Sequence[LabelInput],
    sizes: PlacementSizes | None = None,
    obstacles: Sequence[Obstacle] | None = None,
    max_iterations: int = MAX_LAYOUT_ITERATIONS,
) -> LabelLayout:
    """
    Assign an anchor to every label. Processing order is the order of labels.
    Per-label height/offset/margin override sizes, which override config defaults.
    """
    obstacles = list(obstacles) if obstacles else []
    n = len(labels)
    if n == 0:
        return LabelLayout(anchors={}, iterations=0, label_overlaps=0, obstacle_overlaps=0, out_of_bounds=0)

    positions, widths, heights, offsets, margins = _label_arrays(labels, sizes)
    rects = candidate_table(positions, widths, heights, offsets)
    grow = margins[:, None, None] * np.array([-1.0, -1.0, 1.0, 1.0])
    padded = rects + grow
    static = static_cost_table(rects, obstacles)

    idx = np.arange(n)
    assignment = np.zeros(n, dtype=np.int64)

    for i in range(n):
        placed = rects[idx[:i], assignment[:i]]
        assignment[i] = int(np.argmin(_anchor_costs(i, placed, static, padded)))

    iterations = 0
    for _ in range(max(0, max_iterations)):
        iterations += 1
        changed = False
        for i in range(n):
            rest = idx != i
            others = rects[idx[rest], assignment[rest]]
            costs = _anchor_costs(i, others, static, padded)
            best = int(np.argmin(costs))
            if costs[best] < costs[assignment[i]] - COST_EPSILON:
                assignment[i] = best
                changed = True
        if not changed:
            break

    anchors: dict[str, Anchor] = {}
    label_overlaps = obstacle_overlaps = out_of_bounds = 0
    for i, lab in enumerate(labels):
        a = int(assignment[i])
        anchors[lab.id] = ANCHOR_ORDER[a]
        rest = idx != i
        if count_overlaps(padded[i, a], rects[idx[rest], assignment[rest]]) > 0:
            label_overlaps += 1
        rect = tuple(float(v) for v in rects[i, a])
        if any(rect_hits_obstacle(rect, ob) for ob in obstacles):
            obstacle_overlaps += 1
        if not is_in_bounds(rect):
            out_of_bounds += 1

    layout = LabelLayout(
        anchors=anchors,
        iterations=iterations,
        label_overlaps=label_overlaps,
        obstacle_overlaps=obstacle_overlaps,
        out_of_bounds=out_of_bounds,
    )
    logger.debug(
        "Layout of %d labels after %d passes: %d label, %d obstacle, %d bounds conflicts",
        n, iterations, label_overlaps, obstacle_overlaps, out_of_bounds,
    )
    return layout


def compute_label_anchors(
    labels: Sequence[LabelInput],
    sizes: PlacementSizes | None = None,
    obstacles: Sequence[Obstacle] | None = None,
    max_iterations: int = MAX_LAYOUT_ITERATIONS,
) -> dict[str, Anchor]:
    """Label id -> anchor. See compute_label_layout."""
    return compute_label_layout(labels, sizes, obstacles, max_iterations).anchors


def order_center_out(labels: Iterable[LabelInput]) -> list[LabelInput]:
    """Labels closest to the chart center first, so edge labels adapt to central ones. Stable."""
    return sorted(labels, key=lambda lab: math.hypot(lab.position.x - 0.5, lab.position.y - 0.5))


def self_label_inputs(
    players: Iterable[PlayerRecord],
    sizes: PlacementSizes,
    width_fn: Callable[[str], float] | None = None,
) -> list[LabelInput]:
    """
    One 'self-<id>' label per player with a self-placement, sized from the display name.
    width_fn maps label text to normalized width; defaults to the average-glyph estimate.
    """
    measure = width_fn or (lambda text: estimate_label_width(text, sizes))
    return [
        LabelInput(
            id=f"self-{p.id}",
            position=p.self_position,
            label_width=measure(p.display_name),
            label_height=sizes.label_h,
            offset=sizes.offset,
            margin=sizes.margin,
        )
        for p in players
        if p.self_position is not None
    ]


def _shown_guesses(
    details: Iterable[GuessScoreDetail],
    guesses: Iterable[Guess],
    target_id: str | None,
) -> list[tuple[GuessScoreDetail, Guess]]:
    # Only scored guesses are drawn; details carry the guess key.
    by_key = {g.key: g for g in guesses}
    shown = []
    for detail in details:
        if target_id is not None and detail.target_id != target_id:
            continue
        guess = by_key.get(detail.guess_id)
        if guess is not None:
            shown.append((detail, guess))
    return shown


def guess_label_inputs(
    details: Iterable[GuessScoreDetail],
    guesses: Iterable[Guess],
    players: Iterable[PlayerRecord],
    sizes: PlacementSizes,
    target_id: str | None = None,
    width_fn: Callable[[str], float] | None = None,
) -> list[LabelInput]:
    """
    One 'guess-<guess_id>' label per scored guess, at the guessed position and
    named after the guesser. target_id limits labels to guesses about one player
    (the network view of that player).
    """
    names = {p.id: p.display_name for p in players}
    measure = width_fn or (lambda text: estimate_label_width(text, sizes))
    return [
        LabelInput(
            id=f"guess-{detail.guess_id}",
            position=Position(guess.x, guess.y),
            label_width=measure(names.get(detail.guesser_id, "")),
            label_height=sizes.label_h,
            offset=sizes.offset,
            margin=sizes.margin,
        )
        for detail, guess in _shown_guesses(details, guesses, target_id)
    ]


def guess_dot_positions(
    details: Iterable[GuessScoreDetail],
    guesses: Iterable[Guess],
    target_id: str | None = None,
) -> list[Position]:
    """Positions of the guess dots drawn alongside guess_label_inputs."""
    return [Position(guess.x, guess.y) for _, guess in _shown_guesses(details, guesses, target_id)]


def dot_obstacles(positions: Iterable[Position], radius: float) -> list[Obstacle]:
    """Turn drawn dots into obstacles so labels keep clear of the markers."""
    return [Obstacle(position=pos, radius=radius) for pos in positions]
