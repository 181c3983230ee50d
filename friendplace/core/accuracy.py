# friendplace/core/accuracy.py
"""
Distance -> accuracy curve and best-friend bonus.
Single source for the per-guess formula used by totals and breakdowns alike.
"""

from __future__ import annotations

import math

from friendplace.core.config import (
    ACCURACY_KNEE,
    BEST_FRIEND_BONUS,
    BEST_FRIEND_RADIUS,
    FAR_INTERCEPT,
    FAR_SLOPE,
    MAX_GUESS_POINTS,
    MAX_SCORED_DISTANCE,
    NEAR_SLOPE,
    SCORE_DECIMALS,
)


def euclidean_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """Euclidean distance between two normalized coordinates; in [0, sqrt(2)] on the board."""
    return math.hypot(x1 - x2, y1 - y2)


def accuracy(distance: float) -> float:
    """
    Piecewise linear accuracy in [0, 1], continuous at ACCURACY_KNEE.
    Steep inside the knee, then a gentle tail that reaches 0 at distance 1.
    """
    if distance <= ACCURACY_KNEE:
        return max(0.0, 1.0 - NEAR_SLOPE * distance)
    if distance <= MAX_SCORED_DISTANCE:
        return max(0.0, FAR_INTERCEPT - FAR_SLOPE * distance)
    return 0.0


def guesser_points(distance: float) -> float:
    """Curve points only (no bonus)."""
    return accuracy(distance) * MAX_GUESS_POINTS


def best_friend_bonus(distance: float) -> float:
    """Flat bonus for exceptionally close guesses."""
    return BEST_FRIEND_BONUS if distance <= BEST_FRIEND_RADIUS else 0.0


def guess_accuracy(guess_x: float, guess_y: float, self_x: float, self_y: float) -> float:
    return accuracy(euclidean_distance(guess_x, guess_y, self_x, self_y))


def score_guess(
    guess_x: float,
    guess_y: float,
    self_x: float,
    self_y: float,
) -> tuple[float, float, float, float]:
    """Return (distance, accuracy, base_points, bonus) for one guess against a self-placement."""
    d = euclidean_distance(guess_x, guess_y, self_x, self_y)
    acc = accuracy(d)
    return d, acc, acc * MAX_GUESS_POINTS, best_friend_bonus(d)


def round_points(value: float, decimals: int = SCORE_DECIMALS) -> float:
    """Round half-up; scores are never negative so floor(x + 0.5) is enough."""
    scale = 10 ** decimals
    return math.floor(value * scale + 0.5) / scale
