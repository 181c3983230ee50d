# friendplace/core/validate.py
"""
Optional boundary checks for a round snapshot. Scoring and layout trust the
caller and never clamp; this reports what looks wrong without raising.
Returns warning keys from error_codes.
"""

from __future__ import annotations

from collections.abc import Sequence

from friendplace.core import error_codes
from friendplace.core.types import Guess, PlayerRecord

COORD_TOLERANCE: float = 1e-6


def in_unit_square(x: float, y: float, tolerance: float = COORD_TOLERANCE) -> bool:
    return -tolerance <= x <= 1.0 + tolerance and -tolerance <= y <= 1.0 + tolerance


def validate_round(
    players: Sequence[PlayerRecord],
    guesses: Sequence[Guess],
) -> list[str]:
    """Sorted, de-duplicated warning keys for the snapshot; empty when clean."""
    found: set[str] = set()
    ids = {p.id for p in players}

    for p in players:
        pos = p.self_position
        if pos is None:
            if p.claimed:
                found.add(error_codes.MISSING_SELF_PLACEMENT)
        elif not in_unit_square(pos.x, pos.y):
            found.add(error_codes.COORDINATE_OUT_OF_RANGE)

    seen: set[tuple[str, str]] = set()
    for g in guesses:
        if not in_unit_square(g.x, g.y):
            found.add(error_codes.COORDINATE_OUT_OF_RANGE)
        if g.guesser_id not in ids or g.target_id not in ids:
            found.add(error_codes.UNKNOWN_PLAYER)
        if g.guesser_id == g.target_id:
            found.add(error_codes.SELF_GUESS)
        pair = (g.guesser_id, g.target_id)
        if pair in seen:
            found.add(error_codes.DUPLICATE_GUESS)
        seen.add(pair)

    return sorted(found)
