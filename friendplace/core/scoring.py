# friendplace/core/scoring.py
"""
Round scoring: per-player totals, per-player breakdowns and a flat per-guess list.
Totals and breakdowns go through one accumulation so they can never disagree.

Per scorable guess (target has a self-placement):
    guesser_points = accuracy * MAX_GUESS_POINTS + best_friend_bonus
    target_bonus   = guesser_points * 1 / num_players
num_players counts claimed players. Guesses about unplaced targets score zero.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Sequence

from friendplace.core.accuracy import round_points, score_guess
from friendplace.core.types import (
    Guess,
    GuessScoreDetail,
    PlayerRecord,
    PlayerScore,
    PlayerScoreBreakdown,
    Position,
)

logger = logging.getLogger(__name__)


def target_bonus_fraction(num_players: int) -> float:
    """Share of guesser points credited to the target."""
    if num_players <= 0:
        return 0.0
    return 1.0 / num_players


def _self_placements(players: Iterable[PlayerRecord]) -> dict[str, Position]:
    return {p.id: p.self_position for p in players if p.self_position is not None}


def _score_details(
    players: Sequence[PlayerRecord],
    guesses: Iterable[Guess],
) -> list[tuple[GuessScoreDetail, float, float]]:
    """
    Score every guess whose target placed themselves.
    Returns (display detail, raw guesser points, raw target bonus) in input order.
    """
    placements = _self_placements(players)
    num_players = sum(1 for p in players if p.claimed)
    fraction = target_bonus_fraction(num_players)

    out: list[tuple[GuessScoreDetail, float, float]] = []
    for guess in guesses:
        target_self = placements.get(guess.target_id)
        if target_self is None:
            continue
        distance, acc, base, bonus = score_guess(guess.x, guess.y, target_self.x, target_self.y)
        raw_guesser = base + bonus
        raw_target = raw_guesser * fraction
        detail = GuessScoreDetail(
            guess_id=guess.key,
            guesser_id=guess.guesser_id,
            target_id=guess.target_id,
            distance=distance,
            accuracy=acc,
            base_points=round_points(base),
            best_friend_bonus=round_points(bonus),
            guesser_points=round_points(raw_guesser),
            target_bonus=round_points(raw_target),
        )
        out.append((detail, raw_guesser, raw_target))
    return out


def compute_score_breakdowns(
    players: Sequence[PlayerRecord],
    guesses: Iterable[Guess],
) -> dict[str, PlayerScoreBreakdown]:
    """
    Detailed breakdown per claimed player, keyed by player id.
    guess_points: earned by guessing others; bonus_points: shares from others guessing this player.
    Sums use math.fsum so the result does not depend on guess order.
    """
    breakdowns: dict[str, PlayerScoreBreakdown] = {
        p.id: PlayerScoreBreakdown(game_player_id=p.id, display_name=p.display_name)
        for p in players
        if p.claimed
    }
    earned: dict[str, list[float]] = {pid: [] for pid in breakdowns}
    received: dict[str, list[float]] = {pid: [] for pid in breakdowns}

    scored = _score_details(players, guesses)
    for detail, raw_guesser, raw_target in scored:
        guesser = breakdowns.get(detail.guesser_id)
        if guesser is not None:
            guesser.guess_details.append(detail)
            earned[detail.guesser_id].append(raw_guesser)
        target = breakdowns.get(detail.target_id)
        if target is not None:
            target.bonus_details.append(detail)
            received[detail.target_id].append(raw_target)

    for pid, b in breakdowns.items():
        b.guess_points = round_points(math.fsum(earned[pid]))
        b.bonus_points = round_points(math.fsum(received[pid]))
        # the displayed total is always the sum of the displayed parts
        b.total_score = round_points(b.guess_points + b.bonus_points)

    logger.debug("Scored %d guesses for %d players", len(scored), len(breakdowns))
    return breakdowns


def compute_scores(
    players: Sequence[PlayerRecord],
    guesses: Iterable[Guess],
) -> list[PlayerScore]:
    """Authoritative total per claimed player, rounded to one decimal, in player order."""
    breakdowns = compute_score_breakdowns(players, guesses)
    return [PlayerScore(game_player_id=pid, total_score=b.total_score) for pid, b in breakdowns.items()]


def compute_all_guess_details(
    players: Sequence[PlayerRecord],
    guesses: Iterable[Guess],
) -> list[GuessScoreDetail]:
    """Flat list of scorable guesses, input order preserved (for drawing guess dots/lines)."""
    return [detail for detail, _, _ in _score_details(players, guesses)]
