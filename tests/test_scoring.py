# tests/test_scoring.py
"""
Round scoring: totals, breakdowns and flat guess details share one formula.
"""

from __future__ import annotations

import random

import pytest

from friendplace.core.accuracy import guesser_points, round_points
from friendplace.core.scoring import (
    compute_all_guess_details,
    compute_score_breakdowns,
    compute_scores,
    target_bonus_fraction,
)
from friendplace.core.types import Guess, PlayerRecord, Position


def _players(*placements: tuple[float, float] | None) -> list[PlayerRecord]:
    return [
        PlayerRecord(
            id=f"p{i + 1}",
            display_name=f"Player {i + 1}",
            self_position=Position(*pos) if pos is not None else None,
        )
        for i, pos in enumerate(placements)
    ]


def _totals(players: list[PlayerRecord], guesses: list[Guess]) -> dict[str, float]:
    return {s.game_player_id: s.total_score for s in compute_scores(players, guesses)}


def test_target_bonus_fraction() -> None:
    assert target_bonus_fraction(4) == 0.25
    assert target_bonus_fraction(0) == 0.0


def test_perfect_guess_four_players() -> None:
    players = _players((0.5, 0.5), (0.0, 0.0), (0.2, 0.8), (0.9, 0.1))
    guesses = [Guess(guesser_id="p1", target_id="p2", x=0.0, y=0.0)]
    # curve points alone: 100, a quarter of which is 25
    assert guesser_points(0.0) * target_bonus_fraction(4) == 25.0
    totals = _totals(players, guesses)
    # best-friend bonus is folded in before the target share
    assert totals == {"p1": 150.0, "p2": 37.5, "p3": 0.0, "p4": 0.0}


def test_far_miss_scores_zero_for_both() -> None:
    players = _players((0.5, 0.5), (1.0, 1.0), None, None)
    guesses = [Guess(guesser_id="p1", target_id="p2", x=0.0, y=0.0)]
    totals = _totals(players, guesses)
    assert totals["p1"] == 0.0
    assert totals["p2"] == 0.0


def test_missing_self_placement_contributes_zero() -> None:
    players = _players((0.5, 0.5), None)
    guesses = [Guess(guesser_id="p1", target_id="p2", x=0.4, y=0.4)]
    assert _totals(players, guesses) == {"p1": 0.0, "p2": 0.0}
    assert compute_all_guess_details(players, guesses) == []
    b = compute_score_breakdowns(players, guesses)
    assert b["p1"].guess_details == [] and b["p2"].bonus_details == []


def test_mid_distance_guess() -> None:
    players = _players((0.5, 0.5), (0.1, 0.1))
    # distance 0.5 -> accuracy 0.1 -> 10 points; two players -> target gets 5
    guesses = [Guess(guesser_id="p2", target_id="p1", x=0.8, y=0.9)]
    totals = _totals(players, guesses)
    assert totals == {"p1": 5.0, "p2": 10.0}


def test_unclaimed_slot_not_scored_or_counted() -> None:
    players = [
        PlayerRecord(id="a", self_position=Position(0.5, 0.5)),
        PlayerRecord(id="b", self_position=Position(0.2, 0.2)),
        PlayerRecord(id="c", self_position=Position(0.7, 0.3)),
        PlayerRecord(id="ghost", claimed=False, self_position=Position(0.9, 0.9)),
    ]
    guesses = [
        Guess(guesser_id="b", target_id="a", x=0.5, y=0.5),
        Guess(guesser_id="a", target_id="ghost", x=0.9, y=0.9),
    ]
    totals = _totals(players, guesses)
    assert "ghost" not in totals
    assert totals["b"] == 150.0
    assert totals["a"] == pytest.approx(150.0 + 50.0)


def test_scores_invariant_under_guess_order() -> None:
    rng = random.Random(7)
    players = _players(*[(rng.random(), rng.random()) for _ in range(6)])
    guesses = [
        Guess(guesser_id=g.id, target_id=t.id, x=rng.random(), y=rng.random())
        for g in players
        for t in players
        if g.id != t.id
    ]
    expected = _totals(players, guesses)
    for _ in range(5):
        shuffled = list(guesses)
        rng.shuffle(shuffled)
        assert _totals(players, shuffled) == expected


def test_breakdown_totals_match_scores() -> None:
    rng = random.Random(11)
    players = _players(*[(rng.random(), rng.random()) for _ in range(5)], None)
    guesses = [
        Guess(guesser_id=g.id, target_id=t.id, x=rng.random(), y=rng.random())
        for g in players
        for t in players
        if g.id != t.id
    ]
    totals = _totals(players, guesses)
    breakdowns = compute_score_breakdowns(players, guesses)
    assert set(breakdowns) == set(totals)
    for pid, b in breakdowns.items():
        assert b.total_score == totals[pid]
        assert b.total_score == round_points(b.guess_points + b.bonus_points)
        assert b.total_score >= 0.0
        assert all(d.guesser_id == pid for d in b.guess_details)
        assert all(d.target_id == pid for d in b.bonus_details)


def test_breakdown_parts_sum_to_total_near_rounding_edge() -> None:
    # p1 earns 0.04 and receives 0.04; the raw 0.08 alone would round up to 0.1
    players = _players((0.0, 0.0), (0.0, 0.0))
    guesses = [
        Guess(guesser_id="p1", target_id="p2", x=0.998, y=0.0),
        Guess(guesser_id="p2", target_id="p1", x=0.996, y=0.0),
    ]
    breakdowns = compute_score_breakdowns(players, guesses)
    first = breakdowns["p1"]
    assert (first.guess_points, first.bonus_points, first.total_score) == (0.0, 0.0, 0.0)
    second = breakdowns["p2"]
    assert (second.guess_points, second.bonus_points, second.total_score) == (0.1, 0.0, 0.1)
    assert _totals(players, guesses) == {"p1": 0.0, "p2": 0.1}


def test_guess_details_carry_bonus_and_split() -> None:
    players = _players((0.3, 0.3), (0.3, 0.35))
    guesses = [
        Guess(guesser_id="p1", target_id="p2", x=0.3, y=0.3, id="g1"),
        Guess(guesser_id="p2", target_id="p1", x=0.9, y=0.9, id="g2"),
    ]
    details = compute_all_guess_details(players, guesses)
    assert [d.guess_id for d in details] == ["g1", "g2"]
    close, far = details
    assert close.distance == pytest.approx(0.05)
    assert close.accuracy == pytest.approx(0.9)
    assert close.base_points == 90.0
    assert close.best_friend_bonus == 50.0
    assert close.guesser_points == 140.0
    assert close.target_bonus == 70.0
    assert far.best_friend_bonus == 0.0
    assert far.guesser_points == far.base_points


def test_guess_key_defaults_to_pair() -> None:
    players = _players((0.5, 0.5), (0.5, 0.5))
    details = compute_all_guess_details(players, [Guess(guesser_id="p1", target_id="p2", x=0.5, y=0.5)])
    assert details[0].guess_id == "p1->p2"


def test_no_guesses_all_zero() -> None:
    players = _players((0.1, 0.1), (0.2, 0.2))
    assert _totals(players, []) == {"p1": 0.0, "p2": 0.0}


def test_no_claimed_players() -> None:
    players = [PlayerRecord(id="x", claimed=False, self_position=Position(0.5, 0.5))]
    guesses = [Guess(guesser_id="y", target_id="x", x=0.5, y=0.5)]
    assert compute_scores(players, guesses) == []
