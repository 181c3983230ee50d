# tests/test_runner.py
"""
Round loading and CLI run: temp round file in, scores/layout/metadata JSON out.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from friendplace.core.io import load_round, parse_round
from friendplace.core.runner import main

ROUND = {
    "players": [
        {"id": "p1", "display_name": "Ann", "claimed": True, "self": {"x": 0.0, "y": 0.0}},
        {"id": "p2", "display_name": "Bo", "self": {"x": 0.6, "y": 0.6}},
        {"id": "p3", "display_name": "Cy", "self": None},
        {"id": "p4", "display_name": "Di", "claimed": True},
    ],
    "guesses": [
        {"id": "g1", "guesser_id": "p2", "target_id": "p1", "x": 0.0, "y": 0.0},
        {"id": "g2", "guesser_id": "p1", "target_id": "p3", "x": 0.4, "y": 0.4},
    ],
}


def _write_round(root: Path, data: dict = ROUND) -> Path:
    path = root / "round.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_load_round(tmp_path: Path) -> None:
    players, guesses = load_round(_write_round(tmp_path))
    assert [p.id for p in players] == ["p1", "p2", "p3", "p4"]
    assert players[0].self_position is not None and players[0].self_position.x == 0.0
    assert players[2].self_position is None
    assert guesses[0].key == "g1"


def test_load_round_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_round(tmp_path / "nope.json")


def test_load_round_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_round(path)


@pytest.mark.parametrize(
    "data",
    [
        [],
        {"guesses": []},
        {"players": [{"display_name": "no id"}]},
        {"players": [{"id": "p1", "self": {"x": "left"}}]},
        {"players": [], "guesses": [{"guesser_id": "p1"}]},
    ],
)
def test_parse_round_rejects_malformed(data: object) -> None:
    with pytest.raises(ValueError):
        parse_round(data)


def test_runner_writes_reports(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    round_path = _write_round(tmp_path)
    main(["--round", str(round_path), "--repo-root", str(tmp_path), "--run-name", "test_run"])
    report_dir = tmp_path / "reports" / "test_run"
    for name in ("scores.json", "layout.json", "run_metadata.json"):
        assert (report_dir / name).exists(), name
    assert "scores.json" in capsys.readouterr().out

    scores = json.loads((report_dir / "scores.json").read_text(encoding="utf-8"))
    totals = {s["game_player_id"]: s["total_score"] for s in scores["scores"]}
    assert totals == {"p1": 37.5, "p2": 150.0, "p3": 0.0, "p4": 0.0}
    assert "missing_self_placement" in scores["warnings"]

    layout = json.loads((report_dir / "layout.json").read_text(encoding="utf-8"))
    assert set(layout["anchors"]) == {"self-p1", "self-p2"}
    # p1 sits in the bottom-left corner, so its label must open up and right
    assert layout["anchors"]["self-p1"] == "ne"

    meta = json.loads((report_dir / "run_metadata.json").read_text(encoding="utf-8"))
    assert meta["run_name"] == "test_run"
    assert meta["mobile"] is False
    assert meta["network_id"] is None


def test_runner_mobile_sizes(tmp_path: Path) -> None:
    round_path = _write_round(tmp_path)
    main([
        "--round", str(round_path),
        "--repo-root", str(tmp_path),
        "--run-name", "mobile",
        "--mobile",
        "--graph-width", "390",
        "--graph-height", "390",
    ])
    meta = json.loads((tmp_path / "reports" / "mobile" / "run_metadata.json").read_text(encoding="utf-8"))
    assert meta["mobile"] is True
    assert meta["graph_width"] == 390.0


def test_runner_network_view_adds_guess_labels(tmp_path: Path) -> None:
    round_path = _write_round(tmp_path)
    main([
        "--round", str(round_path),
        "--repo-root", str(tmp_path),
        "--run-name", "network",
        "--network", "p1",
        "--measure-text",
    ])
    report_dir = tmp_path / "reports" / "network"
    layout = json.loads((report_dir / "layout.json").read_text(encoding="utf-8"))
    # g2 targets p3, who never placed themselves, so only g1 gets a label
    assert set(layout["anchors"]) == {"self-p1", "self-p2", "guess-g1"}
    meta = json.loads((report_dir / "run_metadata.json").read_text(encoding="utf-8"))
    assert meta["network_id"] == "p1"
    assert meta["measure_text"] is True


def test_runner_network_view_of_unplaced_player(tmp_path: Path) -> None:
    round_path = _write_round(tmp_path)
    main(["--round", str(round_path), "--repo-root", str(tmp_path), "--run-name", "nobody", "--network", "p3"])
    layout = json.loads((tmp_path / "reports" / "nobody" / "layout.json").read_text(encoding="utf-8"))
    assert set(layout["anchors"]) == {"self-p1", "self-p2"}
