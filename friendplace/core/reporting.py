# friendplace/core/reporting.py
"""
Create reports/<run_name>/ and write scores.json, layout.json, run_metadata.json.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone
from pathlib import Path

from friendplace.core.config import (
    ACCURACY_KNEE,
    ANCHOR_PREFERENCE_STEP,
    BEST_FRIEND_BONUS,
    BEST_FRIEND_RADIUS,
    MAX_GUESS_POINTS,
    MAX_LAYOUT_ITERATIONS,
    OUT_OF_BOUNDS_WEIGHT,
    OVERLAP_WEIGHT,
    REPORTS_DIR,
)
from friendplace.core.types import GuessScoreDetail, LabelLayout, PlayerScore, PlayerScoreBreakdown


def detail_to_dict(detail: GuessScoreDetail) -> dict:
    return asdict(detail)


def breakdown_to_dict(b: PlayerScoreBreakdown) -> dict:
    return {
        "game_player_id": b.game_player_id,
        "display_name": b.display_name,
        "guess_points": b.guess_points,
        "bonus_points": b.bonus_points,
        "total_score": b.total_score,
        "guess_details": [detail_to_dict(d) for d in b.guess_details],
        "bonus_details": [detail_to_dict(d) for d in b.bonus_details],
    }


def scores_to_dict(
    scores: list[PlayerScore],
    breakdowns: dict[str, PlayerScoreBreakdown],
    warnings: list[str],
) -> dict:
    """Structure for scores.json."""
    return {
        "schema_version": "1.0",
        "scores": [{"game_player_id": s.game_player_id, "total_score": s.total_score} for s in scores],
        "breakdowns": [breakdown_to_dict(b) for b in breakdowns.values()],
        "warnings": list(warnings),
    }


def layout_to_dict(layout: LabelLayout) -> dict:
    """Structure for layout.json. Anchors serialize as their short compass code."""
    return {
        "schema_version": "1.0",
        "anchors": {label_id: anchor.value for label_id, anchor in layout.anchors.items()},
        "metrics": {
            "iterations": layout.iterations,
            "label_overlaps": layout.label_overlaps,
            "obstacle_overlaps": layout.obstacle_overlaps,
            "out_of_bounds": layout.out_of_bounds,
            "clean": layout.is_clean,
        },
    }


def run_metadata_dict(
    run_name: str,
    round_path: str,
    graph_width: float,
    graph_height: float,
    mobile: bool,
    network_id: str | None = None,
    measure_text: bool = False,
) -> dict:
    """Timestamp and config snapshot for run_metadata.json."""
    return {
        "run_name": run_name,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "round_path": round_path,
        "graph_width": graph_width,
        "graph_height": graph_height,
        "mobile": mobile,
        "network_id": network_id,
        "measure_text": measure_text,
        "config": {
            "MAX_GUESS_POINTS": MAX_GUESS_POINTS,
            "ACCURACY_KNEE": ACCURACY_KNEE,
            "BEST_FRIEND_RADIUS": BEST_FRIEND_RADIUS,
            "BEST_FRIEND_BONUS": BEST_FRIEND_BONUS,
            "ANCHOR_PREFERENCE_STEP": ANCHOR_PREFERENCE_STEP,
            "OVERLAP_WEIGHT": OVERLAP_WEIGHT,
            "OUT_OF_BOUNDS_WEIGHT": OUT_OF_BOUNDS_WEIGHT,
            "MAX_LAYOUT_ITERATIONS": MAX_LAYOUT_ITERATIONS,
        },
    }


def ensure_report_dir(
    repo_root: Path,
    run_name: str,
    output_dir: str | None = None,
) -> Path:
    """Create output_dir/<run_name>/ under repo_root; return path. Default output_dir from config."""
    base = output_dir if output_dir is not None else REPORTS_DIR
    out = (repo_root / base).resolve() / run_name
    out.mkdir(parents=True, exist_ok=True)
    return out


def _write_json(path: Path, data: dict) -> Path:
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    return path


def write_scores_json(
    report_dir: Path,
    scores: list[PlayerScore],
    breakdowns: dict[str, PlayerScoreBreakdown],
    warnings: list[str],
) -> Path:
    return _write_json(report_dir / "scores.json", scores_to_dict(scores, breakdowns, warnings))


def write_layout_json(report_dir: Path, layout: LabelLayout) -> Path:
    return _write_json(report_dir / "layout.json", layout_to_dict(layout))


def write_run_metadata_json(
    report_dir: Path,
    run_name: str,
    round_path: str,
    graph_width: float,
    graph_height: float,
    mobile: bool,
    network_id: str | None = None,
    measure_text: bool = False,
) -> Path:
    data = run_metadata_dict(run_name, round_path, graph_width, graph_height, mobile, network_id, measure_text)
    return _write_json(report_dir / "run_metadata.json", data)
