# friendplace/core/runner.py
"""
CLI entrypoint: load a round snapshot, validate, score, lay out labels, export.
Self labels are always laid out; --network <player_id> adds that player's incoming guess labels.
Writes scores.json, layout.json and run_metadata.json under reports/<run_name>/.
"""

from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from friendplace.core.config import (
    DEFAULT_GRAPH_SIZE_PX,
    GUESS_DOT_EXTRA_PX,
    LOG_LEVEL,
    REPORTS_DIR,
    SELF_DOT_EXTRA_PX,
)
from friendplace.core.error_codes import user_message
from friendplace.core.io import load_round
from friendplace.core.layout import (
    compute_label_layout,
    dot_obstacles,
    guess_dot_positions,
    guess_label_inputs,
    order_center_out,
    self_label_inputs,
)
from friendplace.core.reporting import (
    ensure_report_dir,
    write_layout_json,
    write_run_metadata_json,
    write_scores_json,
)
from friendplace.core.scoring import compute_all_guess_details, compute_score_breakdowns, compute_scores
from friendplace.core.sizes import DESKTOP_SIZES, MOBILE_SIZES, dot_obstacle_radius, to_normalized_sizes
from friendplace.core.text_metrics import measured_width_fn
from friendplace.core.validate import validate_round

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Score a round and lay out player labels.")
    p.add_argument("--round", type=str, required=True, dest="round_path", help="Round snapshot JSON path")
    p.add_argument("--run-name", type=str, default="run", dest="run_name", help="Reports subdir name")
    p.add_argument("--output-dir", type=str, default=REPORTS_DIR, dest="output_dir", help="Output directory (repo-relative)")
    p.add_argument("--repo-root", type=str, default=None, dest="repo_root", help="Repo root (default: cwd)")
    p.add_argument("--graph-width", type=float, default=DEFAULT_GRAPH_SIZE_PX, dest="graph_width", help="Graph width (px)")
    p.add_argument("--graph-height", type=float, default=DEFAULT_GRAPH_SIZE_PX, dest="graph_height", help="Graph height (px)")
    p.add_argument("--mobile", action="store_true", help="Use mobile dot/label sizes")
    p.add_argument("--network", type=str, default=None, dest="network_id", help="Also lay out guesses about this player")
    p.add_argument("--measure-text", action="store_true", dest="measure_text", help="Measure label widths with Pillow")
    return p.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    args = _parse_args(argv)
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
    repo_root = Path(args.repo_root).resolve() if args.repo_root else Path.cwd().resolve()

    players, guesses = load_round(args.round_path, repo_root=repo_root)
    warnings = validate_round(players, guesses)
    for key in warnings:
        logger.warning("%s: %s", key, user_message(key))

    scores = compute_scores(players, guesses)
    breakdowns = compute_score_breakdowns(players, guesses)

    cfg = MOBILE_SIZES if args.mobile else DESKTOP_SIZES
    sizes = to_normalized_sizes(cfg, args.graph_width, args.graph_height)
    width_fn = measured_width_fn(cfg, args.graph_width) if args.measure_text else None
    self_r = dot_obstacle_radius(cfg.dot_size, SELF_DOT_EXTRA_PX, args.graph_width, args.graph_height)
    obstacles = dot_obstacles((p.self_position for p in players if p.self_position is not None), self_r)
    labels = self_label_inputs(players, sizes, width_fn=width_fn)
    if args.network_id is not None:
        details = compute_all_guess_details(players, guesses)
        guess_r = dot_obstacle_radius(cfg.guess_dot_size, GUESS_DOT_EXTRA_PX, args.graph_width, args.graph_height)
        obstacles += dot_obstacles(guess_dot_positions(details, guesses, args.network_id), guess_r)
        guess_labels = guess_label_inputs(details, guesses, players, sizes, target_id=args.network_id, width_fn=width_fn)
        logger.info("Network view of %s: %d guess labels", args.network_id, len(guess_labels))
        labels += guess_labels
    labels = order_center_out(labels)
    layout = compute_label_layout(labels, sizes=sizes, obstacles=obstacles)
    if not layout.is_clean:
        logger.info("Label layout is crowded; some labels still overlap.")

    report_dir = ensure_report_dir(repo_root, args.run_name, output_dir=args.output_dir)
    scores_path = write_scores_json(report_dir, scores, breakdowns, warnings)
    layout_path = write_layout_json(report_dir, layout)
    meta_path = write_run_metadata_json(
        report_dir,
        args.run_name,
        args.round_path,
        args.graph_width,
        args.graph_height,
        args.mobile,
        network_id=args.network_id,
        measure_text=args.measure_text,
    )
    for p in (scores_path, layout_path, meta_path):
        print(p)


if __name__ == "__main__":
    main()
