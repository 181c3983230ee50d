# friendplace/core/io.py
"""
Load a round snapshot (players + guesses) from JSON.
Raises FileNotFoundError if the file is missing, ValueError if the snapshot is malformed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from friendplace.core.types import Guess, PlayerRecord, Position


def _resolve_path(path: str | Path, repo_root: Path | None) -> Path:
    """Resolve path; if relative, against repo_root (or cwd if repo_root is None)."""
    p = Path(path)
    if not p.is_absolute() and repo_root is not None:
        p = repo_root / p
    return p.resolve()


def _position(raw: Any, where: str) -> Position | None:
    if raw is None:
        return None
    try:
        return Position(x=float(raw["x"]), y=float(raw["y"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"{where}: expected {{'x': number, 'y': number}}, got {raw!r}") from exc


def parse_player(raw: dict[str, Any]) -> PlayerRecord:
    if "id" not in raw:
        raise ValueError(f"Player without id: {raw!r}")
    pid = str(raw["id"])
    return PlayerRecord(
        id=pid,
        display_name=str(raw.get("display_name", "")),
        claimed=bool(raw.get("claimed", True)),
        self_position=_position(raw.get("self"), f"player {pid}"),
    )


def parse_guess(raw: dict[str, Any]) -> Guess:
    try:
        return Guess(
            guesser_id=str(raw["guesser_id"]),
            target_id=str(raw["target_id"]),
            x=float(raw["x"]),
            y=float(raw["y"]),
            id=str(raw["id"]) if raw.get("id") is not None else None,
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"Malformed guess: {raw!r}") from exc


def parse_round(data: Any) -> tuple[list[PlayerRecord], list[Guess]]:
    """Parse {'players': [...], 'guesses': [...]} into records."""
    if not isinstance(data, dict):
        raise ValueError("Round snapshot must be a JSON object")
    players_raw = data.get("players")
    if not isinstance(players_raw, list):
        raise ValueError("Round snapshot needs a 'players' list")
    guesses_raw = data.get("guesses", [])
    if not isinstance(guesses_raw, list):
        raise ValueError("'guesses' must be a list")
    players = [parse_player(p) for p in players_raw]
    guesses = [parse_guess(g) for g in guesses_raw]
    return players, guesses


def load_round(
    path: str | Path,
    repo_root: Path | None = None,
) -> tuple[list[PlayerRecord], list[Guess]]:
    """Load and parse a round snapshot file."""
    resolved = _resolve_path(path, repo_root)
    if not resolved.exists():
        raise FileNotFoundError(f"Round file not found: {resolved}")
    try:
        data = json.loads(resolved.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Round file is not valid JSON: {resolved}") from exc
    return parse_round(data)
