# friendplace/core/types.py
"""
Dataclasses for players, guesses, score results, label inputs and layout output.
All coordinates are normalized to the unit square (0 = bottom/left pole, 1 = top/right pole).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class Anchor(str, Enum):
    """Compass slot where a label attaches to its point."""
    NE = "ne"
    E = "e"
    SE = "se"
    N = "n"
    NW = "nw"
    S = "s"
    SW = "sw"
    W = "w"


# Best-to-worst cartographic legibility.
ANCHOR_ORDER: tuple[Anchor, ...] = (
    Anchor.NE,
    Anchor.E,
    Anchor.SE,
    Anchor.N,
    Anchor.NW,
    Anchor.S,
    Anchor.SW,
    Anchor.W,
)


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class PlayerRecord:
    """A player slot. Only claimed slots are scored and counted as players."""
    id: str
    display_name: str = ""
    claimed: bool = True
    self_position: Position | None = None


@dataclass(frozen=True)
class Guess:
    """Where guesser_id thinks target_id placed themselves."""
    guesser_id: str
    target_id: str
    x: float
    y: float
    id: str | None = None

    @property
    def key(self) -> str:
        return self.id if self.id is not None else f"{self.guesser_id}->{self.target_id}"


@dataclass(frozen=True)
class GuessScoreDetail:
    """Per-guess explanation; point fields are rounded for display."""
    guess_id: str
    guesser_id: str
    target_id: str
    distance: float
    accuracy: float
    base_points: float
    best_friend_bonus: float
    guesser_points: float
    target_bonus: float


@dataclass(frozen=True)
class PlayerScore:
    game_player_id: str
    total_score: float


@dataclass
class PlayerScoreBreakdown:
    """Full score explanation for one player. total_score matches compute_scores."""
    game_player_id: str
    display_name: str
    guess_points: float = 0.0
    bonus_points: float = 0.0
    total_score: float = 0.0
    guess_details: list[GuessScoreDetail] = field(default_factory=list)
    bonus_details: list[GuessScoreDetail] = field(default_factory=list)


@dataclass(frozen=True)
class PlacementSizes:
    """Label metrics in normalized coords. See sizes.to_normalized_sizes."""
    label_h: float
    offset: float
    margin: float
    char_width: float
    pad_width: float


@dataclass(frozen=True)
class LabelInput:
    """A label to anchor. None overrides fall back to PlacementSizes, then config."""
    id: str
    position: Position
    label_width: float
    label_height: float | None = None
    offset: float | None = None
    margin: float | None = None


@dataclass(frozen=True)
class Obstacle:
    """Circular zone that label rectangles should not touch."""
    position: Position
    radius: float


@dataclass
class LabelLayout:
    """Anchor assignment plus diagnostics of the final state."""
    anchors: dict[str, Anchor]
    iterations: int
    label_overlaps: int
    obstacle_overlaps: int
    out_of_bounds: int

    @property
    def is_clean(self) -> bool:
        return self.label_overlaps == 0 and self.obstacle_overlaps == 0 and self.out_of_bounds == 0
