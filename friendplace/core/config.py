# friendplace/core/config.py
"""
Central configuration for scoring and label layout.
All tunable values live here; no magic numbers in other modules.
"""

from __future__ import annotations
import os

# ----- Paths (repo-relative) -----
REPORTS_DIR: str = "reports"

# ----- Logging -----
LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()
"""Log level for the CLI runner. Set env LOG_LEVEL=DEBUG for layout/scoring traces."""

# ----- Accuracy model -----
MAX_GUESS_POINTS: float = 100.0
"""Points a guesser earns for a perfect guess (before the best-friend bonus)."""

ACCURACY_KNEE: float = 4.0 / 9.0
"""Distance where the steep near-guess slope hands over to the gentle tail."""

NEAR_SLOPE: float = 2.0
"""accuracy = 1 - NEAR_SLOPE * d for d <= ACCURACY_KNEE."""

FAR_INTERCEPT: float = 0.2
FAR_SLOPE: float = 0.2
"""accuracy = FAR_INTERCEPT - FAR_SLOPE * d for ACCURACY_KNEE < d <= 1."""

MAX_SCORED_DISTANCE: float = 1.0
"""Beyond this distance a guess earns nothing."""

BEST_FRIEND_RADIUS: float = 0.12
"""Guesses at or inside this distance earn the flat best-friend bonus."""

BEST_FRIEND_BONUS: float = 50.0

SCORE_DECIMALS: int = 1
"""Totals and display points are rounded (half-up) to this many decimals."""

# ----- Label geometry defaults (normalized 0-1 coords) -----
LABEL_HEIGHT: float = 0.04
"""Label height used when neither the label nor the sizes carry one."""

LABEL_OFFSET: float = 0.03
"""Gap from the point to the nearest label edge."""

LABEL_MARGIN: float = 0.005
"""Breathing room added around a candidate when testing label/label overlap."""

# ----- Label cost weights -----
ANCHOR_PREFERENCE_STEP: float = 0.14
"""Preference penalty per rank: NE = 0.0 ... W = 7 * step = 0.98."""

OVERLAP_WEIGHT: float = 40.0
"""Penalty per intersected label rectangle or obstacle (~40x max preference)."""

OUT_OF_BOUNDS_WEIGHT: float = 1000.0
"""Penalty when the label rectangle leaves the unit square."""

COST_EPSILON: float = 1e-9
"""A switch during improvement needs a cost drop larger than this."""

# ----- Label search -----
MAX_LAYOUT_ITERATIONS: int = 20
"""Cap on coordinate-descent improvement passes."""

# ----- Pixel -> normalized size conversion -----
LINE_HEIGHT_RATIO: float = 1.25
"""Rendered line height relative to font size."""

CHAR_WIDTH_RATIO: float = 0.62
"""Average proportional glyph width relative to font size."""

BREATHING_ROOM_PX: float = 3.0
"""Pixel margin converted into LABEL margin for overlap tests."""

SELF_DOT_EXTRA_PX: float = 4.0
"""Extra radius around self-placement dots when used as obstacles."""

GUESS_DOT_EXTRA_PX: float = 2.0
"""Extra radius around guess dots when used as obstacles."""

DEFAULT_GRAPH_SIZE_PX: float = 600.0
"""Graph width/height assumed by the CLI when none is given."""

# ----- Default font -----
DEFAULT_FONT_FAMILY: str = "DejaVu Sans"
