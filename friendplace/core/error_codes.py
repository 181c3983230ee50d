"""
Structured warning codes for round snapshot validation.
Use these keys in return values; map to user-facing messages in the UI.
"""

# Known warning keys (returned from validate.validate_round)
COORDINATE_OUT_OF_RANGE = "coordinate_out_of_range"
UNKNOWN_PLAYER = "unknown_player"
DUPLICATE_GUESS = "duplicate_guess"
SELF_GUESS = "self_guess"
MISSING_SELF_PLACEMENT = "missing_self_placement"

# User-facing messages (short, actionable)
USER_MESSAGES: dict[str, str] = {
    COORDINATE_OUT_OF_RANGE: "A placement lies outside the chart. Scores near the edge may look odd.",
    UNKNOWN_PLAYER: "A guess refers to a player who is not in this game.",
    DUPLICATE_GUESS: "A player guessed the same person twice; only send the latest guess.",
    SELF_GUESS: "A player guessed their own placement.",
    MISSING_SELF_PLACEMENT: "Some players never placed themselves; guesses about them score zero.",
}


def user_message(error_key: str | None, fallback: str = "Something went wrong.") -> str:
    """Return a user-facing message for the given error key."""
    if not error_key:
        return fallback
    return USER_MESSAGES.get(error_key, fallback)
