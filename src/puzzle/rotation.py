"""Rotations are quarter turns. Raw angles coming from the grid get snapped before anything compares them."""

ROTATIONS: tuple[int, ...] = (0, 90, 180, 270)
HALF_TURN = 180


def normalize_rotation(degrees: float) -> int:
    """
    Snap any angle to {0, 90, 180, 270}.
    ----
    1. round to whole degrees and reduce mod 360 (negative angles wrap around)
    2. round to the nearest quarter turn, 360 folds back to 0

    ex) -90 -> 270, 44.6 -> 0, 46 -> 90, 359.7 -> 0
    """
    whole = round(degrees) % 360
    return (round(whole / 90) * 90) % 360


def half_turn(rotation: int) -> int:
    """The rotation pointing the opposite way."""
    return normalize_rotation(rotation + HALF_TURN)
