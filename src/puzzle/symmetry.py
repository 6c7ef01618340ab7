"""
Global rotations a template may be matched under.

Key idea: same strategy-table approach as elsewhere. Each RotationConvention maps to a pure function that
turns a grid vector by a quarter-turn angle. Templates were authored by two tools that disagree on the sign
of the turn, and the template does not record which one was used, so the matcher tries both.
"""

from dataclasses import dataclass
from typing import Callable

from src.core.shared_types import RotationConvention
from src.puzzle.cell import Cell
from src.puzzle.rotation import ROTATIONS, normalize_rotation

RotateFn = Callable[[Cell, int], Cell]


def rotate_counter_clockwise_positive(v: Cell, angle: int) -> Cell:
    """Convention A"""
    angle = normalize_rotation(angle)
    if angle == 90:
        return Cell(v.y, -v.x)
    if angle == 180:
        return Cell(-v.x, -v.y)
    if angle == 270:
        return Cell(-v.y, v.x)
    return v


def rotate_clockwise_positive(v: Cell, angle: int) -> Cell:
    """Convention B: convention A with the y-axis flipped"""
    angle = normalize_rotation(angle)
    if angle == 90:
        return Cell(-v.y, v.x)
    if angle == 180:
        return Cell(-v.x, -v.y)
    if angle == 270:
        return Cell(v.y, -v.x)
    return v


ROTATION_RULES: dict[RotationConvention, RotateFn] = {
    RotationConvention.COUNTER_CLOCKWISE_POSITIVE: rotate_counter_clockwise_positive,
    RotationConvention.CLOCKWISE_POSITIVE: rotate_clockwise_positive,
}

# Order in which conventions are tried for every angle
CONVENTION_ORDER: tuple[RotationConvention, ...] = (
    RotationConvention.COUNTER_CLOCKWISE_POSITIVE,
    RotationConvention.CLOCKWISE_POSITIVE,
)


@dataclass(frozen=True)
class Transform:
    """One candidate: turn the whole template by `angle` using `convention`."""

    angle: int
    convention: RotationConvention

    def apply(self, position: Cell) -> Cell:
        return ROTATION_RULES[self.convention](position, self.angle)

    def expected_rotation(self, base_rotation: int) -> int:
        """
        The spin a tile must have once the layout is turned.
        Under convention A layout and tile turn together, under convention B they turn in opposite directions.
        """
        if self.convention == RotationConvention.CLOCKWISE_POSITIVE:
            return normalize_rotation(base_rotation - self.angle)
        return normalize_rotation(base_rotation + self.angle)

    def describe(self) -> str:
        return f"angle={self.angle}, convention={self.convention.value}"


def global_angles(allow_global_rotation: bool) -> tuple[int, ...]:
    return ROTATIONS if allow_global_rotation else (0,)


def candidate_transforms(allow_global_rotation: bool) -> list[Transform]:
    """All transforms to try, angle ascending, convention A before B. 8 candidates, or 2 without global rotation."""
    return [
        Transform(angle, convention)
        for angle in global_angles(allow_global_rotation)
        for convention in CONVENTION_ORDER
    ]
