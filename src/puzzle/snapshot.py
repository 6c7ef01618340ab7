"""
The live state of the tiles resting on the grid.

The grid layer rebuilds a PlacementSnapshot every time the set of settled tiles changes.
Tiles that are being dragged or are mid-animation never make it into a snapshot.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Self

from src.core.shared_types import FaceRequirement
from src.puzzle.cell import Cell, anchor_top_left, canonical_order
from src.puzzle.rotation import normalize_rotation
from src.puzzle.template import Template

# Last digit of the front artwork name -> which reverse sub-variant the tile shows when flipped
ARTWORK_DIGIT_TO_FACE: dict[int, FaceRequirement] = {
    1: FaceRequirement.FACE_A,
    2: FaceRequirement.FACE_A,
    3: FaceRequirement.FACE_B,
    4: FaceRequirement.FACE_B,
}


@dataclass(frozen=True)
class PlacedTile:
    cell: Cell
    rotation: int = 0
    face: FaceRequirement = FaceRequirement.NONE

    def fingerprint(self) -> str:
        return f"{self.cell.x},{self.cell.y},{normalize_rotation(self.rotation)},{self.face.value}"


@dataclass(frozen=True)
class GridTile:
    """Raw reading of one grid cell that holds a tile, before normalization."""

    cell: Cell
    angle: float
    showing_front: bool = True
    front_artwork: str = ""
    is_dragging: bool = False
    is_held: bool = False
    is_animating: bool = False

    @property
    def is_settled(self) -> bool:
        return not (self.is_dragging or self.is_held or self.is_animating)


def face_from_artwork(front_artwork: str, showing_front: bool) -> FaceRequirement:
    """
    Derive the face-state of a tile.
    ----
    A tile showing its front has no reverse face up: NONE.
    A flipped tile is identified by the last digit in the name of its front artwork (1/2 -> FACE_A, 3/4 -> FACE_B).
    Names without a known digit count as FACE_B.
    """
    if showing_front:
        return FaceRequirement.NONE

    last_digit = next(
        (int(char) for char in reversed(front_artwork) if char.isdigit()), None
    )
    return ARTWORK_DIGIT_TO_FACE.get(last_digit, FaceRequirement.FACE_B)


@dataclass(frozen=True)
class PlacementSnapshot:
    tiles: tuple[PlacedTile, ...] = ()

    @classmethod
    def from_tiles(cls, tiles: Iterable[PlacedTile]) -> Self:
        """
        Normalize rotations and keep one tile per cell.

        NOTE: the grid guarantees one tile per cell. Should a cell be listed twice anyway, the last entry wins.
        """
        by_cell: dict[Cell, PlacedTile] = {}
        for tile in tiles:
            by_cell[tile.cell] = PlacedTile(
                tile.cell, normalize_rotation(tile.rotation), tile.face
            )
        return cls(tuple(by_cell.values()))

    @classmethod
    def from_grid(cls, grid_tiles: Iterable[GridTile]) -> Self:
        """Read the grid: skip tiles still in transit, snap angles, work out face-states."""
        return cls.from_tiles(
            PlacedTile(
                cell=tile.cell,
                rotation=normalize_rotation(tile.angle),
                face=face_from_artwork(tile.front_artwork, tile.showing_front),
            )
            for tile in grid_tiles
            if tile.is_settled
        )

    def __len__(self) -> int:
        return len(self.tiles)

    def canonical(self) -> list[PlacedTile]:
        """Top-left anchored and sorted row by row. This is the form the matcher compares against."""
        anchored = anchor_top_left(tile.cell for tile in self.tiles)
        normalized = [
            PlacedTile(cell, tile.rotation, tile.face)
            for cell, tile in zip(anchored, self.tiles)
        ]
        return sorted(normalized, key=lambda tile: canonical_order(tile.cell))

    def fingerprint(self, template: Optional[Template] = None) -> str:
        """
        Structural hash of the snapshot (plus the identity of the active template).
        ----
        Uses absolute positions sorted row by row, so two snapshots built from different tile objects
        but with the same cells / rotations / faces give the same fingerprint.
        """
        ordered = sorted(self.tiles, key=lambda tile: canonical_order(tile.cell))
        body = ";".join(tile.fingerprint() for tile in ordered)
        if template is None:
            return body
        return f"{template.identity}|{body}"
