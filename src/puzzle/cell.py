"""
A cell on the grid

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

# The logical grid is unbounded: only relative positions matter.


@dataclass(frozen=True)
class Cell:
    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> Cell:
        return Cell(self.x + dx, self.y + dy)

    def to_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


def canonical_order(cell: Cell) -> tuple[int, int]:
    """Sort key for the canonical form: row by row (y ascending), then left to right (x ascending)."""
    return (cell.y, cell.x)


def anchor_top_left(cells: Iterable[Cell]) -> list[Cell]:
    """Translate all cells so the smallest x and the smallest y both become 0. Keeps the input order."""
    cells = list(cells)
    if not cells:
        return []
    min_x = min(cell.x for cell in cells)
    min_y = min(cell.y for cell in cells)
    return [cell.shifted(-min_x, -min_y) for cell in cells]
