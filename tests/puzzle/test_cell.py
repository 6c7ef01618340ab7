"""Unit tests for /src/puzzle/cell.py"""

from src.puzzle.cell import Cell, anchor_top_left, canonical_order


def test_anchor_moves_minimum_to_origin() -> None:
    """Smallest x and smallest y both become 0, even when they come from different cells."""
    cells = [Cell(3, -1), Cell(5, 2), Cell(4, 0)]
    assert anchor_top_left(cells) == [Cell(0, 0), Cell(2, 3), Cell(1, 1)]


def test_anchor_keeps_input_order() -> None:
    cells = [Cell(1, 1), Cell(0, 0)]
    assert anchor_top_left(cells) == [Cell(1, 1), Cell(0, 0)]


def test_anchor_of_nothing() -> None:
    assert anchor_top_left([]) == []


def test_canonical_order_is_row_by_row() -> None:
    """y ascending first, then x ascending."""
    cells = [Cell(1, 1), Cell(0, 1), Cell(1, 0), Cell(0, 0)]
    assert sorted(cells, key=canonical_order) == [
        Cell(0, 0),
        Cell(1, 0),
        Cell(0, 1),
        Cell(1, 1),
    ]


def test_cells_are_values() -> None:
    """Equality / hashing purely on coordinates, so cells can be used as dictionary keys."""
    assert Cell(2, 3) == Cell(2, 3)
    assert len({Cell(2, 3), Cell(2, 3), Cell(3, 2)}) == 2
    assert Cell(2, 3).shifted(-2, 1) == Cell(0, 4)
