"""
Decide whether the tiles on the grid reproduce a template.

Both sides are brought to the same canonical form (anchored top-left, sorted row by row) and compared cell by cell.
The template side is tried under every candidate transform from the symmetry module; the first one that fits wins.
"""

from dataclasses import dataclass, field
from typing import Optional

from src.core.shared_types import FaceRequirement
from src.puzzle.cell import anchor_top_left, canonical_order
from src.puzzle.rotation import half_turn, normalize_rotation
from src.puzzle.snapshot import PlacedTile, PlacementSnapshot
from src.puzzle.symmetry import Transform, candidate_transforms
from src.puzzle.template import MatchRules, Template, TemplateCell


@dataclass(frozen=True)
class MatchResult:
    """Verdict plus the data needed to debug it. Only `matched` matters for correctness."""

    matched: bool
    transform: Optional[Transform] = None
    expected: tuple[TemplateCell, ...] = ()
    actual: tuple[PlacedTile, ...] = ()
    reason: str = ""
    cells_checked: int = field(default=0, compare=False)

    @property
    def diagnostic(self) -> str:
        if self.matched and self.transform is not None:
            return f"({self.transform.describe()})"
        lines = [f"no candidate matched: {self.reason}"]
        if self.transform is not None:
            lines.append(f"closest attempt ({self.transform.describe()}):")
        for idx in range(max(len(self.expected), len(self.actual))):
            exp = self.expected[idx] if idx < len(self.expected) else None
            got = self.actual[idx] if idx < len(self.actual) else None
            exp_str = (
                f"{exp.position.to_tuple()} rot={exp.rotation} face={exp.face.value}"
                if exp
                else "-"
            )
            got_str = (
                f"{got.cell.to_tuple()} rot={got.rotation} face={got.face.value}"
                if got
                else "-"
            )
            lines.append(f"  [{idx}] expected {exp_str} | placed {got_str}")
        return "\n".join(lines)


# --- CELL RULES ---
def face_satisfies(expected: FaceRequirement, placed: FaceRequirement) -> bool:
    """
    FACE_A and FACE_B need an exact match.
    NONE accepts NONE or FACE_B, but not FACE_A.
    """
    if expected == FaceRequirement.NONE:
        return placed != FaceRequirement.FACE_A
    return placed == expected


def rotation_satisfies(expected: TemplateCell, placed_rotation: int, rules: MatchRules) -> bool:
    """Both sides are snapped to a quarter turn first: tiles may come from a raw PlacementSnapshot."""
    if not rules.require_rotation:
        return True
    if rules.ignore_rotation_on_face_a and expected.face == FaceRequirement.FACE_A:
        return True
    placed = normalize_rotation(placed_rotation)
    wanted = normalize_rotation(expected.rotation)
    if placed == wanted:
        return True
    return rules.accept_half_turn and placed == half_turn(wanted)


def transform_template(template: Template, transform: Transform) -> list[TemplateCell]:
    """
    Template cells after turning the whole shape
    ----
    1. turn every relative position
    2. anchor the turned positions top-left again
    3. adjust each cell's expected rotation to the turn
    4. sort in canonical order
    """
    turned = anchor_top_left(transform.apply(cell.position) for cell in template.cells)
    cells = [
        TemplateCell(
            position=position,
            rotation=transform.expected_rotation(cell.rotation),
            face=cell.face,
        )
        for position, cell in zip(turned, template.cells)
    ]
    return sorted(cells, key=lambda cell: canonical_order(cell.position))


def compare_cells(
    expected: list[TemplateCell], actual: list[PlacedTile], rules: MatchRules
) -> tuple[int, str]:
    """Walk both canonical lists in step. Returns the number of cells that passed and the reason of the first failure ('' if none)."""
    for idx, (exp, got) in enumerate(zip(expected, actual)):
        if got.cell != exp.position:
            return idx, f"cell {idx}: position {got.cell.to_tuple()} != {exp.position.to_tuple()}"
        if not rotation_satisfies(exp, got.rotation, rules):
            return idx, f"cell {idx}: rotation {got.rotation} != {exp.rotation}"
        if not face_satisfies(exp.face, got.face):
            return idx, f"cell {idx}: face {got.face.value} does not satisfy {exp.face.value}"
    return len(expected), ""


def matches(snapshot: PlacementSnapshot, template: Template) -> MatchResult:
    """
    Entrypoint of the matcher.
    ----
    1. reject a count mismatch (the session checks this first, but direct callers get the same answer)
    2. canonical form of the placed tiles
    3. for every candidate transform: turn the template, compare cell by cell, stop at the first full match
    4. otherwise report the attempt that got furthest
    """
    if not template.is_active:
        return MatchResult(matched=False, reason="template has no cells")

    if len(snapshot) != template.size:
        return MatchResult(
            matched=False,
            actual=tuple(snapshot.tiles),
            reason=f"{len(snapshot)} tiles placed, template needs {template.size}",
        )

    actual = snapshot.canonical()
    best: Optional[MatchResult] = None
    for transform in candidate_transforms(template.rules.allow_global_rotation):
        expected = transform_template(template, transform)
        passed, reason = compare_cells(expected, actual, template.rules)
        attempt = MatchResult(
            matched=(passed == len(expected)),
            transform=transform,
            expected=tuple(expected),
            actual=tuple(actual),
            reason=reason,
            cells_checked=passed,
        )
        if attempt.matched:
            return attempt
        if best is None or passed >= best.cells_checked:
            best = attempt

    assert best is not None  # there is always at least one candidate transform
    return best
