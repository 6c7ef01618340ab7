"""
The authored target shape (an animal silhouette) that the player must reproduce with tiles.

A template is a value: the service swaps the active one when a new card is drawn, it never changes one in place.
"""

from dataclasses import asdict, dataclass, field
from typing import Optional, Self, Sequence

from src.core.exceptions import InvalidTemplateError
from src.core.models import TemplateModel
from src.core.shared_types import FaceRequirement
from src.puzzle.cell import Cell
from src.puzzle.rotation import normalize_rotation


@dataclass(frozen=True)
class TemplateCell:
    position: Cell
    rotation: int = 0
    face: FaceRequirement = FaceRequirement.NONE


@dataclass(frozen=True)
class MatchRules:
    """
    How strict the comparison is. Defaults are the strict authoring defaults.
    ----
    * require_rotation: if False, tile rotations are not checked at all
    * allow_global_rotation: the whole shape may appear turned by 90/180/270 as a rigid body
    * ignore_rotation_on_face_a: skip the rotation check on cells that need FACE_A
    * accept_half_turn: a tile turned by 180 degrees from the expected rotation still counts

    allow_flip_h / allow_flip_v are stored with the template but mirror matching is not implemented: they are never read.
    """

    require_rotation: bool = True
    allow_global_rotation: bool = True
    ignore_rotation_on_face_a: bool = False
    accept_half_turn: bool = False
    allow_flip_h: bool = False
    allow_flip_v: bool = False


@dataclass(frozen=True)
class Template:
    name: str
    reference_image: str
    cells: tuple[TemplateCell, ...]
    rules: MatchRules = field(default_factory=MatchRules)

    @classmethod
    def from_lists(
        cls,
        name: str,
        reference_image: str,
        positions: Sequence[tuple[int, int]],
        rotations: Optional[Sequence[float]] = None,
        faces: Optional[Sequence[str]] = None,
        rules: Optional[MatchRules] = None,
    ) -> Self:
        """
        Build a template from the authoring format: three lists aligned by index.
        ----
        The rotations and faces lists may be shorter than positions (or missing). Missing entries default to rotation 0 and face NONE.
        """
        rotations = rotations or []
        faces = faces or []
        cells: list[TemplateCell] = []
        for idx, (x, y) in enumerate(positions):
            rotation = rotations[idx] if idx < len(rotations) else 0
            face = faces[idx] if idx < len(faces) else FaceRequirement.NONE
            cells.append(
                TemplateCell(
                    position=Cell(int(x), int(y)),
                    rotation=_parse_rotation(rotation, name),
                    face=_parse_face(face, name),
                )
            )
        return cls(name, reference_image, tuple(cells), rules or MatchRules())

    @classmethod
    def from_model(cls, model: TemplateModel) -> Self:
        """Define how to construct a Template from the information the Service layer actually has"""
        unknown_flags = set(model.rules) - set(MatchRules.__dataclass_fields__)
        if unknown_flags:
            raise InvalidTemplateError(
                f"Template {model.name!r}: unknown rule flag(s) {','.join(sorted(unknown_flags))}."
            )
        try:
            positions = [(int(cell["x"]), int(cell["y"])) for cell in model.cells]
        except (KeyError, TypeError, ValueError) as err:
            raise InvalidTemplateError(
                f"Template {model.name!r}: every cell needs integer 'x' and 'y'."
            ) from err
        return cls.from_lists(
            name=model.name,
            reference_image=model.reference_image,
            positions=positions,
            rotations=[cell.get("rotation", 0) for cell in model.cells],
            faces=[cell.get("face", FaceRequirement.NONE) for cell in model.cells],
            rules=MatchRules(**model.rules),
        )

    def to_model(self) -> TemplateModel:
        """Encode back into a format the Service layer uses"""
        return TemplateModel(
            name=self.name,
            reference_image=self.reference_image,
            cells=[
                {
                    "x": cell.position.x,
                    "y": cell.position.y,
                    "rotation": cell.rotation,
                    "face": cell.face.value,
                }
                for cell in self.cells
            ],
            rules=asdict(self.rules),
        )

    @property
    def is_active(self) -> bool:
        """An empty template means 'nothing to validate against'."""
        return len(self.cells) > 0

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def identity(self) -> str:
        return f"{self.name}@{self.reference_image}"


def _parse_rotation(value: float, template_name: str) -> int:
    try:
        return normalize_rotation(float(value))
    except (TypeError, ValueError) as err:
        raise InvalidTemplateError(
            f"Template {template_name!r}: rotation {value!r} is not a number."
        ) from err


def _parse_face(value: str, template_name: str) -> FaceRequirement:
    try:
        return FaceRequirement(value)
    except ValueError as err:
        raise InvalidTemplateError(
            f"Template {template_name!r}: face {value!r} not in {','.join(face.value for face in FaceRequirement)}."
        ) from err
