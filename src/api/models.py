"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import FaceRequirement, ValidationStatus
from src.puzzle.rotation import normalize_rotation


# --- SHARED PAYLOADS ---
class CellPayload(BaseModel):
    x: int
    y: int
    rotation: int = 0
    face: FaceRequirement = FaceRequirement.NONE

    @field_validator("rotation", mode="before")
    @classmethod
    def snap_rotation(cls, value: float) -> int:
        """Raw angles from the grid (e.g. 89.7 or -90) are snapped to a quarter turn."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidRequestError(f"Rotation {value!r} is not a number.")
        return normalize_rotation(value)


class RulesPayload(BaseModel):
    require_rotation: bool = True
    allow_global_rotation: bool = True
    ignore_rotation_on_face_a: bool = False
    accept_half_turn: bool = False
    allow_flip_h: bool = False
    allow_flip_v: bool = False


def _assert_unique_cells(cells: list[CellPayload]) -> None:
    seen: set[tuple[int, int]] = set()
    for cell in cells:
        if (cell.x, cell.y) in seen:
            raise InvalidRequestError(
                f"Cell ({cell.x}, {cell.y}) appears more than once."
            )
        seen.add((cell.x, cell.y))


# --- REQUEST MODELS ---
class CreateTemplateRequest(BaseModel):
    name: str
    reference_image: str
    cells: list[CellPayload]
    rules: RulesPayload = RulesPayload()

    @field_validator("cells")
    @classmethod
    def validate_cells(cls, value: list[CellPayload]) -> list[CellPayload]:
        if len(value) == 0:
            raise InvalidRequestError("A template needs at least one cell.")
        _assert_unique_cells(value)
        return value

    @field_validator("name", "reference_image")
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("Name and reference image cannot be blank.")
        return value.strip()


class GetTemplateRequest(BaseModel):
    template_id: UUID


class DeleteTemplateRequest(BaseModel):
    template_id: UUID


class DrawCardRequest(BaseModel):
    """A card was drawn: either point at a stored template directly or let the catalogue resolve the card."""

    card_id: Optional[str] = None
    reference_image: Optional[str] = None
    template_id: Optional[UUID] = None

    @model_validator(mode="after")
    def validate_has_lookup_key(self) -> Self:
        if not (self.card_id or self.reference_image or self.template_id):
            raise InvalidRequestError(
                "Supply a card_id, a reference_image or a template_id."
            )
        return self


class PlacementRequest(BaseModel):
    """Settled tiles only: the grid reader leaves out tiles that are dragged or animating."""

    tiles: list[CellPayload]

    @field_validator("tiles")
    @classmethod
    def validate_tiles(cls, value: list[CellPayload]) -> list[CellPayload]:
        _assert_unique_cells(value)
        return value


# --- RESPONSE MODELS ---
class TemplateResponse(BaseModel):
    template_id: UUID
    name: str
    reference_image: str
    cells: list[CellPayload]
    rules: RulesPayload


class ValidationResponse(BaseModel):
    status: ValidationStatus
    valid: bool
    complete: bool
    round_id: int
    became_valid: bool = False
    template_name: Optional[str] = None
    diagnostic: Optional[str] = None
