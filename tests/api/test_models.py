from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.api.models import (
    CellPayload,
    CreateTemplateRequest,
    DrawCardRequest,
    PlacementRequest,
)
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import FaceRequirement

SQUARE_CELLS = [
    {"x": 0, "y": 0},
    {"x": 1, "y": 0},
    {"x": 0, "y": 1},
    {"x": 1, "y": 1},
]


# -- Validation - CellPayload --
@pytest.mark.parametrize("raw, snapped", [(0, 0), (89.7, 90), (-90, 270), (540, 180)])
def test_rotation_is_snapped(raw: float, snapped: int) -> None:
    assert CellPayload(x=0, y=0, rotation=raw).rotation == snapped


def test_rotation_must_be_numeric() -> None:
    with pytest.raises(InvalidRequestError):
        _ = CellPayload(x=0, y=0, rotation="left")


@pytest.mark.parametrize("flag", [True, False])
def test_rotation_cannot_be_a_bool(flag: bool) -> None:
    with pytest.raises(InvalidRequestError):
        _ = CellPayload(x=0, y=0, rotation=flag)


def test_face_by_value() -> None:
    assert CellPayload(x=0, y=0, face="face_b").face == FaceRequirement.FACE_B


def test_unknown_face() -> None:
    with pytest.raises(ValidationError):
        _ = CellPayload(x=0, y=0, face="eye")


# -- Validation - CreateTemplateRequest --
def test_valid_template_request() -> None:
    request = CreateTemplateRequest(
        name=" Fox ", reference_image="card_fox", cells=SQUARE_CELLS
    )
    assert request.name == "Fox"
    assert len(request.cells) == 4
    assert request.rules.require_rotation
    assert request.rules.allow_global_rotation


def test_template_request_needs_cells() -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateTemplateRequest(name="Fox", reference_image="card_fox", cells=[])


def test_template_request_rejects_duplicate_cells() -> None:
    with pytest.raises(InvalidRequestError):
        _ = CreateTemplateRequest(
            name="Fox",
            reference_image="card_fox",
            cells=SQUARE_CELLS + [{"x": 1, "y": 1, "rotation": 90}],
        )


@pytest.mark.parametrize("field", ["name", "reference_image"])
def test_template_request_rejects_blank_names(field: str) -> None:
    data = {"name": "Fox", "reference_image": "card_fox", "cells": SQUARE_CELLS}
    data[field] = "   "
    with pytest.raises(InvalidRequestError):
        _ = CreateTemplateRequest(**data)


# -- Validation - DrawCardRequest --
@pytest.mark.parametrize(
    "data",
    [{"card_id": "fox"}, {"reference_image": "card_fox"}, {"template_id": uuid4()}],
)
def test_draw_card_with_a_key(data: dict) -> None:
    _ = DrawCardRequest(**data)


def test_draw_card_without_keys() -> None:
    with pytest.raises(InvalidRequestError):
        _ = DrawCardRequest()


# -- Validation - PlacementRequest --
def test_empty_grid_is_a_valid_placement() -> None:
    assert PlacementRequest(tiles=[]).tiles == []


def test_two_tiles_on_one_cell() -> None:
    with pytest.raises(InvalidRequestError):
        _ = PlacementRequest(tiles=[{"x": 2, "y": 3}, {"x": 2, "y": 3, "rotation": 90}])
