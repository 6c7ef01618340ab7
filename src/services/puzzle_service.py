"""Orchestration of communication from API models to the validation engine and the template catalogue (and the reverse direction)."""

import logging
from typing import Callable, Optional
from uuid import UUID

from src.api.models import (
    CellPayload,
    CreateTemplateRequest,
    DeleteTemplateRequest,
    DrawCardRequest,
    GetTemplateRequest,
    PlacementRequest,
    RulesPayload,
    TemplateResponse,
    ValidationResponse,
)
from src.core.exceptions import RepositoryError, TemplateNotFoundError
from src.core.models import TemplateModel
from src.db.repository import TemplateRepository
from src.puzzle.cell import Cell
from src.puzzle.registry import TemplateRegistry
from src.puzzle.session import ValidationSession, ValidationState
from src.puzzle.snapshot import PlacedTile, PlacementSnapshot
from src.puzzle.template import Template

logger = logging.getLogger(__name__)


class PuzzleService:
    """Orchestration of layers for the tile puzzle."""

    def __init__(
        self,
        repository: TemplateRepository,
        session: Optional[ValidationSession] = None,
    ) -> None:
        self.repo = repository
        self.session = session if session is not None else ValidationSession()

    # -- Template catalogue --
    def create_template(self, request: CreateTemplateRequest) -> TemplateResponse:
        """Store an authored template."""

        # Build the domain object first: it rejects anything the matcher could not work with
        template = Template.from_model(self._request_to_model(request))

        stored_model, template_id = self.repo.create_template(template.to_model())
        return self._create_template_response(template_id, stored_model)

    def get_template(self, request: GetTemplateRequest) -> TemplateResponse:
        stored_model = self._fetch_template(request.template_id)
        return self._create_template_response(request.template_id, stored_model)

    def list_templates(self) -> list[TemplateResponse]:
        return [
            self._create_template_response(template_id, model)
            for template_id, model in self.repo.list_templates()
        ]

    def delete_template(self, request: DeleteTemplateRequest) -> None:
        """Handle a request to delete a Template record."""
        self.repo.delete_template(request.template_id)

    # -- Round flow --
    def draw_card(self, request: DrawCardRequest) -> ValidationResponse:
        """
        A new card reached the preview.
        ----
        Resolve its template and make it the active one. The session re-checks the grid immediately.
        """
        if request.template_id is not None:
            template = Template.from_model(self._fetch_template(request.template_id))
        else:
            template = self._resolve_card(request.card_id or "", request.reference_image)

        logger.info("Card drawn, active template: %s", template.name)
        return self._apply(lambda: self.session.activate_template(template))

    def clear_card(self) -> ValidationResponse:
        """Card removed from the preview: nothing to validate against until the next draw."""
        return self._apply(lambda: self.session.activate_template(None))

    def submit_placement(self, request: PlacementRequest) -> ValidationResponse:
        """The grid changed. Identical placements in a row are cheap: the session skips them."""
        snapshot = PlacementSnapshot.from_tiles(
            PlacedTile(Cell(tile.x, tile.y), tile.rotation, tile.face)
            for tile in request.tiles
        )
        return self._apply(lambda: self.session.push_snapshot(snapshot))

    def current_state(self) -> ValidationResponse:
        return self._create_validation_response(became_valid=False)

    # -- Internal helpers --
    def _apply(self, action: Callable[[], ValidationState]) -> ValidationResponse:
        """Run a session input and report whether it produced the 'became valid' edge."""
        round_before = self.session.round_id
        action()
        return self._create_validation_response(
            became_valid=self.session.round_id != round_before
        )

    def _resolve_card(self, card_id: str, reference_image: Optional[str]) -> Template:
        registry = TemplateRegistry(
            Template.from_model(model) for _, model in self.repo.list_templates()
        )
        template = registry.resolve(card_id, reference_image)
        if template is None:
            logger.warning(
                "No template found for card_id=%r reference_image=%r",
                card_id,
                reference_image,
            )
            raise TemplateNotFoundError(
                f"No template found for {card_id=} / {reference_image=}."
            )
        return template

    def _create_validation_response(self, became_valid: bool) -> ValidationResponse:
        state = self.session.state
        template = self.session.active_template
        result = self.session.last_result
        return ValidationResponse(
            status=state.status,
            valid=state.valid,
            complete=state.complete,
            round_id=self.session.round_id,
            became_valid=became_valid,
            template_name=template.name if template is not None else None,
            diagnostic=result.diagnostic if result is not None else None,
        )

    def _create_template_response(
        self, template_id: UUID, model: TemplateModel
    ) -> TemplateResponse:
        """Convert info in TemplateModel to a TemplateResponse (for template with given ID.)"""
        return TemplateResponse(
            template_id=template_id,
            name=model.name,
            reference_image=model.reference_image,
            cells=[CellPayload(**cell) for cell in model.cells],
            rules=RulesPayload(**model.rules),
        )

    def _request_to_model(self, request: CreateTemplateRequest) -> TemplateModel:
        return TemplateModel(
            name=request.name,
            reference_image=request.reference_image,
            cells=[cell.model_dump(mode="json") for cell in request.cells],
            rules=request.rules.model_dump(),
        )

    def _fetch_template(self, template_id: UUID) -> TemplateModel:
        """Attempt to find the template in the repository and raise error if it fails."""
        template_model = self.repo.get_template(template_id)
        if template_model is None:
            raise RepositoryError(f"Template with {template_id=} not found.")
        return template_model
