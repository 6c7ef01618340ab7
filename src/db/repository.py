"""Protocol repository (implemented with SQLAlchemy, mocked with a dict in the service tests)"""

from typing import Protocol
from uuid import UUID

from src.core.models import TemplateModel


class TemplateRepository(Protocol):
    """Persistence layer orchestration"""

    def get_template(self, template_id: UUID) -> TemplateModel | None:
        """Get template by ID, if record exists."""
        ...

    def list_templates(self) -> list[tuple[UUID, TemplateModel]]:
        """All stored templates, oldest first."""
        ...

    def create_template(self, template: TemplateModel) -> tuple[TemplateModel, UUID]:
        """Store new template and return the stored data + newly created template ID."""
        ...

    def update_template(
        self, template_id: UUID, template: TemplateModel
    ) -> TemplateModel | None:
        """Replace an existing record."""
        ...

    def delete_template(self, template_id: UUID) -> TemplateModel | None:
        """Remove a template's record."""
        ...
