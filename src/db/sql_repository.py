"""Implementation of (Template)Repository using SQLAlchemy"""

from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from src.core.models import TemplateModel
from src.db.schema import DBTemplate


class SQLTemplateRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(self, db_session: Session) -> None:
        self.db = db_session

    def get_template(self, template_id: UUID) -> TemplateModel | None:
        """Get template by ID, if record exists."""
        template_db = self._fetch_template(template_id)
        if template_db:
            return self._to_model(template_db)
        return None

    def list_templates(self) -> list[tuple[UUID, TemplateModel]]:
        """All stored templates, oldest first."""
        query = select(DBTemplate).order_by(DBTemplate.created_at, DBTemplate.name)
        return [(row.id, self._to_model(row)) for row in self.db.scalars(query)]

    def create_template(self, template: TemplateModel) -> tuple[TemplateModel, UUID]:
        """Store new template and return the stored data + newly created template ID."""

        new_id = uuid4()
        template_db = DBTemplate(
            id=new_id,
            name=template.name,
            reference_image=template.reference_image,
            cells=template.cells,
            rules=template.rules,
        )
        self.db.add(template_db)
        self.db.commit()
        self.db.refresh(template_db)
        return self._to_model(template_db), new_id

    def update_template(
        self, template_id: UUID, template: TemplateModel
    ) -> TemplateModel | None:
        """Replace an existing record."""
        template_db = self._fetch_template(template_id)
        if not template_db:
            return None
        template_db.name = template.name
        template_db.reference_image = template.reference_image
        template_db.cells = template.cells
        template_db.rules = template.rules
        self.db.commit()
        self.db.refresh(template_db)
        return self._to_model(template_db)

    def delete_template(self, template_id: UUID) -> TemplateModel | None:
        """Remove a template's record."""
        template_db = self._fetch_template(template_id)
        if not template_db:
            return None
        template_model = self._to_model(template_db)
        self.db.delete(template_db)
        self.db.commit()
        return template_model

    def _fetch_template(self, template_id: UUID) -> DBTemplate | None:
        query = select(DBTemplate).where(DBTemplate.id == template_id)
        return self.db.scalar(query)

    def _to_model(self, template_db: DBTemplate) -> TemplateModel:
        """Convert SQLAlchemy model to data transfer model."""
        return TemplateModel(
            name=template_db.name,
            reference_image=template_db.reference_image,
            cells=list(template_db.cells),
            rules=dict(template_db.rules),
        )
