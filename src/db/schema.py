"""Database tables / schema"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBTemplate(Base):
    __tablename__ = "templates"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    name: Mapped[str]
    reference_image: Mapped[str] = mapped_column(index=True)
    cells: Mapped[list[dict]] = mapped_column(JSON, default=list)
    rules: Mapped[dict[str, bool]] = mapped_column(JSON, default=dict)
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
