"""SQLAlchemy ORM model for CustomField definitions."""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, JSON, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from custom_fields.infrastructure.database.base import Base


class CustomFieldModel(Base):
    """ORM model — maps to the 'custom_fields' table.

    Options and the visibility configuration are stored as JSON in their
    configuration shape; they are parsed leniently when mapped back.
    """

    __tablename__ = "custom_fields"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    entity_type: Mapped[str] = mapped_column(String(100), nullable=False)
    code: Mapped[str] = mapped_column(String(100), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    field_type: Mapped[str] = mapped_column(String(50), nullable=False, default="text")
    options: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    visibility: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("entity_type", "code", name="uq_custom_fields_entity_code"),
        Index("ix_custom_fields_entity_type", "entity_type", "sort_order"),
    )

    def __repr__(self) -> str:
        return (
            f"<CustomFieldModel(id={self.id}, "
            f"entity_type='{self.entity_type}', code='{self.code}')>"
        )
