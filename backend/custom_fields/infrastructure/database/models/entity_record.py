"""SQLAlchemy ORM model for the stored custom field values of a record."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from custom_fields.infrastructure.database.base import Base


class EntityRecordModel(Base):
    """ORM model — maps to the 'custom_field_values' table, one row per record."""

    __tablename__ = "custom_field_values"

    entity_type: Mapped[str] = mapped_column(String(100), primary_key=True)
    record_id: Mapped[str] = mapped_column(String(100), primary_key=True)
    values: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
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

    def __repr__(self) -> str:
        return f"<EntityRecordModel(entity_type='{self.entity_type}', record_id='{self.record_id}')>"
