from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from ovimanager.infrastructure.db.base import Base


class PregnancyRecordORM(Base):
    __tablename__ = "pregnancy_records"
    __table_args__ = (
        Index(
            "ix_pregnancy_records_ewe_origin",
            "ewe_id",
            "origin_batch_id",
        ),
        Index(
            "ix_pregnancy_records_due",
            "outcome",
            "due_date",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    ewe_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("animals.id"),
        nullable=False,
    )
    sire_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    covering_date: Mapped[date] = mapped_column(Date, nullable=False)
    due_date: Mapped[date] = mapped_column(Date, nullable=False)
    outcome: Mapped[str] = mapped_column(String(16), server_default="confirmed", nullable=False)
    actual_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    origin_batch_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("breeding_batches.id", ondelete="SET NULL"),
        nullable=True,
    )
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
