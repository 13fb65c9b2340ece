from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from ovimanager.infrastructure.db.base import Base


class EweEnrollmentORM(Base):
    __tablename__ = "ewe_enrollments"
    __table_args__ = (
        UniqueConstraint("batch_id", "ewe_id", name="uq_ewe_enrollments_batch_ewe"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    batch_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("breeding_batches.id", ondelete="CASCADE"),
        nullable=False,
    )
    ewe_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("animals.id"),
        nullable=False,
        index=True,
    )
    attempt_count: Mapped[int] = mapped_column(Integer, server_default="1", nullable=False)
    cycle1_result: Mapped[str] = mapped_column(
        String(16), server_default="pending", nullable=False
    )
    cycle2_result: Mapped[str] = mapped_column(
        String(16), server_default="pending", nullable=False
    )
    cycle3_result: Mapped[str] = mapped_column(
        String(16), server_default="pending", nullable=False
    )
    finalized: Mapped[bool] = mapped_column(Boolean, server_default="false", nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
