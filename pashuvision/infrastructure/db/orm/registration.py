from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Index, String, func
from sqlalchemy.orm import Mapped, mapped_column

from pashuvision.infrastructure.db.base import Base


class RegistrationORM(Base):
    __tablename__ = "registrations"
    __table_args__ = (
        Index("ix_registrations_timestamp", "timestamp"),
        Index("ix_registrations_sync_queue", "synced", "status"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # Owner and animals are stored as whole documents and replaced on every upsert
    owner: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    animals: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    is_sample: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    synced: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="Completed")

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
