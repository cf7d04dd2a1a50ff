from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import uuid4

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brewmaster.core.database import Base

if TYPE_CHECKING:
    from brewmaster.models.brew_log import BrewLog
    from brewmaster.models.tasting_note import TastingNote


class RecipeRecord(Base):
    """A stored recipe; the full recipe document lives in ``document_json``."""

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: uuid4().hex)
    name: Mapped[str] = mapped_column(String(140), nullable=False, index=True)
    recipe_type: Mapped[str] = mapped_column(String(30), default="all_grain")
    document_json: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    brew_logs: Mapped[list[BrewLog]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
    )
    tasting_notes: Mapped[list[TastingNote]] = relationship(
        back_populates="recipe",
        cascade="all, delete-orphan",
    )
