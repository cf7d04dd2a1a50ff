from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brewmaster.core.database import Base

if TYPE_CHECKING:
    from brewmaster.models.recipe import RecipeRecord


class TastingNote(Base):
    __tablename__ = "tasting_notes"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    recipe_id: Mapped[str] = mapped_column(ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    brew_log_id: Mapped[int | None] = mapped_column(ForeignKey("brew_logs.id", ondelete="SET NULL"), nullable=True)
    tasted_on: Mapped[date] = mapped_column(Date, nullable=False)
    appearance: Mapped[int] = mapped_column(Integer, default=0)
    aroma: Mapped[int] = mapped_column(Integer, default=0)
    flavor: Mapped[int] = mapped_column(Integer, default=0)
    mouthfeel: Mapped[int] = mapped_column(Integer, default=0)
    overall: Mapped[int] = mapped_column(Integer, default=0)
    comments: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    recipe: Mapped[RecipeRecord] = relationship(back_populates="tasting_notes")
