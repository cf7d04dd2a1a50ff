from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING

from sqlalchemy import Date, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from brewmaster.core.database import Base

if TYPE_CHECKING:
    from brewmaster.models.recipe import RecipeRecord


class BrewLog(Base):
    __tablename__ = "brew_logs"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    recipe_id: Mapped[str] = mapped_column(ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), default="brewing")
    started_on: Mapped[date] = mapped_column(Date, nullable=False)
    brew_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    fermentation_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str] = mapped_column(Text, default="")

    actual_og: Mapped[float | None] = mapped_column(Float, nullable=True)
    actual_fg: Mapped[float | None] = mapped_column(Float, nullable=True)
    actual_volume: Mapped[float | None] = mapped_column(Float, nullable=True)
    mash_temp: Mapped[float | None] = mapped_column(Float, nullable=True)
    boil_gravity: Mapped[float | None] = mapped_column(Float, nullable=True)
    fermentation_temp: Mapped[float | None] = mapped_column(Float, nullable=True)
    measured_alpha_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    bottling_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    target_co2: Mapped[float] = mapped_column(Float, default=2.4)
    sugar_type: Mapped[str] = mapped_column(String(20), default="table_sugar")
    sugar_amount: Mapped[float | None] = mapped_column(Float, nullable=True)
    bottling_volume: Mapped[float | None] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, nullable=False)

    recipe: Mapped[RecipeRecord] = relationship(back_populates="brew_logs")
