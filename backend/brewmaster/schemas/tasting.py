from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


class TastingNoteBase(BaseModel):
    recipe_id: str = Field(min_length=1, max_length=36)
    brew_log_id: int | None = Field(default=None, gt=0)
    tasted_on: date
    appearance: int = Field(default=0, ge=0, le=5)
    aroma: int = Field(default=0, ge=0, le=5)
    flavor: int = Field(default=0, ge=0, le=5)
    mouthfeel: int = Field(default=0, ge=0, le=5)
    overall: int = Field(default=0, ge=0, le=5)
    comments: str = ""


class TastingNoteCreate(TastingNoteBase):
    pass


class TastingNoteRead(TastingNoteBase):
    id: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
