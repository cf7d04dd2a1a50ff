from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brewmaster.schemas.recipe import normalize_choice

LIBRARY_TYPES = ("fermentable", "hop", "culture", "misc", "water", "style")


class LibraryIngredient(BaseModel):
    id: str | None = None
    name: str = ""
    type: str = "fermentable"
    color: float | None = None
    yield_: float | None = Field(default=None, alias="yield")
    alpha: float | None = None
    attenuation: float | None = None
    form: str | None = None
    category: str | None = None
    notes: str = ""

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> str:
        return normalize_choice(value, LIBRARY_TYPES, "misc")


class LibraryIngredientCreate(LibraryIngredient):
    name: str = Field(min_length=1, max_length=120)


class LibraryIngredientRead(LibraryIngredient):
    id: str
    created_at: datetime
    updated_at: datetime
