from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

RECIPE_TYPES = ("extract", "partial_mash", "all_grain")
HOP_USES = ("boil", "dry_hop", "mash", "first_wort", "whirlpool")
BITTERING_HOP_USES = ("boil", "first_wort", "whirlpool")
CULTURE_TYPES = ("ale", "lager", "wheat", "wine", "champagne")
CULTURE_FORMS = ("liquid", "dry", "slant", "culture")

_HOP_USE_ALIASES = {"aroma": "whirlpool", "flameout": "whirlpool"}


def normalize_choice(value: object, choices: tuple[str, ...], default: str, aliases: dict[str, str] | None = None) -> str:
    """Lowercase and underscore a free-text enum value, falling back to ``default``."""
    if not isinstance(value, str):
        return default
    key = value.strip().lower().replace(" ", "_").replace("-", "_")
    if aliases:
        key = aliases.get(key, key)
    return key if key in choices else default


class Quantity(BaseModel):
    unit: str = ""
    value: float = 0.0


class NamedValue(BaseModel):
    value: float | None = None


class FermentableYield(BaseModel):
    potential: NamedValue = Field(default_factory=NamedValue)


class Fermentable(BaseModel):
    name: str = ""
    type: str = "grain"
    amount: Quantity = Field(default_factory=lambda: Quantity(unit="kilograms"))
    yield_: FermentableYield | None = Field(default=None, alias="yield")
    color: NamedValue | None = None
    library_id: str | None = Field(default=None, alias="libraryId")

    model_config = ConfigDict(populate_by_name=True)


class Hop(BaseModel):
    name: str = ""
    amount: Quantity | None = None
    alpha_acid: NamedValue | None = None
    use: str = "boil"
    time: Quantity | None = None
    library_id: str | None = Field(default=None, alias="libraryId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("use", mode="before")
    @classmethod
    def _coerce_use(cls, value: object) -> str:
        return normalize_choice(value, HOP_USES, "boil", aliases=_HOP_USE_ALIASES)


class Culture(BaseModel):
    name: str = ""
    type: str = "ale"
    form: str = "dry"
    amount: Quantity | None = None
    attenuation: float | None = None
    library_id: str | None = Field(default=None, alias="libraryId")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> str:
        return normalize_choice(value, CULTURE_TYPES, "ale")

    @field_validator("form", mode="before")
    @classmethod
    def _coerce_form(cls, value: object) -> str:
        return normalize_choice(value, CULTURE_FORMS, "dry")


class Misc(BaseModel):
    name: str = ""
    type: str = "other"
    use: str = "boil"
    amount: Quantity | None = None
    time: Quantity | None = None


class Water(BaseModel):
    name: str = ""
    amount: Quantity | None = None


class RecipeIngredients(BaseModel):
    fermentables: list[Fermentable] = Field(default_factory=list)
    hops: list[Hop] = Field(default_factory=list)
    cultures: list[Culture] = Field(default_factory=list)
    miscellaneous: list[Misc] = Field(default_factory=list)
    water: list[Water] = Field(default_factory=list)


class Efficiency(BaseModel):
    brewhouse: float = 75.0


class Style(BaseModel):
    name: str = ""
    category: str = ""


class Specifications(BaseModel):
    og: NamedValue | None = None
    fg: NamedValue | None = None
    abv: NamedValue | None = None
    ibu: NamedValue | None = None
    color: NamedValue | None = None


class Recipe(BaseModel):
    id: str | None = None
    name: str = ""
    type: str = "all_grain"
    author: str = ""
    notes: str = ""
    batch_size: Quantity = Field(default_factory=lambda: Quantity(unit="liters", value=20.0))
    style: Style | None = None
    ingredients: RecipeIngredients = Field(default_factory=RecipeIngredients)
    efficiency: Efficiency = Field(default_factory=Efficiency)
    boil_time: Quantity = Field(default_factory=lambda: Quantity(unit="minutes", value=60.0))
    specifications: Specifications | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _coerce_type(cls, value: object) -> str:
        return normalize_choice(value, RECIPE_TYPES, "all_grain")


class RecipeCreate(Recipe):
    name: str = Field(min_length=1, max_length=140)


class RecipeRead(Recipe):
    id: str
    created_at: datetime
    updated_at: datetime


class RecipeStatsRequest(BaseModel):
    alpha_overrides: dict[str, float] = Field(default_factory=dict)


class RecipeCalculateRequest(RecipeStatsRequest):
    recipe: Recipe


class RecipeStatsRead(BaseModel):
    og: float
    fg: float
    abv: float
    color: float
    ibu: int
    color_hex: str
