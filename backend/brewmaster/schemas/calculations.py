from pydantic import BaseModel, Field

from brewmaster.schemas.brew_log import SugarType


class AbvRequest(BaseModel):
    og: float | None = Field(default=None, gt=0.99, lt=1.2)
    fg: float | None = Field(default=None, gt=0.99, lt=1.2)
    is_bottled: bool = False
    sugar_g: float = Field(default=0, ge=0)
    volume_l: float = Field(default=1, ge=0)


class AbvRead(BaseModel):
    abv: float


class PrimingSugarRequest(BaseModel):
    target_co2: float = Field(default=2.4, gt=0, le=6)
    liters: float = Field(gt=0)
    temp_c: float = Field(default=20, gt=-10, lt=60)
    sugar_type: SugarType = "table_sugar"


class PrimingSugarRead(BaseModel):
    sugar_g: int
    sugar_type: SugarType
    residual_co2: float
