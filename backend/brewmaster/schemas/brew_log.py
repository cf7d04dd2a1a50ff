from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

BrewLogStatus = Literal["brewing", "fermenting", "bottled"]
SugarType = Literal["table_sugar", "glucose", "dme"]


class BrewLogMeasurements(BaseModel):
    actual_og: float | None = Field(default=None, gt=0.99, lt=1.2)
    actual_fg: float | None = Field(default=None, gt=0.99, lt=1.2)
    actual_volume: float | None = Field(default=None, gt=0)
    mash_temp: float | None = Field(default=None, gt=0, lt=100)
    boil_gravity: float | None = Field(default=None, gt=0.99, lt=1.2)
    measured_alpha: dict[str, float] = Field(default_factory=dict)
    fermentation_temp: float | None = Field(default=None, gt=-10, lt=60)


class BrewLogBottling(BaseModel):
    bottling_date: date | None = None
    target_co2: float = Field(default=2.4, gt=0, le=6)
    sugar_type: SugarType = "table_sugar"
    sugar_amount: float | None = Field(default=None, ge=0)
    bottling_volume: float | None = Field(default=None, gt=0)


class BrewLogCreate(BaseModel):
    recipe_id: str = Field(min_length=1, max_length=36)
    started_on: date | None = None
    brew_date: date | None = None
    notes: str = ""
    measurements: BrewLogMeasurements = Field(default_factory=BrewLogMeasurements)
    bottling: BrewLogBottling = Field(default_factory=BrewLogBottling)


class BrewLogUpdate(BaseModel):
    brew_date: date | None = None
    notes: str | None = None
    measurements: BrewLogMeasurements | None = None
    bottling: BrewLogBottling | None = None


class BrewLogStatusUpdate(BaseModel):
    status: BrewLogStatus
    effective_on: date | None = None


class BrewLogRead(BaseModel):
    id: int
    recipe_id: str
    recipe_name: str
    status: BrewLogStatus
    started_on: date
    brew_date: date | None
    fermentation_date: date | None
    notes: str
    measurements: BrewLogMeasurements
    bottling: BrewLogBottling
    created_at: datetime

    actual_abv: float
    brew_day_ibu: int
    priming_sugar_g: int
