from pydantic import BaseModel, Field

from brewmaster.schemas.recipe import Recipe


class AISuggestion(BaseModel):
    title: str
    rationale: str
    action: str
    priority: str = Field(default="medium")


class RecipeDraftRequest(BaseModel):
    prompt: str = Field(min_length=3, max_length=2000)


class RecipeDraftResponse(BaseModel):
    summary: str
    recipe: Recipe
    source: str = Field(default="rules")


class TastingAnalysisRequest(BaseModel):
    recipe_id: str
    tasting_note_id: int | None = Field(default=None, gt=0)
    notes: str = Field(default="", max_length=4000)


class TastingAnalysisResponse(BaseModel):
    summary: str
    suggestions: list[AISuggestion]
    source: str = Field(default="rules")
