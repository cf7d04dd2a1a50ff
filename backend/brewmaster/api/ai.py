from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from brewmaster.api.recipes import get_recipe_or_404
from brewmaster.core.database import get_db
from brewmaster.core.rate_limit import enforce_ai_rate_limit
from brewmaster.models.tasting_note import TastingNote
from brewmaster.schemas.ai import (
    RecipeDraftRequest,
    RecipeDraftResponse,
    TastingAnalysisRequest,
    TastingAnalysisResponse,
)
from brewmaster.services import ai_orchestrator
from brewmaster.services.recipe_documents import parse_recipe_document

router = APIRouter(prefix="/ai", tags=["ai"], dependencies=[Depends(enforce_ai_rate_limit)])


@router.post("/draft-recipe", response_model=RecipeDraftResponse)
def draft_recipe(payload: RecipeDraftRequest) -> RecipeDraftResponse:
    recipe, source = ai_orchestrator.draft_recipe(payload.prompt)
    return RecipeDraftResponse(
        summary=f"Drafted '{recipe.name}' from your prompt. Source: {source}.",
        recipe=recipe,
        source=source,
    )


@router.post("/analyze-tasting", response_model=TastingAnalysisResponse)
def analyze_tasting(payload: TastingAnalysisRequest, db: Session = Depends(get_db)) -> TastingAnalysisResponse:
    recipe = parse_recipe_document(get_recipe_or_404(db, payload.recipe_id))

    note = None
    if payload.tasting_note_id is not None:
        note = db.get(TastingNote, payload.tasting_note_id)
        if not note or note.recipe_id != payload.recipe_id:
            raise HTTPException(status_code=404, detail="Tasting note not found")

    if note is None and not payload.notes.strip():
        raise HTTPException(status_code=422, detail="Provide tasting notes or a tasting_note_id")

    suggestions, source = ai_orchestrator.analyze_tasting(recipe=recipe, note=note, comments=payload.notes)
    return TastingAnalysisResponse(
        summary=f"Generated {len(suggestions)} suggestion(s) for recipe '{recipe.name}'. Source: {source}.",
        suggestions=suggestions,
        source=source,
    )
