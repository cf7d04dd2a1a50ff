from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from brewmaster.core.database import get_db
from brewmaster.models.recipe import RecipeRecord
from brewmaster.schemas.recipe import (
    RecipeCalculateRequest,
    RecipeCreate,
    RecipeRead,
    RecipeStatsRead,
    RecipeStatsRequest,
)
from brewmaster.services.recipe_calculator import RecipeStats, apply_specifications, calculate_recipe_stats, srm_to_hex
from brewmaster.services.recipe_documents import apply_recipe_document, parse_recipe_document, to_recipe_read

router = APIRouter(prefix="/recipes", tags=["recipes"])


def get_recipe_or_404(db: Session, recipe_id: str) -> RecipeRecord:
    record = db.get(RecipeRecord, recipe_id)
    if not record:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return record


def _stats_read(stats: RecipeStats) -> RecipeStatsRead:
    return RecipeStatsRead(
        og=stats.og,
        fg=stats.fg,
        abv=stats.abv,
        color=stats.color,
        ibu=stats.ibu,
        color_hex=srm_to_hex(stats.color),
    )


@router.post("", response_model=RecipeRead, status_code=201)
def create_recipe(payload: RecipeCreate, db: Session = Depends(get_db)) -> RecipeRead:
    record = RecipeRecord()
    apply_recipe_document(record, apply_specifications(payload))

    db.add(record)
    db.commit()
    db.refresh(record)
    return to_recipe_read(record)


@router.get("", response_model=list[RecipeRead])
def list_recipes(db: Session = Depends(get_db)) -> list[RecipeRead]:
    records = db.query(RecipeRecord).order_by(RecipeRecord.created_at.desc()).all()
    return [to_recipe_read(record) for record in records]


@router.get("/{recipe_id}", response_model=RecipeRead)
def get_recipe(recipe_id: str, db: Session = Depends(get_db)) -> RecipeRead:
    return to_recipe_read(get_recipe_or_404(db, recipe_id))


@router.put("/{recipe_id}", response_model=RecipeRead)
def replace_recipe(recipe_id: str, payload: RecipeCreate, db: Session = Depends(get_db)) -> RecipeRead:
    record = get_recipe_or_404(db, recipe_id)
    apply_recipe_document(record, apply_specifications(payload))

    db.commit()
    db.refresh(record)
    return to_recipe_read(record)


@router.delete("/{recipe_id}", status_code=204)
def delete_recipe(recipe_id: str, db: Session = Depends(get_db)) -> Response:
    record = get_recipe_or_404(db, recipe_id)
    db.delete(record)
    db.commit()
    return Response(status_code=204)


@router.post("/calculate", response_model=RecipeStatsRead)
def calculate_unsaved_recipe(payload: RecipeCalculateRequest) -> RecipeStatsRead:
    return _stats_read(calculate_recipe_stats(payload.recipe, payload.alpha_overrides))


@router.post("/{recipe_id}/stats", response_model=RecipeStatsRead)
def recipe_stats(
    recipe_id: str,
    payload: RecipeStatsRequest | None = None,
    db: Session = Depends(get_db),
) -> RecipeStatsRead:
    recipe = parse_recipe_document(get_recipe_or_404(db, recipe_id))
    alpha_overrides = payload.alpha_overrides if payload else {}
    return _stats_read(calculate_recipe_stats(recipe, alpha_overrides))
