from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy import func
from sqlalchemy.orm import Session

from brewmaster.core.database import get_db
from brewmaster.models.library_ingredient import LibraryIngredientRecord
from brewmaster.schemas.library import LibraryIngredientCreate, LibraryIngredientRead
from brewmaster.services.recipe_documents import apply_library_ingredient, to_library_ingredient_read

router = APIRouter(prefix="/library", tags=["library"])


def _get_ingredient_or_404(db: Session, ingredient_id: str) -> LibraryIngredientRecord:
    record = db.get(LibraryIngredientRecord, ingredient_id)
    if not record:
        raise HTTPException(status_code=404, detail="Library ingredient not found")
    return record


def _ensure_unique(db: Session, name: str, ingredient_type: str, exclude_id: str | None = None) -> None:
    query = db.query(LibraryIngredientRecord).filter(
        func.lower(LibraryIngredientRecord.name) == name.strip().lower(),
        LibraryIngredientRecord.ingredient_type == ingredient_type,
    )
    if exclude_id is not None:
        query = query.filter(LibraryIngredientRecord.id != exclude_id)
    if query.first():
        raise HTTPException(status_code=409, detail=f"A {ingredient_type} named '{name}' already exists")


@router.post("", response_model=LibraryIngredientRead, status_code=201)
def create_ingredient(payload: LibraryIngredientCreate, db: Session = Depends(get_db)) -> LibraryIngredientRead:
    _ensure_unique(db, payload.name, payload.type)

    record = LibraryIngredientRecord()
    apply_library_ingredient(record, payload)
    db.add(record)
    db.commit()
    db.refresh(record)
    return to_library_ingredient_read(record)


@router.get("", response_model=list[LibraryIngredientRead])
def list_ingredients(
    ingredient_type: str | None = Query(default=None, alias="type"),
    search: str | None = Query(default=None, min_length=1, max_length=120),
    db: Session = Depends(get_db),
) -> list[LibraryIngredientRead]:
    query = db.query(LibraryIngredientRecord)
    if ingredient_type:
        query = query.filter(LibraryIngredientRecord.ingredient_type == ingredient_type.lower())
    if search:
        query = query.filter(LibraryIngredientRecord.name.ilike(f"%{search.strip()}%"))

    records = query.order_by(LibraryIngredientRecord.ingredient_type, LibraryIngredientRecord.name).all()
    return [to_library_ingredient_read(record) for record in records]


@router.get("/{ingredient_id}", response_model=LibraryIngredientRead)
def get_ingredient(ingredient_id: str, db: Session = Depends(get_db)) -> LibraryIngredientRead:
    return to_library_ingredient_read(_get_ingredient_or_404(db, ingredient_id))


@router.put("/{ingredient_id}", response_model=LibraryIngredientRead)
def update_ingredient(
    ingredient_id: str,
    payload: LibraryIngredientCreate,
    db: Session = Depends(get_db),
) -> LibraryIngredientRead:
    record = _get_ingredient_or_404(db, ingredient_id)
    _ensure_unique(db, payload.name, payload.type, exclude_id=record.id)

    apply_library_ingredient(record, payload)
    db.commit()
    db.refresh(record)
    return to_library_ingredient_read(record)


@router.delete("/{ingredient_id}", status_code=204)
def delete_ingredient(ingredient_id: str, db: Session = Depends(get_db)) -> Response:
    # Recipes keep their libraryId references; they simply stop resolving.
    record = _get_ingredient_or_404(db, ingredient_id)
    db.delete(record)
    db.commit()
    return Response(status_code=204)
