from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from brewmaster.api.recipes import get_recipe_or_404
from brewmaster.core.database import get_db
from brewmaster.models.brew_log import BrewLog
from brewmaster.models.tasting_note import TastingNote
from brewmaster.schemas.tasting import TastingNoteCreate, TastingNoteRead

router = APIRouter(prefix="/tasting-notes", tags=["tasting-notes"])


@router.post("", response_model=TastingNoteRead, status_code=201)
def create_tasting_note(payload: TastingNoteCreate, db: Session = Depends(get_db)) -> TastingNote:
    get_recipe_or_404(db, payload.recipe_id)

    if payload.brew_log_id is not None:
        log = db.get(BrewLog, payload.brew_log_id)
        if not log or log.recipe_id != payload.recipe_id:
            raise HTTPException(status_code=404, detail="Brew log not found for this recipe")

    note = TastingNote(**payload.model_dump())
    db.add(note)
    db.commit()
    db.refresh(note)
    return note


@router.get("", response_model=list[TastingNoteRead])
def list_tasting_notes(
    recipe_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[TastingNote]:
    query = db.query(TastingNote)
    if recipe_id:
        query = query.filter(TastingNote.recipe_id == recipe_id)
    return query.order_by(TastingNote.tasted_on.desc(), TastingNote.id.desc()).all()


@router.delete("/{note_id}", status_code=204)
def delete_tasting_note(note_id: int, db: Session = Depends(get_db)) -> Response:
    note = db.get(TastingNote, note_id)
    if not note:
        raise HTTPException(status_code=404, detail="Tasting note not found")
    db.delete(note)
    db.commit()
    return Response(status_code=204)
