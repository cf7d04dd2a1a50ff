from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from sqlalchemy.orm import Session

from brewmaster.api.recipes import get_recipe_or_404
from brewmaster.core.database import get_db
from brewmaster.models.brew_log import BrewLog
from brewmaster.schemas.brew_log import BrewLogCreate, BrewLogRead, BrewLogStatusUpdate, BrewLogUpdate
from brewmaster.services.brew_log import (
    InvalidStatusTransition,
    advance_status,
    apply_bottling,
    apply_measurements,
    build_brew_log_read,
)
from brewmaster.services.recipe_documents import parse_recipe_document

router = APIRouter(prefix="/brew-logs", tags=["brew-logs"])


def _get_log_or_404(db: Session, log_id: int) -> BrewLog:
    log = db.get(BrewLog, log_id)
    if not log:
        raise HTTPException(status_code=404, detail="Brew log not found")
    return log


def _to_read(log: BrewLog) -> BrewLogRead:
    return build_brew_log_read(log, parse_recipe_document(log.recipe))


@router.post("", response_model=BrewLogRead, status_code=201)
def start_brew_log(payload: BrewLogCreate, db: Session = Depends(get_db)) -> BrewLogRead:
    recipe_record = get_recipe_or_404(db, payload.recipe_id)
    started_on = payload.started_on or date.today()

    log = BrewLog(
        recipe_id=recipe_record.id,
        status="brewing",
        started_on=started_on,
        brew_date=payload.brew_date or started_on,
        notes=payload.notes,
    )
    apply_measurements(log, payload.measurements)
    apply_bottling(log, payload.bottling)

    db.add(log)
    db.commit()
    db.refresh(log)
    return _to_read(log)


@router.get("", response_model=list[BrewLogRead])
def list_brew_logs(
    recipe_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[BrewLogRead]:
    query = db.query(BrewLog)
    if recipe_id:
        query = query.filter(BrewLog.recipe_id == recipe_id)
    return [_to_read(log) for log in query.order_by(BrewLog.started_on.desc(), BrewLog.id.desc()).all()]


@router.get("/{log_id}", response_model=BrewLogRead)
def get_brew_log(log_id: int, db: Session = Depends(get_db)) -> BrewLogRead:
    return _to_read(_get_log_or_404(db, log_id))


@router.patch("/{log_id}", response_model=BrewLogRead)
def update_brew_log(log_id: int, payload: BrewLogUpdate, db: Session = Depends(get_db)) -> BrewLogRead:
    log = _get_log_or_404(db, log_id)

    if payload.brew_date is not None:
        log.brew_date = payload.brew_date
    if payload.notes is not None:
        log.notes = payload.notes
    if payload.measurements is not None:
        apply_measurements(log, payload.measurements)
    if payload.bottling is not None:
        apply_bottling(log, payload.bottling)

    db.commit()
    db.refresh(log)
    return _to_read(log)


@router.post("/{log_id}/status", response_model=BrewLogRead)
def update_brew_log_status(log_id: int, payload: BrewLogStatusUpdate, db: Session = Depends(get_db)) -> BrewLogRead:
    log = _get_log_or_404(db, log_id)

    try:
        advance_status(log, payload.status, payload.effective_on or date.today())
    except InvalidStatusTransition as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    db.commit()
    db.refresh(log)
    return _to_read(log)


@router.delete("/{log_id}", status_code=204)
def delete_brew_log(log_id: int, db: Session = Depends(get_db)) -> Response:
    log = _get_log_or_404(db, log_id)
    db.delete(log)
    db.commit()
    return Response(status_code=204)
