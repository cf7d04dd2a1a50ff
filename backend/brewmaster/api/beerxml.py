import re

from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from brewmaster.api.recipes import get_recipe_or_404
from brewmaster.core.database import get_db
from brewmaster.models.library_ingredient import LibraryIngredientRecord
from brewmaster.schemas.beerxml import BeerXmlDocument, BeerXmlImportResult, BeerXmlImportSummaryRead
from brewmaster.services.beerxml_export import export_library, export_recipe
from brewmaster.services.beerxml_import import persist_import
from brewmaster.services.beerxml_parser import parse_beerxml
from brewmaster.services.recipe_documents import parse_recipe_document, to_library_ingredient

router = APIRouter(prefix="/beerxml", tags=["beerxml"])

XML_MEDIA_TYPE = "application/xml"


def _filename(name: str) -> str:
    stem = re.sub(r"[^A-Za-z0-9]+", "_", name).strip("_").lower()
    return f"{stem or 'recipe'}.xml"


def _xml_response(content: str, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XML_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/parse", response_model=BeerXmlImportResult)
def parse_document(payload: BeerXmlDocument) -> BeerXmlImportResult:
    return parse_beerxml(payload.xml)


@router.post("/import", response_model=BeerXmlImportSummaryRead, status_code=201)
def import_document(payload: BeerXmlDocument, db: Session = Depends(get_db)) -> BeerXmlImportSummaryRead:
    result = parse_beerxml(payload.xml)
    if result.is_empty:
        raise HTTPException(status_code=422, detail="No importable BeerXML content found.")
    return persist_import(db, result)


@router.get("/export/recipes/{recipe_id}")
def export_recipe_document(recipe_id: str, db: Session = Depends(get_db)) -> Response:
    recipe = parse_recipe_document(get_recipe_or_404(db, recipe_id))
    return _xml_response(export_recipe(recipe), _filename(recipe.name))


@router.get("/export/library")
def export_library_document(db: Session = Depends(get_db)) -> Response:
    records = db.query(LibraryIngredientRecord).order_by(LibraryIngredientRecord.name).all()
    return _xml_response(export_library(to_library_ingredient(record) for record in records), "brew_library.xml")
