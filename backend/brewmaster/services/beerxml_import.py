import logging

from sqlalchemy.orm import Session

from brewmaster.models.library_ingredient import LibraryIngredientRecord
from brewmaster.models.recipe import RecipeRecord
from brewmaster.schemas.beerxml import BeerXmlImportResult, BeerXmlImportSummaryRead
from brewmaster.services.library_linking import find_library_match, link_recipe_to_library
from brewmaster.services.observability import observability_tracker
from brewmaster.services.recipe_calculator import apply_specifications
from brewmaster.services.recipe_documents import apply_library_ingredient, apply_recipe_document, to_library_ingredient

logger = logging.getLogger(__name__)


def persist_import(db: Session, result: BeerXmlImportResult) -> BeerXmlImportSummaryRead:
    """Store parsed recipes and standalone library entries in one transaction.

    Recipe ingredients are linked to the library (reusing entries by name and
    type) and their specifications are recomputed before saving. Standalone
    candidates already in the library are counted as reused, not duplicated.
    """
    library = [to_library_ingredient(record) for record in db.query(LibraryIngredientRecord).all()]
    summary = BeerXmlImportSummaryRead()
    created = []

    for candidate in result.library_candidates:
        if not candidate.name:
            continue
        if find_library_match(library, candidate.name, candidate.type) is not None:
            summary.reused_library_count += 1
            continue
        record = LibraryIngredientRecord()
        apply_library_ingredient(record, candidate)
        db.add(record)
        db.flush()
        entry = candidate.model_copy(update={"id": record.id})
        library.append(entry)
        created.append(entry)

    for recipe in result.recipes:
        link = link_recipe_to_library(recipe, library)
        summary.reused_library_count += link.reused_count
        for entry in link.created:
            record = LibraryIngredientRecord(id=entry.id)
            apply_library_ingredient(record, entry)
            db.add(record)
            library.append(entry)
            created.append(entry)

        recipe_record = RecipeRecord()
        apply_recipe_document(recipe_record, apply_specifications(link.recipe))
        db.add(recipe_record)
        db.flush()
        summary.recipe_ids.append(recipe_record.id)
        summary.recipe_names.append(recipe_record.name)

    db.commit()

    summary.created_library_ids = [entry.id for entry in created]
    observability_tracker.increment("beerxml_recipes_imported", len(summary.recipe_ids))
    logger.info(
        "Imported %d recipe(s); %d new library entr(ies), %d reused",
        len(summary.recipe_ids),
        len(created),
        summary.reused_library_count,
    )
    return summary
