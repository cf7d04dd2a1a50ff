from datetime import datetime

from pydantic import ValidationError

from brewmaster.models.library_ingredient import LibraryIngredientRecord
from brewmaster.models.recipe import RecipeRecord
from brewmaster.schemas.library import LibraryIngredient, LibraryIngredientRead
from brewmaster.schemas.recipe import Recipe, RecipeRead


def apply_recipe_document(record: RecipeRecord, recipe: Recipe) -> None:
    """Store ``recipe`` on ``record``; the stored document never carries its own id."""
    record.name = recipe.name
    record.recipe_type = recipe.type
    record.document_json = recipe.model_copy(update={"id": None}).model_dump_json(by_alias=True)
    record.updated_at = datetime.utcnow()


def parse_recipe_document(record: RecipeRecord) -> Recipe:
    raw_payload = record.document_json
    try:
        recipe = Recipe.model_validate_json(raw_payload) if raw_payload else Recipe(name=record.name)
    except ValidationError:
        recipe = Recipe(name=record.name, type=record.recipe_type)
    return recipe.model_copy(update={"id": record.id})


def to_recipe_read(record: RecipeRecord) -> RecipeRead:
    recipe = parse_recipe_document(record)
    return RecipeRead(
        **recipe.model_dump(exclude={"id"}),
        id=record.id,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


def apply_library_ingredient(record: LibraryIngredientRecord, ingredient: LibraryIngredient) -> None:
    record.name = ingredient.name
    record.ingredient_type = ingredient.type
    record.color = ingredient.color
    record.yield_pct = ingredient.yield_
    record.alpha = ingredient.alpha
    record.attenuation = ingredient.attenuation
    record.form = ingredient.form
    record.category = ingredient.category
    record.notes = ingredient.notes


def to_library_ingredient(record: LibraryIngredientRecord) -> LibraryIngredient:
    return LibraryIngredient(
        id=record.id,
        name=record.name,
        type=record.ingredient_type,
        color=record.color,
        yield_=record.yield_pct,
        alpha=record.alpha,
        attenuation=record.attenuation,
        form=record.form,
        category=record.category,
        notes=record.notes,
    )


def to_library_ingredient_read(record: LibraryIngredientRecord) -> LibraryIngredientRead:
    ingredient = to_library_ingredient(record)
    return LibraryIngredientRead(
        **ingredient.model_dump(exclude={"id"}),
        id=record.id,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )
