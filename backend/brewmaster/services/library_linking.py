from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from uuid import uuid4

from brewmaster.schemas.library import LibraryIngredient
from brewmaster.schemas.recipe import Recipe
from brewmaster.services.recipe_calculator import DEFAULT_ALPHA_PCT, DEFAULT_ATTENUATION_PCT, DEFAULT_COLOR_SRM
from brewmaster.services.units import potential_to_yield


@dataclass
class LinkResult:
    recipe: Recipe
    created: list[LibraryIngredient] = field(default_factory=list)
    reused_count: int = 0


def _new_id() -> str:
    return uuid4().hex


def find_library_match(library: list[LibraryIngredient], name: str, ingredient_type: str) -> LibraryIngredient | None:
    key = name.strip().lower()
    for item in library:
        if item.type == ingredient_type and item.name.strip().lower() == key:
            return item
    return None


def link_recipe_to_library(
    recipe: Recipe,
    library: list[LibraryIngredient],
    new_id: Callable[[], str] = _new_id,
) -> LinkResult:
    """Attach a ``libraryId`` to every fermentable, hop and culture of ``recipe``.

    Ingredients are matched to existing entries by type and case-insensitive
    name. Unmatched ingredients get a new entry seeded from the ingredient;
    those entries are returned in ``created`` and are also visible to later
    matches within the same call. ``library`` itself is not mutated.
    """
    pool = list(library)
    result = LinkResult(recipe=recipe)

    def resolve(name: str, ingredient_type: str, seed: dict[str, object]) -> str:
        existing = find_library_match(pool, name, ingredient_type)
        if existing is not None and existing.id:
            result.reused_count += 1
            return existing.id

        entry = LibraryIngredient(id=new_id(), name=name, type=ingredient_type, **seed)
        pool.append(entry)
        result.created.append(entry)
        return entry.id

    ingredients = recipe.ingredients
    fermentables = []
    for fermentable in ingredients.fermentables:
        potential = fermentable.yield_.potential.value if fermentable.yield_ else None
        seed = {
            "color": (fermentable.color.value if fermentable.color else None) or DEFAULT_COLOR_SRM,
            "yield_": round(potential_to_yield(potential)) if potential else 75,
        }
        library_id = resolve(fermentable.name, "fermentable", seed)
        fermentables.append(fermentable.model_copy(update={"library_id": library_id}))

    hops = []
    for hop in ingredients.hops:
        seed = {"alpha": (hop.alpha_acid.value if hop.alpha_acid else None) or DEFAULT_ALPHA_PCT}
        library_id = resolve(hop.name, "hop", seed)
        hops.append(hop.model_copy(update={"library_id": library_id}))

    cultures = []
    for culture in ingredients.cultures:
        seed = {
            "attenuation": culture.attenuation or DEFAULT_ATTENUATION_PCT,
            "form": culture.form or "dry",
        }
        library_id = resolve(culture.name, "culture", seed)
        cultures.append(culture.model_copy(update={"library_id": library_id}))

    linked_ingredients = ingredients.model_copy(
        update={"fermentables": fermentables, "hops": hops, "cultures": cultures}
    )
    result.recipe = recipe.model_copy(update={"ingredients": linked_ingredients})
    return result
