from itertools import count

from brewmaster.schemas.library import LibraryIngredient
from brewmaster.schemas.recipe import (
    Culture,
    Fermentable,
    FermentableYield,
    Hop,
    NamedValue,
    Quantity,
    Recipe,
    RecipeIngredients,
)
from brewmaster.services.library_linking import find_library_match, link_recipe_to_library


def _ids():
    counter = count(1)
    return lambda: f"new-{next(counter)}"


def _recipe() -> Recipe:
    return Recipe(
        name="Linked",
        ingredients=RecipeIngredients(
            fermentables=[
                Fermentable(
                    name="Pale Malt",
                    amount=Quantity(unit="kilograms", value=4),
                    yield_=FermentableYield(potential=NamedValue(value=1.037)),
                    color=NamedValue(value=3),
                ),
                Fermentable(name="pale malt", amount=Quantity(unit="kilograms", value=1)),
            ],
            hops=[Hop(name="Cascade", alpha_acid=NamedValue(value=6.5))],
            cultures=[Culture(name="US-05", attenuation=78)],
        ),
    )


def test_find_library_match_is_case_insensitive_and_typed() -> None:
    library = [
        LibraryIngredient(id="a", name="Cascade", type="hop"),
        LibraryIngredient(id="b", name="Cascade", type="fermentable"),
    ]

    assert find_library_match(library, " cascade ", "hop").id == "a"
    assert find_library_match(library, "Cascade", "culture") is None


def test_link_creates_entries_for_unknown_ingredients() -> None:
    result = link_recipe_to_library(_recipe(), [], new_id=_ids())

    assert [entry.name for entry in result.created] == ["Pale Malt", "Cascade", "US-05"]
    assert result.reused_count == 1

    pale, second_pale = result.recipe.ingredients.fermentables
    assert pale.library_id == "new-1"
    assert second_pale.library_id == "new-1"
    assert result.recipe.ingredients.hops[0].library_id == "new-2"
    assert result.recipe.ingredients.cultures[0].library_id == "new-3"


def test_created_entries_are_seeded_from_the_recipe() -> None:
    created = {entry.type: entry for entry in link_recipe_to_library(_recipe(), [], new_id=_ids()).created}

    assert created["fermentable"].color == 3
    assert created["fermentable"].yield_ == 80
    assert created["hop"].alpha == 6.5
    assert created["culture"].attenuation == 78
    assert created["culture"].form == "dry"


def test_link_reuses_existing_entries_without_mutating_inputs() -> None:
    recipe = _recipe()
    library = [LibraryIngredient(id="lib-hop", name="CASCADE", type="hop", alpha=7)]

    result = link_recipe_to_library(recipe, library, new_id=_ids())

    assert result.recipe.ingredients.hops[0].library_id == "lib-hop"
    assert len(library) == 1
    assert recipe.ingredients.hops[0].library_id is None
    assert all(entry.type != "hop" for entry in result.created)
