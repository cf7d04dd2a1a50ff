"""BeerXML 1.0 writer, the inverse of ``beerxml_parser`` for the fields both support."""

from __future__ import annotations

from collections.abc import Iterable
from xml.sax.saxutils import escape

from brewmaster.core.config import settings
from brewmaster.schemas.library import LibraryIngredient
from brewmaster.schemas.recipe import Culture, Fermentable, Hop, Misc, Recipe, Water
from brewmaster.services.recipe_calculator import DEFAULT_ATTENUATION_PCT
from brewmaster.services.units import (
    DAYS,
    MINUTES_PER_DAY,
    normalize_unit,
    potential_to_yield,
    to_grams,
    to_kilograms,
    to_liters,
)

# Pre-boil volume is not tracked; this is only a placeholder estimate.
BOIL_SIZE_ALLOWANCE_LITERS = 5

_RECIPE_TYPE_LABELS = {
    "all_grain": "All Grain",
    "extract": "Extract",
    "partial_mash": "Partial Mash",
}

_HOP_USE_LABELS = {
    "boil": "Boil",
    "dry_hop": "Dry Hop",
    "first_wort": "First Wort",
    "mash": "Mash",
}

_QUOTE_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def escape_xml(value: object) -> str:
    """Escape the five reserved XML characters."""
    return escape("" if value is None else str(value), _QUOTE_ENTITIES)


def _number(value: float | None) -> str:
    if value is None:
        return "0"
    value = float(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def _element(indent: int, tag: str, text: str) -> str:
    return f"{' ' * indent}<{tag}>{text}</{tag}>"


def _fermentable_lines(fermentable: Fermentable, indent: int) -> list[str]:
    potential = fermentable.yield_.potential.value if fermentable.yield_ else None
    yield_pct = potential_to_yield(potential) if potential else 75
    color = fermentable.color.value if fermentable.color else None

    lines = [
        f"{' ' * indent}<FERMENTABLE>",
        _element(indent + 2, "NAME", escape_xml(fermentable.name)),
        _element(indent + 2, "VERSION", "1"),
        _element(indent + 2, "AMOUNT", _number(to_kilograms(fermentable.amount.value, fermentable.amount.unit))),
        _element(indent + 2, "TYPE", escape_xml(fermentable.type.title() if fermentable.type else "Grain")),
        _element(indent + 2, "YIELD", _number(yield_pct)),
    ]
    if potential:
        lines.append(_element(indent + 2, "POTENTIAL", _number(potential)))
    lines.append(_element(indent + 2, "COLOR", _number(color or 0)))
    lines.append(f"{' ' * indent}</FERMENTABLE>")
    return lines


def _hop_minutes(hop: Hop) -> float:
    if hop.time is None:
        return 0.0
    if normalize_unit(hop.time.unit) == DAYS:
        return hop.time.value * MINUTES_PER_DAY
    return hop.time.value


def _hop_lines(hop: Hop, indent: int) -> list[str]:
    amount_kg = to_grams(hop.amount.value, hop.amount.unit) / 1000 if hop.amount else 0.0
    alpha = hop.alpha_acid.value if hop.alpha_acid else None

    return [
        f"{' ' * indent}<HOP>",
        _element(indent + 2, "NAME", escape_xml(hop.name)),
        _element(indent + 2, "VERSION", "1"),
        _element(indent + 2, "ALPHA", _number(alpha or 0)),
        _element(indent + 2, "AMOUNT", _number(amount_kg)),
        _element(indent + 2, "USE", _HOP_USE_LABELS.get(hop.use, "Aroma")),
        _element(indent + 2, "TIME", _number(_hop_minutes(hop))),
        f"{' ' * indent}</HOP>",
    ]


def _culture_lines(culture: Culture, indent: int) -> list[str]:
    return [
        f"{' ' * indent}<YEAST>",
        _element(indent + 2, "NAME", escape_xml(culture.name)),
        _element(indent + 2, "VERSION", "1"),
        _element(indent + 2, "TYPE", culture.type.title()),
        _element(indent + 2, "FORM", culture.form.title()),
        _element(indent + 2, "ATTENUATION", _number(culture.attenuation or DEFAULT_ATTENUATION_PCT)),
        f"{' ' * indent}</YEAST>",
    ]


def _misc_lines(misc: Misc, indent: int) -> list[str]:
    amount = misc.amount
    is_weight = amount is not None and normalize_unit(amount.unit) in ("kilograms", "pounds", "grams", "ounces")
    if amount is None:
        amount_value = 0.0
    elif is_weight:
        amount_value = to_kilograms(amount.value, amount.unit)
    else:
        amount_value = to_liters(amount.value, amount.unit)

    return [
        f"{' ' * indent}<MISC>",
        _element(indent + 2, "NAME", escape_xml(misc.name)),
        _element(indent + 2, "VERSION", "1"),
        _element(indent + 2, "TYPE", escape_xml(misc.type.title())),
        _element(indent + 2, "USE", escape_xml(misc.use.title())),
        _element(indent + 2, "TIME", _number(misc.time.value if misc.time else 0)),
        _element(indent + 2, "AMOUNT", _number(amount_value)),
        _element(indent + 2, "AMOUNT_IS_WEIGHT", "TRUE" if is_weight else "FALSE"),
        f"{' ' * indent}</MISC>",
    ]


def _water_lines(water: Water, indent: int) -> list[str]:
    amount_l = to_liters(water.amount.value, water.amount.unit) if water.amount else 0.0
    return [
        f"{' ' * indent}<WATER>",
        _element(indent + 2, "NAME", escape_xml(water.name)),
        _element(indent + 2, "VERSION", "1"),
        _element(indent + 2, "AMOUNT", _number(amount_l)),
        f"{' ' * indent}</WATER>",
    ]


def _section(tag: str, indent: int, blocks: Iterable[list[str]]) -> list[str]:
    lines = [f"{' ' * indent}<{tag}>"]
    for block in blocks:
        lines.extend(block)
    lines.append(f"{' ' * indent}</{tag}>")
    return lines


def _recipe_lines(recipe: Recipe) -> list[str]:
    liters = to_liters(recipe.batch_size.value, recipe.batch_size.unit)
    ingredients = recipe.ingredients

    lines = [
        "  <RECIPE>",
        _element(4, "NAME", escape_xml(recipe.name)),
        _element(4, "VERSION", "1"),
        _element(4, "TYPE", _RECIPE_TYPE_LABELS.get(recipe.type, "All Grain")),
        _element(4, "BREWER", escape_xml(recipe.author or settings.default_brewer)),
        _element(4, "BATCH_SIZE", _number(liters)),
        _element(4, "BOIL_SIZE", _number(liters + BOIL_SIZE_ALLOWANCE_LITERS)),
        _element(4, "BOIL_TIME", _number(recipe.boil_time.value)),
        _element(4, "EFFICIENCY", _number(recipe.efficiency.brewhouse)),
    ]
    if recipe.notes:
        lines.append(_element(4, "NOTES", escape_xml(recipe.notes)))

    if recipe.style:
        lines.extend(
            [
                "    <STYLE>",
                _element(6, "NAME", escape_xml(recipe.style.name)),
                _element(6, "CATEGORY", escape_xml(recipe.style.category)),
                _element(6, "VERSION", "1"),
                "    </STYLE>",
            ]
        )

    lines.extend(_section("FERMENTABLES", 4, (_fermentable_lines(item, 6) for item in ingredients.fermentables)))
    lines.extend(_section("HOPS", 4, (_hop_lines(item, 6) for item in ingredients.hops)))
    lines.extend(_section("YEASTS", 4, (_culture_lines(item, 6) for item in ingredients.cultures)))
    if ingredients.miscellaneous:
        lines.extend(_section("MISCS", 4, (_misc_lines(item, 6) for item in ingredients.miscellaneous)))
    if ingredients.water:
        lines.extend(_section("WATERS", 4, (_water_lines(item, 6) for item in ingredients.water)))

    lines.append("  </RECIPE>")
    return lines


def export_recipes(recipes: Iterable[Recipe]) -> str:
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<RECIPES>"]
    for recipe in recipes:
        lines.extend(_recipe_lines(recipe))
    lines.append("</RECIPES>")
    return "\n".join(lines)


def export_recipe(recipe: Recipe) -> str:
    return export_recipes([recipe])


def _library_fermentable_lines(item: LibraryIngredient) -> list[str]:
    return [
        "    <FERMENTABLE>",
        _element(6, "NAME", escape_xml(item.name)),
        _element(6, "VERSION", "1"),
        _element(6, "TYPE", "Grain"),
        _element(6, "YIELD", _number(item.yield_ or 75)),
        _element(6, "COLOR", _number(item.color or 0)),
        "    </FERMENTABLE>",
    ]


def _library_hop_lines(item: LibraryIngredient) -> list[str]:
    return [
        "    <HOP>",
        _element(6, "NAME", escape_xml(item.name)),
        _element(6, "VERSION", "1"),
        _element(6, "ALPHA", _number(item.alpha or 0)),
        _element(6, "USE", "Boil"),
        "    </HOP>",
    ]


def _library_culture_lines(item: LibraryIngredient) -> list[str]:
    return [
        "    <YEAST>",
        _element(6, "NAME", escape_xml(item.name)),
        _element(6, "VERSION", "1"),
        _element(6, "TYPE", "Ale"),
        _element(6, "FORM", (item.form or "dry").title()),
        _element(6, "ATTENUATION", _number(item.attenuation or DEFAULT_ATTENUATION_PCT)),
        "    </YEAST>",
    ]


_LIBRARY_SECTIONS = (
    ("fermentable", "FERMENTABLES", _library_fermentable_lines),
    ("hop", "HOPS", _library_hop_lines),
    ("culture", "YEASTS", _library_culture_lines),
)


def export_library(ingredients: Iterable[LibraryIngredient]) -> str:
    """Render library entries under a ``<BREW_LIBRARY>`` root.

    Only fermentables, hops and cultures have a BeerXML shape; other library
    types are skipped, as are empty sections.
    """
    items = list(ingredients)
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<BREW_LIBRARY>"]

    for ingredient_type, tag, render in _LIBRARY_SECTIONS:
        matching = [item for item in items if item.type == ingredient_type]
        if matching:
            lines.extend(_section(tag, 2, (render(item) for item in matching)))

    lines.append("</BREW_LIBRARY>")
    return "\n".join(lines)
