"""BeerXML 1.0 reader.

Turns a BeerXML document into a ``BeerXmlImportResult``: full recipes for
every ``<RECIPE>`` element, plus library candidates for ingredient and style
elements that live outside any recipe. Parsing is lenient; a document that
cannot be read yields an empty result instead of an exception.
"""

from __future__ import annotations

import logging
import math
from uuid import uuid4

from lxml import etree

from brewmaster.schemas.beerxml import BeerXmlImportResult
from brewmaster.schemas.library import LibraryIngredient
from brewmaster.schemas.recipe import (
    Culture,
    Efficiency,
    Fermentable,
    FermentableYield,
    Hop,
    Misc,
    NamedValue,
    Quantity,
    Recipe,
    RecipeIngredients,
    Specifications,
    Style,
    Water,
)
from brewmaster.services.recipe_calculator import DEFAULT_ATTENUATION_PCT, DEFAULT_POTENTIAL
from brewmaster.services.units import (
    DAYS,
    GRAMS,
    KILOGRAMS,
    LITERS,
    MINUTES,
    MINUTES_PER_DAY,
    yield_to_potential,
)

logger = logging.getLogger(__name__)

def text_or_default(element: etree._Element | None, tag: str, default: str = "") -> str:
    """Stripped text of the direct child ``tag``, or ``default`` when absent or blank."""
    if element is None:
        return default
    child = element.find(tag)
    if child is None or child.text is None:
        return default
    text = child.text.strip()
    return text or default


def number_or_default(element: etree._Element | None, tag: str, default: float = 0.0) -> float:
    raw = text_or_default(element, tag)
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    return value if math.isfinite(value) else default


def _is_true(element: etree._Element, tag: str) -> bool:
    return text_or_default(element, tag).upper() == "TRUE"


def _inside_recipe(element: etree._Element) -> bool:
    parent = element.getparent()
    while parent is not None:
        if parent.tag == "RECIPE":
            return True
        parent = parent.getparent()
    return False


def _load_root(document: str | bytes) -> etree._Element | None:
    encoding = None
    if isinstance(document, str):
        # Text is already decoded, so any declared encoding no longer applies.
        document = document.encode("utf-8")
        encoding = "utf-8"
    if not document.strip():
        return None

    parser = etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,
        no_network=True,
        remove_comments=True,
    )
    try:
        return etree.fromstring(document, parser=parser)
    except etree.XMLSyntaxError as exc:
        logger.warning("Ignoring malformed BeerXML document: %s", exc)
        return None


def _recipe_fermentable(element: etree._Element) -> Fermentable:
    potential = number_or_default(element, "POTENTIAL")
    if not potential:
        yield_pct = number_or_default(element, "YIELD")
        potential = yield_to_potential(yield_pct) if yield_pct else DEFAULT_POTENTIAL

    return Fermentable(
        name=text_or_default(element, "NAME"),
        type=text_or_default(element, "TYPE", "grain").lower(),
        amount=Quantity(unit=KILOGRAMS, value=number_or_default(element, "AMOUNT")),
        yield_=FermentableYield(potential=NamedValue(value=potential)),
        color=NamedValue(value=number_or_default(element, "COLOR")),
    )


def _recipe_hop(element: etree._Element) -> Hop:
    hop = Hop(
        name=text_or_default(element, "NAME"),
        amount=Quantity(unit=GRAMS, value=round(number_or_default(element, "AMOUNT") * 1000, 6)),
        alpha_acid=NamedValue(value=number_or_default(element, "ALPHA")),
        use=text_or_default(element, "USE", "boil"),
    )

    minutes = number_or_default(element, "TIME")
    if hop.use == "dry_hop":
        hop.time = Quantity(unit=DAYS, value=round(minutes / MINUTES_PER_DAY, 4))
    else:
        hop.time = Quantity(unit=MINUTES, value=minutes)
    return hop


def _recipe_culture(element: etree._Element) -> Culture:
    return Culture(
        name=text_or_default(element, "NAME"),
        type=text_or_default(element, "TYPE", "ale"),
        form=text_or_default(element, "FORM", "dry"),
        attenuation=number_or_default(element, "ATTENUATION") or DEFAULT_ATTENUATION_PCT,
    )


def _recipe_misc(element: etree._Element) -> Misc:
    amount_unit = KILOGRAMS if _is_true(element, "AMOUNT_IS_WEIGHT") else LITERS
    return Misc(
        name=text_or_default(element, "NAME"),
        type=text_or_default(element, "TYPE", "other").lower(),
        use=text_or_default(element, "USE", "boil").lower(),
        amount=Quantity(unit=amount_unit, value=number_or_default(element, "AMOUNT")),
        time=Quantity(unit=MINUTES, value=number_or_default(element, "TIME")),
    )


def _recipe_water(element: etree._Element) -> Water:
    return Water(
        name=text_or_default(element, "NAME"),
        amount=Quantity(unit=LITERS, value=number_or_default(element, "AMOUNT")),
    )


def _parse_recipe(element: etree._Element) -> Recipe:
    style_element = element.find("STYLE")
    style = None
    if style_element is not None:
        style = Style(
            name=text_or_default(style_element, "NAME"),
            category=text_or_default(style_element, "CATEGORY"),
        )

    ingredients = RecipeIngredients(
        fermentables=[_recipe_fermentable(item) for item in element.iter("FERMENTABLE")],
        hops=[_recipe_hop(item) for item in element.iter("HOP")],
        cultures=[_recipe_culture(item) for item in element.iter("YEAST")],
        miscellaneous=[_recipe_misc(item) for item in element.iter("MISC")],
        water=[_recipe_water(item) for item in element.iter("WATER")],
    )

    # BOIL_SIZE is deliberately not read; it is an estimate on export.
    return Recipe(
        id=uuid4().hex,
        name=text_or_default(element, "NAME"),
        type=text_or_default(element, "TYPE", "all_grain"),
        author=text_or_default(element, "BREWER"),
        notes=text_or_default(element, "NOTES"),
        batch_size=Quantity(unit=LITERS, value=number_or_default(element, "BATCH_SIZE")),
        style=style,
        ingredients=ingredients,
        efficiency=Efficiency(brewhouse=number_or_default(element, "EFFICIENCY")),
        boil_time=Quantity(unit=MINUTES, value=number_or_default(element, "BOIL_TIME")),
        specifications=Specifications(
            og=NamedValue(value=number_or_default(element, "EST_OG")),
            fg=NamedValue(value=number_or_default(element, "EST_FG")),
            abv=NamedValue(value=number_or_default(element, "EST_ABV")),
            ibu=NamedValue(value=number_or_default(element, "IBU")),
            color=NamedValue(value=number_or_default(element, "EST_COLOR")),
        ),
    )


def _library_fermentable(element: etree._Element) -> LibraryIngredient:
    return LibraryIngredient(
        name=text_or_default(element, "NAME"),
        type="fermentable",
        yield_=number_or_default(element, "YIELD"),
        color=number_or_default(element, "COLOR"),
    )


def _library_hop(element: etree._Element) -> LibraryIngredient:
    return LibraryIngredient(
        name=text_or_default(element, "NAME"),
        type="hop",
        alpha=number_or_default(element, "ALPHA"),
    )


def _library_culture(element: etree._Element) -> LibraryIngredient:
    return LibraryIngredient(
        name=text_or_default(element, "NAME"),
        type="culture",
        attenuation=number_or_default(element, "ATTENUATION"),
        form=text_or_default(element, "FORM").lower(),
    )


def _library_misc(element: etree._Element) -> LibraryIngredient:
    return LibraryIngredient(
        name=text_or_default(element, "NAME"),
        type="misc",
        notes=text_or_default(element, "NOTES"),
    )


def _library_water(element: etree._Element) -> LibraryIngredient:
    return LibraryIngredient(
        name=text_or_default(element, "NAME"),
        type="water",
        notes=text_or_default(element, "NOTES"),
    )


def _library_style(element: etree._Element) -> LibraryIngredient:
    return LibraryIngredient(
        name=text_or_default(element, "NAME"),
        type="style",
        category=text_or_default(element, "CATEGORY"),
    )


_LIBRARY_READERS = (
    ("FERMENTABLE", "fermentables", _library_fermentable),
    ("HOP", "hops", _library_hop),
    ("YEAST", "cultures", _library_culture),
    ("MISC", "miscs", _library_misc),
    ("WATER", "waters", _library_water),
    ("STYLE", "styles", _library_style),
)


def parse_beerxml(document: str | bytes) -> BeerXmlImportResult:
    result = BeerXmlImportResult()

    root = _load_root(document)
    if root is None:
        return result

    result.recipes = [_parse_recipe(element) for element in root.iter("RECIPE")]

    for tag, bucket, reader in _LIBRARY_READERS:
        candidates = [reader(element) for element in root.iter(tag) if not _inside_recipe(element)]
        setattr(result, bucket, candidates)

    logger.debug(
        "Parsed BeerXML document: %d recipe(s), %d library candidate(s)",
        len(result.recipes),
        len(result.library_candidates),
    )
    return result
