from __future__ import annotations

from dataclasses import dataclass

from brewmaster.schemas.recipe import (
    Culture,
    Efficiency,
    Fermentable,
    FermentableYield,
    Hop,
    NamedValue,
    Quantity,
    Recipe,
    RecipeIngredients,
    Style,
)
from brewmaster.services.units import DAYS, GRAMS, KILOGRAMS, LITERS, MINUTES


@dataclass(frozen=True)
class GrainTemplate:
    name: str
    kilograms: float
    potential: float
    color: float


@dataclass(frozen=True)
class HopTemplate:
    name: str
    grams: float
    alpha: float
    use: str
    time: float


@dataclass(frozen=True)
class RecipeTemplate:
    key: str
    keywords: tuple[str, ...]
    name: str
    style: str
    category: str
    grains: tuple[GrainTemplate, ...]
    hops: tuple[HopTemplate, ...]
    yeast: str
    attenuation: float
    notes: str


_TEMPLATES: tuple[RecipeTemplate, ...] = (
    RecipeTemplate(
        key="ipa",
        keywords=("ipa", "india pale", "hoppy", "west coast", "neipa"),
        name="American IPA",
        style="American IPA",
        category="21A",
        grains=(
            GrainTemplate("Pale Ale Malt", 5.5, 1.037, 3),
            GrainTemplate("Crystal 40", 0.3, 1.034, 40),
        ),
        hops=(
            HopTemplate("Columbus", 25, 14.5, "boil", 60),
            HopTemplate("Centennial", 30, 10, "boil", 10),
            HopTemplate("Citra", 50, 12, "whirlpool", 15),
            HopTemplate("Citra", 60, 12, "dry_hop", 4),
        ),
        yeast="US-05",
        attenuation=78,
        notes="Firm bitterness with a citrus-forward whirlpool and dry hop.",
    ),
    RecipeTemplate(
        key="stout",
        keywords=("stout", "porter", "roast", "dark", "coffee"),
        name="Dry Irish Stout",
        style="Irish Stout",
        category="15B",
        grains=(
            GrainTemplate("Pale Ale Malt", 3.4, 1.037, 3),
            GrainTemplate("Flaked Barley", 0.45, 1.032, 2),
            GrainTemplate("Roasted Barley", 0.35, 1.025, 300),
        ),
        hops=(HopTemplate("East Kent Goldings", 45, 5.5, "boil", 60),),
        yeast="S-04",
        attenuation=73,
        notes="Roasty session stout with a dry finish.",
    ),
    RecipeTemplate(
        key="pilsner",
        keywords=("pils", "lager", "helles", "crisp"),
        name="German Pils",
        style="German Pils",
        category="5D",
        grains=(GrainTemplate("Pilsner Malt", 4.6, 1.037, 1.6),),
        hops=(
            HopTemplate("Magnum", 15, 13, "boil", 60),
            HopTemplate("Hallertau Mittelfrueh", 30, 4, "boil", 15),
            HopTemplate("Hallertau Mittelfrueh", 30, 4, "whirlpool", 0),
        ),
        yeast="W-34/70",
        attenuation=80,
        notes="Pale and crisp; ferment cold and lager for four weeks.",
    ),
    RecipeTemplate(
        key="wheat",
        keywords=("wheat", "weizen", "hefe", "witbier"),
        name="Hefeweizen",
        style="Weissbier",
        category="10A",
        grains=(
            GrainTemplate("Wheat Malt", 2.7, 1.039, 2),
            GrainTemplate("Pilsner Malt", 2.0, 1.037, 1.6),
        ),
        hops=(HopTemplate("Hallertau Mittelfrueh", 20, 4, "boil", 60),),
        yeast="WB-06",
        attenuation=76,
        notes="Banana and clove from the yeast; keep bitterness low.",
    ),
)

_DEFAULT_TEMPLATE = RecipeTemplate(
    key="pale_ale",
    keywords=(),
    name="American Pale Ale",
    style="American Pale Ale",
    category="18B",
    grains=(
        GrainTemplate("Pale Ale Malt", 4.5, 1.037, 3),
        GrainTemplate("Crystal 60", 0.35, 1.034, 60),
    ),
    hops=(
        HopTemplate("Cascade", 20, 6, "boil", 60),
        HopTemplate("Cascade", 25, 6, "boil", 10),
    ),
    yeast="US-05",
    attenuation=77,
    notes="Balanced pale ale with late Cascade additions.",
)


def list_templates() -> list[RecipeTemplate]:
    return [*_TEMPLATES, _DEFAULT_TEMPLATE]


def match_template(prompt: str) -> RecipeTemplate:
    """First template with a keyword in ``prompt``; pale ale otherwise."""
    text = prompt.lower()
    for template in _TEMPLATES:
        if any(keyword in text for keyword in template.keywords):
            return template
    return _DEFAULT_TEMPLATE


def build_recipe(template: RecipeTemplate, name: str | None = None) -> Recipe:
    hops = []
    for hop in template.hops:
        time_unit = DAYS if hop.use == "dry_hop" else MINUTES
        hops.append(
            Hop(
                name=hop.name,
                amount=Quantity(unit=GRAMS, value=hop.grams),
                alpha_acid=NamedValue(value=hop.alpha),
                use=hop.use,
                time=Quantity(unit=time_unit, value=hop.time),
            )
        )

    return Recipe(
        name=name or template.name,
        type="all_grain",
        notes=template.notes,
        batch_size=Quantity(unit=LITERS, value=20),
        style=Style(name=template.style, category=template.category),
        ingredients=RecipeIngredients(
            fermentables=[
                Fermentable(
                    name=grain.name,
                    type="grain",
                    amount=Quantity(unit=KILOGRAMS, value=grain.kilograms),
                    yield_=FermentableYield(potential=NamedValue(value=grain.potential)),
                    color=NamedValue(value=grain.color),
                )
                for grain in template.grains
            ],
            hops=hops,
            cultures=[Culture(name=template.yeast, type="ale", form="dry", attenuation=template.attenuation)],
        ),
        efficiency=Efficiency(brewhouse=75),
        boil_time=Quantity(unit=MINUTES, value=60),
    )
