"""Deterministic brewing numbers for a recipe.

OG from fermentable potential and brewhouse efficiency, FG from average
culture attenuation, color with the Morey equation and bitterness with the
Tinseth method. Every function here is pure and tolerates missing optional
fields by falling back to the documented defaults.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from brewmaster.schemas.recipe import BITTERING_HOP_USES, NamedValue, Recipe, Specifications
from brewmaster.services.units import GAL_TO_L, to_grams, to_kilograms, to_liters, to_pounds

DEFAULT_POTENTIAL = 1.037
DEFAULT_COLOR_SRM = 2.0
DEFAULT_ALPHA_PCT = 5.0
DEFAULT_ATTENUATION_PCT = 75.0

POINTS_PER_KG_PER_LITER = 8.3454
WHIRLPOOL_MINUTES = 10.0

PRIMING_SUGAR_FACTORS = {
    "table_sugar": 1.0,
    "glucose": 1.15,
    "dme": 1.4,
}

_SRM_PALETTE: tuple[tuple[float, str], ...] = (
    (2, "#FFE699"),
    (4, "#FFD878"),
    (6, "#FFCA5A"),
    (8, "#FFBF42"),
    (10, "#FBB123"),
    (13, "#F8A600"),
    (17, "#F39C00"),
    (20, "#EA8F00"),
    (24, "#E58500"),
    (29, "#D37200"),
    (35, "#C16100"),
    (40, "#AF5000"),
    (45, "#9A4000"),
    (50, "#823000"),
)


@dataclass(frozen=True)
class RecipeStats:
    og: float
    fg: float
    abv: float
    color: float
    ibu: int


def round_half_up(value: float, digits: int = 0) -> float:
    """Round ``value`` to ``digits`` places, sending exact ties away from zero."""
    exponent = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(exponent, rounding=ROUND_HALF_UP))


def _value_or(named: NamedValue | None, default: float) -> float:
    if named is None or not named.value:
        return default
    return named.value


def batch_liters(recipe: Recipe) -> float:
    liters = to_liters(recipe.batch_size.value, recipe.batch_size.unit)
    if not liters or liters <= 0:
        return 1.0
    return liters


def calculate_abv(
    og: float | None,
    fg: float | None,
    is_bottled: bool = False,
    sugar_g: float | None = 0,
    volume_l: float | None = 1,
) -> float:
    """ABV from gravities, optionally adding bottle-conditioning sugar."""
    if not og or not fg or og <= fg:
        return 0.0

    abv = (og - fg) * 131.25
    if is_bottled and (sugar_g or 0) > 0 and (volume_l or 0) > 0:
        # roughly 0.1% ABV per 2 g/L of priming sugar
        abv += (sugar_g / volume_l) * 0.05

    return round_half_up(abv, 1)


def attenuation_pct(og: float, fg: float) -> float:
    if og <= 1.0:
        return 0.0
    return round(((og - fg) / (og - 1.0)) * 100, 2)


def residual_co2(temp_c: float) -> float:
    return 1.57 * 0.97**temp_c


def priming_sugar(target_co2: float, liters: float, temp_c: float, sugar_type: str = "table_sugar") -> int:
    """Grams of priming sugar needed to reach ``target_co2`` volumes."""
    needed_co2 = max(0.0, target_co2 - residual_co2(temp_c))
    sugar_g = needed_co2 * 4 * liters
    sugar_g *= PRIMING_SUGAR_FACTORS.get(sugar_type, 1.0)
    return int(round_half_up(sugar_g))


def _time_factor(minutes: float) -> float:
    return (1 - math.exp(-0.04 * minutes)) / 4.15


def tinseth_ibu(
    alpha: float,
    weight_g: float,
    minutes: float,
    og: float,
    batch_liters: float,
    use: str = "boil",
) -> float:
    if batch_liters <= 0:
        batch_liters = 1.0

    bigness_factor = 1.65 * 0.000125 ** (og - 1)
    if use == "whirlpool":
        utilization = bigness_factor * _time_factor(WHIRLPOOL_MINUTES) * 0.5
    else:
        utilization = bigness_factor * _time_factor(minutes)

    return alpha * weight_g * utilization * 10 / batch_liters


def _original_gravity(recipe: Recipe, liters: float) -> float:
    efficiency = recipe.efficiency.brewhouse / 100
    total_points = 0.0
    for fermentable in recipe.ingredients.fermentables:
        weight_kg = to_kilograms(fermentable.amount.value, fermentable.amount.unit)
        potential_named = fermentable.yield_.potential if fermentable.yield_ else None
        ppg = (_value_or(potential_named, DEFAULT_POTENTIAL) - 1) * 1000
        pkl = ppg * POINTS_PER_KG_PER_LITER
        total_points += weight_kg * pkl * efficiency / liters
    return 1 + total_points / 1000


def _final_gravity(recipe: Recipe, og: float) -> float:
    cultures = recipe.ingredients.cultures
    if cultures:
        avg_attenuation = sum(c.attenuation or DEFAULT_ATTENUATION_PCT for c in cultures) / len(cultures)
    else:
        avg_attenuation = DEFAULT_ATTENUATION_PCT
    return 1 + (og - 1) * (1 - avg_attenuation / 100)


def _morey_color(recipe: Recipe, liters: float) -> float:
    gallons = liters / GAL_TO_L
    mcu = 0.0
    for fermentable in recipe.ingredients.fermentables:
        weight_lb = to_pounds(fermentable.amount.value, fermentable.amount.unit)
        mcu += weight_lb * _value_or(fermentable.color, DEFAULT_COLOR_SRM) / gallons
    if mcu <= 0:
        return 0.0
    return 1.4922 * mcu**0.6859


def _bitterness(recipe: Recipe, og: float, liters: float, alpha_overrides: dict[str, float] | None) -> float:
    # No fermentables means no wort to isomerise alpha acids into.
    if not recipe.ingredients.fermentables:
        return 0.0

    overrides = alpha_overrides or {}
    ibu = 0.0
    for hop in recipe.ingredients.hops:
        if hop.use not in BITTERING_HOP_USES or hop.amount is None or hop.time is None:
            continue
        if hop.name in overrides:
            alpha = overrides[hop.name]
        else:
            alpha = _value_or(hop.alpha_acid, DEFAULT_ALPHA_PCT)
        weight_g = to_grams(hop.amount.value, hop.amount.unit)
        ibu += tinseth_ibu(alpha, weight_g, hop.time.value, og, liters, use=hop.use)
    return ibu


def calculate_recipe_stats(recipe: Recipe, alpha_overrides: dict[str, float] | None = None) -> RecipeStats:
    liters = batch_liters(recipe)

    og = _original_gravity(recipe, liters)
    fg = _final_gravity(recipe, og)
    color = _morey_color(recipe, liters)
    ibu = _bitterness(recipe, og, liters, alpha_overrides)

    return RecipeStats(
        og=round_half_up(og, 3),
        fg=round_half_up(fg, 3),
        abv=calculate_abv(og, fg, False),
        color=round_half_up(color, 1),
        ibu=int(round_half_up(ibu)),
    )


def apply_specifications(recipe: Recipe, stats: RecipeStats | None = None) -> Recipe:
    """Return a copy of ``recipe`` whose specifications mirror the computed stats."""
    if stats is None:
        stats = calculate_recipe_stats(recipe)

    specifications = Specifications(
        og=NamedValue(value=stats.og),
        fg=NamedValue(value=stats.fg),
        abv=NamedValue(value=stats.abv),
        ibu=NamedValue(value=stats.ibu),
        color=NamedValue(value=stats.color),
    )
    return recipe.model_copy(update={"specifications": specifications})


def srm_to_hex(srm: float) -> str:
    for upper_bound, hex_color in _SRM_PALETTE:
        if srm < upper_bound:
            return hex_color
    return "#241000"
