KILOGRAMS = "kilograms"
POUNDS = "pounds"
GRAMS = "grams"
OUNCES = "ounces"
LITERS = "liters"
GALLONS = "gallons"
MINUTES = "minutes"
DAYS = "days"

LB_TO_KG = 0.453592
KG_TO_LB = 2.20462
OZ_TO_G = 28.3495
GAL_TO_L = 3.78541
MINUTES_PER_DAY = 1440

# BeerXML carries fermentable yield as a percentage; recipes carry a potential
# specific gravity. potential = 1 + yield% / 100 * 0.046
YIELD_TO_POTENTIAL = 0.046

# Checked in order; "gal" must win over "g" and "lb" over "l".
_PREFIXES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("kg", "kilo"), KILOGRAMS),
    (("lb", "pound"), POUNDS),
    (("gal",), GALLONS),
    (("g",), GRAMS),
    (("oz", "ounce"), OUNCES),
    (("l",), LITERS),
    (("min",), MINUTES),
    (("day",), DAYS),
)


def normalize_unit(unit: str | None) -> str:
    """Map a loose unit string to its canonical key.

    Unrecognized strings are returned unchanged and are treated as already
    canonical by the conversion helpers below.
    """
    if unit is None:
        return ""
    key = unit.strip().lower()
    if not key:
        return unit
    for prefixes, canonical in _PREFIXES:
        if key.startswith(prefixes):
            return canonical
    return unit


def to_kilograms(value: float, unit: str | None) -> float:
    canonical = normalize_unit(unit)
    if canonical == POUNDS:
        return value * LB_TO_KG
    if canonical == GRAMS:
        return value / 1000
    if canonical == OUNCES:
        return value * OZ_TO_G / 1000
    return value


def to_pounds(value: float, unit: str | None) -> float:
    canonical = normalize_unit(unit)
    if canonical == KILOGRAMS:
        return value * KG_TO_LB
    if canonical == GRAMS:
        return value / 1000 * KG_TO_LB
    if canonical == OUNCES:
        return value / 16
    return value


def to_grams(value: float, unit: str | None) -> float:
    canonical = normalize_unit(unit)
    if canonical == OUNCES:
        return value * OZ_TO_G
    if canonical == KILOGRAMS:
        return value * 1000
    if canonical == POUNDS:
        return value * LB_TO_KG * 1000
    return value


def to_liters(value: float, unit: str | None) -> float:
    if normalize_unit(unit) == GALLONS:
        return value * GAL_TO_L
    return value


def to_gallons(value: float, unit: str | None) -> float:
    if normalize_unit(unit) == LITERS:
        return value / GAL_TO_L
    return value


def yield_to_potential(yield_pct: float) -> float:
    return round(1 + yield_pct / 100 * YIELD_TO_POTENTIAL, 4)


def potential_to_yield(potential: float) -> float:
    return round((potential - 1) * 100 / YIELD_TO_POTENTIAL, 4)
