import pytest

from brewmaster.services.units import (
    GALLONS,
    GRAMS,
    POUNDS,
    normalize_unit,
    potential_to_yield,
    to_grams,
    to_kilograms,
    to_liters,
    to_pounds,
    yield_to_potential,
)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("Gallons", GALLONS), ("lbs", POUNDS), ("G", GRAMS), ("furlongs", "furlongs"), (None, "")],
)
def test_normalize_unit(raw: str | None, expected: str) -> None:
    assert normalize_unit(raw) == expected


def test_weight_conversions() -> None:
    assert to_kilograms(500, "g") == pytest.approx(0.5)
    assert to_kilograms(1, "lb") == pytest.approx(0.453592)
    assert to_grams(1, "oz") == pytest.approx(28.3495)
    assert to_pounds(1, "kg") == pytest.approx(2.20462)


def test_unknown_unit_is_not_converted() -> None:
    assert to_kilograms(3, "bags") == 3
    assert to_liters(3, "") == 3


def test_volume_conversion() -> None:
    assert to_liters(5, "gal") == pytest.approx(18.92705)


def test_yield_potential_conversion() -> None:
    assert yield_to_potential(80) == 1.0368
    assert potential_to_yield(1.037) == pytest.approx(80.4348)


@pytest.mark.parametrize("raw", ["kg", "Kilograms", "kilo", " KG "])
def test_kilogram_aliases_share_a_key(raw: str) -> None:
    assert normalize_unit(raw) == normalize_unit("kilograms")
