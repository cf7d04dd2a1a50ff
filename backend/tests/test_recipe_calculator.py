import pytest

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
from brewmaster.services.recipe_calculator import (
    apply_specifications,
    attenuation_pct,
    calculate_abv,
    calculate_recipe_stats,
    priming_sugar,
    residual_co2,
    round_half_up,
    srm_to_hex,
    tinseth_ibu,
)


def _hop(name: str, grams: float, alpha: float, use: str, minutes: float) -> Hop:
    return Hop(
        name=name,
        amount=Quantity(unit="grams", value=grams),
        alpha_acid=NamedValue(value=alpha),
        use=use,
        time=Quantity(unit="minutes", value=minutes),
    )


@pytest.fixture
def pale_ale() -> Recipe:
    return Recipe(
        name="House Pale",
        batch_size=Quantity(unit="liters", value=20),
        ingredients=RecipeIngredients(
            fermentables=[
                Fermentable(
                    name="Pale Malt",
                    amount=Quantity(unit="kilograms", value=4.5),
                    yield_=FermentableYield(potential=NamedValue(value=1.037)),
                    color=NamedValue(value=3),
                )
            ],
            hops=[_hop("Magnum", 30, 10, "boil", 60)],
            cultures=[Culture(name="US-05", attenuation=75)],
        ),
    )


def test_calculate_abv() -> None:
    assert calculate_abv(1.060, 1.012) == 6.3


def test_calculate_abv_adds_priming_sugar_when_bottled() -> None:
    assert calculate_abv(1.060, 1.012, True, 120, 20) == 6.6
    assert calculate_abv(1.060, 1.012, False, 120, 20) == 6.3


def test_calculate_abv_is_zero_without_fermentation() -> None:
    assert calculate_abv(1.010, 1.012) == 0.0
    assert calculate_abv(None, 1.010) == 0.0


def test_attenuation_pct() -> None:
    assert attenuation_pct(1.060, 1.012) == 80.0


def test_tinseth_reference_value() -> None:
    assert tinseth_ibu(10, 50, 60, 1.050, 20) == pytest.approx(57.67, abs=0.01)


def test_recipe_stats(pale_ale: Recipe) -> None:
    stats = calculate_recipe_stats(pale_ale)

    assert stats.og == 1.052
    assert stats.fg == 1.013
    assert stats.abv == 5.1
    assert stats.color == 4.9
    assert stats.ibu == 34


def test_recipe_without_fermentables_has_no_bitterness(pale_ale: Recipe) -> None:
    pale_ale.ingredients.fermentables = []

    stats = calculate_recipe_stats(pale_ale)

    assert stats.og == 1.0
    assert stats.fg == 1.0
    assert stats.abv == 0.0
    assert stats.color == 0.0
    assert stats.ibu == 0


def test_dry_hops_do_not_add_bitterness(pale_ale: Recipe) -> None:
    baseline = calculate_recipe_stats(pale_ale).ibu
    pale_ale.ingredients.hops.append(_hop("Citra", 100, 12, "dry_hop", 4))

    assert calculate_recipe_stats(pale_ale).ibu == baseline


def test_whirlpool_hops_add_some_bitterness(pale_ale: Recipe) -> None:
    baseline = calculate_recipe_stats(pale_ale).ibu
    pale_ale.ingredients.hops.append(_hop("Citra", 100, 12, "whirlpool", 0))

    assert calculate_recipe_stats(pale_ale).ibu > baseline


def test_alpha_overrides_replace_hop_alpha(pale_ale: Recipe) -> None:
    stats = calculate_recipe_stats(pale_ale, {"Magnum": 20})

    assert stats.ibu == 68


def test_missing_values_fall_back_to_defaults() -> None:
    recipe = Recipe(
        batch_size=Quantity(unit="liters", value=0),
        ingredients=RecipeIngredients(fermentables=[Fermentable(name="Mystery", amount=Quantity(unit="kg", value=1))]),
    )

    stats = calculate_recipe_stats(recipe)

    assert stats.og > 1.0
    assert stats.fg < stats.og
    assert stats.color > 0


def test_apply_specifications_mirrors_stats(pale_ale: Recipe) -> None:
    recipe = apply_specifications(pale_ale)

    assert recipe.specifications is not None
    assert recipe.specifications.og.value == 1.052
    assert recipe.specifications.ibu.value == 34
    assert pale_ale.specifications is None


def test_priming_sugar_by_sugar_type() -> None:
    assert residual_co2(20) == pytest.approx(0.8538, abs=0.0001)
    assert priming_sugar(2.4, 20, 20) == 124
    assert priming_sugar(2.4, 20, 20, "glucose") == 142
    assert priming_sugar(2.4, 20, 20, "dme") == 173


def test_priming_sugar_never_negative() -> None:
    assert priming_sugar(0.5, 20, 4) == 0


def test_srm_to_hex() -> None:
    assert srm_to_hex(1) == "#FFE699"
    assert srm_to_hex(80) == "#241000"


def test_recipe_without_cultures_uses_default_attenuation(pale_ale: Recipe) -> None:
    pale_ale.ingredients.cultures = []

    stats = calculate_recipe_stats(pale_ale)

    assert stats.fg == round(1 + (stats.og - 1) * 0.25, 3)


def test_abv_is_monotonic_in_gravities() -> None:
    gravities = [1.000 + step / 1000 for step in range(0, 80, 5)]

    for fg in gravities:
        values = [calculate_abv(og, fg) for og in gravities]
        assert values == sorted(values)
    for og in gravities:
        values = [calculate_abv(og, fg) for fg in gravities]
        assert values == sorted(values, reverse=True)


@pytest.mark.parametrize(
    ("value", "digits", "expected"),
    [
        (2.5, 0, 3),
        (3.5, 0, 4),
        (0.125, 2, 0.13),
        (6.25, 1, 6.3),
        (2.4999, 0, 2),
    ],
)
def test_round_half_up_sends_ties_up(value: float, digits: int, expected: float) -> None:
    assert round_half_up(value, digits) == expected
