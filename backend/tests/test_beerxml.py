import pytest

from brewmaster.core.config import settings
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
    Style,
)
from brewmaster.services.beerxml_export import escape_xml, export_library, export_recipe, export_recipes
from brewmaster.services.beerxml_parser import number_or_default, parse_beerxml, text_or_default

RECIPE_XML = """<?xml version="1.0" encoding="ISO-8859-1"?>
<RECIPES>
  <RECIPE>
    <NAME>Citra Pale</NAME>
    <VERSION>1</VERSION>
    <TYPE>All Grain</TYPE>
    <BREWER>Sam</BREWER>
    <BATCH_SIZE>23</BATCH_SIZE>
    <BOIL_SIZE>28</BOIL_SIZE>
    <BOIL_TIME>60</BOIL_TIME>
    <EFFICIENCY>72</EFFICIENCY>
    <NOTES>First try</NOTES>
    <EST_OG>1.052</EST_OG>
    <STYLE>
      <NAME>American Pale Ale</NAME>
      <CATEGORY>18B</CATEGORY>
    </STYLE>
    <FERMENTABLES>
      <FERMENTABLE>
        <NAME>Pale Malt</NAME>
        <AMOUNT>4.5</AMOUNT>
        <TYPE>Grain</TYPE>
        <YIELD>80</YIELD>
        <COLOR>3</COLOR>
      </FERMENTABLE>
      <FERMENTABLE>
        <NAME>Crystal 60</NAME>
        <AMOUNT>0.3</AMOUNT>
        <TYPE>Grain</TYPE>
        <POTENTIAL>1.034</POTENTIAL>
        <YIELD>74</YIELD>
        <COLOR>60</COLOR>
      </FERMENTABLE>
    </FERMENTABLES>
    <HOPS>
      <HOP>
        <NAME>Citra</NAME>
        <ALPHA>12</ALPHA>
        <AMOUNT>0.03</AMOUNT>
        <USE>Boil</USE>
        <TIME>60</TIME>
      </HOP>
      <HOP>
        <NAME>Citra</NAME>
        <ALPHA>12</ALPHA>
        <AMOUNT>0.05</AMOUNT>
        <USE>Aroma</USE>
        <TIME>15</TIME>
      </HOP>
      <HOP>
        <NAME>Mosaic</NAME>
        <ALPHA>11.5</ALPHA>
        <AMOUNT>0.06</AMOUNT>
        <USE>Dry Hop</USE>
        <TIME>7200</TIME>
      </HOP>
    </HOPS>
    <YEASTS>
      <YEAST>
        <NAME>London Ale III</NAME>
        <TYPE>Ale</TYPE>
        <FORM>Liquid</FORM>
        <ATTENUATION>73</ATTENUATION>
      </YEAST>
    </YEASTS>
    <MISCS>
      <MISC>
        <NAME>Irish Moss</NAME>
        <TYPE>Fining</TYPE>
        <USE>Boil</USE>
        <TIME>15</TIME>
        <AMOUNT>0.005</AMOUNT>
        <AMOUNT_IS_WEIGHT>TRUE</AMOUNT_IS_WEIGHT>
      </MISC>
    </MISCS>
  </RECIPE>
</RECIPES>
"""

LIBRARY_XML = """<BREW_LIBRARY>
  <HOPS>
    <HOP><NAME>Saaz</NAME><ALPHA>3.5</ALPHA><USE>Boil</USE></HOP>
  </HOPS>
  <YEASTS>
    <YEAST><NAME>W-34/70</NAME><FORM>Dry</FORM><ATTENUATION>82</ATTENUATION></YEAST>
  </YEASTS>
  <STYLES>
    <STYLE><NAME>German Pils</NAME><CATEGORY>5D</CATEGORY></STYLE>
  </STYLES>
</BREW_LIBRARY>
"""


def _recipe() -> Recipe:
    return Recipe(
        name="Round Trip",
        author="Alex",
        batch_size=Quantity(unit="liters", value=20),
        style=Style(name="Bitter", category="11A"),
        ingredients=RecipeIngredients(
            fermentables=[
                Fermentable(
                    name="Maris Otter",
                    amount=Quantity(unit="kilograms", value=4),
                    yield_=FermentableYield(potential=NamedValue(value=1.037)),
                    color=NamedValue(value=3),
                )
            ],
            hops=[
                Hop(
                    name="Fuggles",
                    amount=Quantity(unit="grams", value=30),
                    alpha_acid=NamedValue(value=4.5),
                    use="boil",
                    time=Quantity(unit="minutes", value=60),
                ),
                Hop(
                    name="Goldings",
                    amount=Quantity(unit="grams", value=40),
                    alpha_acid=NamedValue(value=5),
                    use="dry_hop",
                    time=Quantity(unit="days", value=3),
                ),
            ],
            cultures=[Culture(name="S-04", type="ale", form="dry", attenuation=72)],
        ),
    )


def test_parse_recipe_fields() -> None:
    result = parse_beerxml(RECIPE_XML)

    assert len(result.recipes) == 1
    recipe = result.recipes[0]
    assert recipe.id
    assert recipe.name == "Citra Pale"
    assert recipe.type == "all_grain"
    assert recipe.author == "Sam"
    assert recipe.batch_size.value == 23
    assert recipe.efficiency.brewhouse == 72
    assert recipe.style is not None and recipe.style.category == "18B"
    assert recipe.specifications.og.value == 1.052


def test_parse_fermentable_potential() -> None:
    fermentables = parse_beerxml(RECIPE_XML).recipes[0].ingredients.fermentables

    assert fermentables[0].yield_.potential.value == 1.0368
    assert fermentables[1].yield_.potential.value == 1.034
    assert fermentables[1].color.value == 60


def test_parse_hops() -> None:
    hops = parse_beerxml(RECIPE_XML).recipes[0].ingredients.hops

    assert hops[0].amount.unit == "grams"
    assert hops[0].amount.value == 30
    assert hops[1].use == "whirlpool"
    assert hops[2].use == "dry_hop"
    assert hops[2].time.unit == "days"
    assert hops[2].time.value == 5


def test_parse_culture_and_misc() -> None:
    ingredients = parse_beerxml(RECIPE_XML).recipes[0].ingredients

    assert ingredients.cultures[0].form == "liquid"
    assert ingredients.cultures[0].attenuation == 73
    assert ingredients.miscellaneous[0].amount.unit == "kilograms"
    assert ingredients.miscellaneous[0].amount.value == 0.005


def test_recipe_ingredients_are_not_library_candidates() -> None:
    result = parse_beerxml(RECIPE_XML)

    assert result.library_candidates == []
    assert result.styles == []


def test_parse_standalone_library() -> None:
    result = parse_beerxml(LIBRARY_XML)

    assert result.recipes == []
    assert [item.name for item in result.hops] == ["Saaz"]
    assert result.hops[0].alpha == 3.5
    assert result.cultures[0].attenuation == 82
    assert result.styles[0].category == "5D"
    assert len(result.library_candidates) == 3


@pytest.mark.parametrize("document", ["", "   ", "<RECIPES><RECIPE>", "not xml at all"])
def test_malformed_documents_yield_empty_result(document: str) -> None:
    assert parse_beerxml(document).is_empty


def test_bytes_with_declaration_are_accepted() -> None:
    result = parse_beerxml(RECIPE_XML.encode("iso-8859-1"))

    assert result.recipes[0].name == "Citra Pale"


def test_external_entities_are_not_resolved() -> None:
    document = (
        '<!DOCTYPE RECIPES [<!ENTITY secret SYSTEM "file:///etc/passwd">]>'
        "<RECIPES><RECIPE><NAME>&secret;</NAME></RECIPE></RECIPES>"
    )

    result = parse_beerxml(document)

    assert "root" not in (result.recipes[0].name if result.recipes else "")


def test_accessor_defaults() -> None:
    result = parse_beerxml("<RECIPES><RECIPE><NAME> </NAME><BATCH_SIZE>abc</BATCH_SIZE></RECIPE></RECIPES>")
    recipe = result.recipes[0]

    assert recipe.name == ""
    assert recipe.batch_size.value == 0
    assert text_or_default(None, "NAME", "x") == "x"
    assert number_or_default(None, "AMOUNT", 2.5) == 2.5


def test_escape_xml() -> None:
    assert escape_xml('Bob\'s "IPA" & Sons <1>') == "Bob&apos;s &quot;IPA&quot; &amp; Sons &lt;1&gt;"


def test_export_recipe_document() -> None:
    document = export_recipe(_recipe().model_copy(update={"name": 'Bob\'s "IPA" & Sons', "author": ""}))

    assert document.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    assert "<NAME>Bob&apos;s &quot;IPA&quot; &amp; Sons</NAME>" in document
    assert f"<BREWER>{settings.default_brewer}</BREWER>" in document
    assert "<BATCH_SIZE>20</BATCH_SIZE>" in document
    assert "<BOIL_SIZE>25</BOIL_SIZE>" in document
    assert "<AMOUNT>0.03</AMOUNT>" in document
    assert "<USE>Dry Hop</USE>" in document
    assert "<TIME>4320</TIME>" in document
    assert "<MISCS>" not in document


def test_export_then_parse_preserves_recipe() -> None:
    original = _recipe()

    parsed = parse_beerxml(export_recipe(original)).recipes[0]

    assert parsed.name == original.name
    assert parsed.author == "Alex"
    assert parsed.batch_size.value == 20
    assert parsed.style == original.style
    fermentable = parsed.ingredients.fermentables[0]
    assert fermentable.amount.value == 4
    assert fermentable.yield_.potential.value == 1.037
    assert fermentable.color.value == 3
    boil_hop, dry_hop = parsed.ingredients.hops
    assert boil_hop.amount.value == 30
    assert boil_hop.time.value == 60
    assert dry_hop.use == "dry_hop"
    assert dry_hop.time.value == 3
    assert parsed.ingredients.cultures[0].attenuation == 72


def test_export_recipes_writes_one_block_per_recipe() -> None:
    document = export_recipes([_recipe(), _recipe()])

    assert document.count("<RECIPE>") == 2
    assert len(parse_beerxml(document).recipes) == 2


def test_export_library_skips_empty_sections() -> None:
    document = export_library(
        [
            LibraryIngredient(id="1", name="Saaz", type="hop", alpha=3.5),
            LibraryIngredient(id="2", name="German Pils", type="style", category="5D"),
        ]
    )

    assert "<BREW_LIBRARY>" in document
    assert "<HOPS>" in document
    assert "<FERMENTABLES>" not in document
    assert "<YEASTS>" not in document
    assert [item.name for item in parse_beerxml(document).hops] == ["Saaz"]


def test_round_trip_keeps_core_numbers_exactly() -> None:
    recipe = Recipe(
        name="Pils",
        ingredients=RecipeIngredients(
            fermentables=[
                Fermentable(
                    name="Pilsner Malt",
                    amount=Quantity(unit="kilograms", value=5),
                    yield_=FermentableYield(potential=NamedValue(value=1.037)),
                    color=NamedValue(value=3),
                )
            ],
            hops=[
                Hop(
                    name="Cascade",
                    amount=Quantity(unit="grams", value=30),
                    alpha_acid=NamedValue(value=5.5),
                    use="boil",
                    time=Quantity(unit="minutes", value=60),
                )
            ],
            cultures=[Culture(name="US-05", type="ale", form="dry", attenuation=78)],
        ),
    )

    parsed = parse_beerxml(export_recipe(recipe)).recipes[0]
    fermentable = parsed.ingredients.fermentables[0]
    hop = parsed.ingredients.hops[0]
    culture = parsed.ingredients.cultures[0]

    assert parsed.id != recipe.id
    assert (fermentable.name, fermentable.amount.value, fermentable.color.value) == ("Pilsner Malt", 5, 3)
    assert fermentable.library_id is None
    assert (hop.name, hop.amount.value, hop.alpha_acid.value, hop.use) == ("Cascade", 30, 5.5, "boil")
    assert (culture.name, culture.attenuation, culture.form, culture.type) == ("US-05", 78, "dry", "ale")


def test_escaped_name_parses_back_to_the_same_string() -> None:
    name = 'Bob\'s "IPA" & Sons'

    parsed = parse_beerxml(export_recipe(_recipe().model_copy(update={"name": name}))).recipes[0]

    assert parsed.name == name


def test_zero_batch_size_survives_export() -> None:
    recipe = _recipe().model_copy(update={"batch_size": Quantity(unit="liters", value=0)})

    document = export_recipe(recipe)

    assert "<BATCH_SIZE>0</BATCH_SIZE>" in document
    assert "<BOIL_SIZE>5</BOIL_SIZE>" in document
    assert parse_beerxml(document).recipes[0].batch_size.value == 0


@pytest.mark.parametrize(
    ("amount", "expected_grams"),
    [
        (Quantity(unit="grams", value=12.3456), 12.3456),
        (Quantity(unit="ounces", value=1), 28.349523125),
    ],
)
def test_fractional_hop_amounts_survive_export(amount: Quantity, expected_grams: float) -> None:
    hop = Hop(
        name="Citra",
        amount=amount,
        alpha_acid=NamedValue(value=12),
        use="boil",
        time=Quantity(unit="minutes", value=15),
    )
    recipe = _recipe()
    recipe.ingredients.hops = [hop]

    parsed_hop = parse_beerxml(export_recipe(recipe)).recipes[0].ingredients.hops[0]

    assert parsed_hop.amount.unit == "grams"
    assert parsed_hop.amount.value == pytest.approx(expected_grams, abs=1e-6)


def test_unicode_text_ignores_declared_encoding() -> None:
    document = RECIPE_XML.replace("Citra Pale", "Märzen Øl")

    assert parse_beerxml(document).recipes[0].name == "Märzen Øl"


@pytest.mark.parametrize("form", ["liquid", "dry", "slant", "culture"])
def test_library_culture_form_survives_export(form: str) -> None:
    document = export_library([LibraryIngredient(id="1", name="Wyeast 1056", type="culture", form=form)])

    assert parse_beerxml(document).cultures[0].form == form
