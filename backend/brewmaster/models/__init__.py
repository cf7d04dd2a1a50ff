from brewmaster.models.brew_log import BrewLog
from brewmaster.models.library_ingredient import LibraryIngredientRecord
from brewmaster.models.recipe import RecipeRecord
from brewmaster.models.tasting_note import TastingNote

__all__ = [
    "BrewLog",
    "LibraryIngredientRecord",
    "RecipeRecord",
    "TastingNote",
]
