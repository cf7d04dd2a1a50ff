from pydantic import BaseModel, Field

from brewmaster.schemas.library import LibraryIngredient
from brewmaster.schemas.recipe import Recipe


class BeerXmlImportResult(BaseModel):
    recipes: list[Recipe] = Field(default_factory=list)
    fermentables: list[LibraryIngredient] = Field(default_factory=list)
    hops: list[LibraryIngredient] = Field(default_factory=list)
    cultures: list[LibraryIngredient] = Field(default_factory=list)
    miscs: list[LibraryIngredient] = Field(default_factory=list)
    waters: list[LibraryIngredient] = Field(default_factory=list)
    styles: list[LibraryIngredient] = Field(default_factory=list)

    @property
    def library_candidates(self) -> list[LibraryIngredient]:
        return [*self.fermentables, *self.hops, *self.cultures, *self.miscs, *self.waters, *self.styles]

    @property
    def is_empty(self) -> bool:
        return not self.recipes and not self.library_candidates


class BeerXmlDocument(BaseModel):
    xml: str = Field(min_length=1)


class BeerXmlImportSummaryRead(BaseModel):
    recipe_ids: list[str] = Field(default_factory=list)
    recipe_names: list[str] = Field(default_factory=list)
    created_library_ids: list[str] = Field(default_factory=list)
    reused_library_count: int = 0
