from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

RecipeName = Annotated[str, StringConstraints(min_length=1, max_length=200)]
IngredientLine = Annotated[str, StringConstraints(min_length=1)]
IngredientList = Annotated[list[IngredientLine], Field(min_length=1)]


class RecipeCreate(BaseModel):
    name: RecipeName
    ingredients: IngredientList
    instructions: str = ""


class RecipeUpdate(BaseModel):
    """Partial update. Only fields present in the request body are applied."""

    name: RecipeName | None = None
    ingredients: IngredientList | None = None
    instructions: str | None = None

    @model_validator(mode="after")
    def _check_fields(self) -> "RecipeUpdate":
        if not self.model_fields_set:
            raise ValueError("at least one of name, ingredients, instructions is required")
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} must not be null")
        return self


class RecipeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    ingredients: list[str]
    instructions: str
    created_at: datetime
    updated_at: datetime


class RecipeDetailsRequest(BaseModel):
    name: RecipeName
    ingredients: IngredientList


class RecipeDetailsResponse(BaseModel):
    name: str
    details: str
