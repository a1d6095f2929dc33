from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, StringConstraints, model_validator

from recipe_planner.schemas.recipe import RecipeRead

PlanName = Annotated[str, StringConstraints(min_length=1, max_length=200)]


class PlanCreate(BaseModel):
    name: PlanName
    plan_data: dict[str, Any]


class PlanUpdate(BaseModel):
    name: PlanName | None = None
    plan_data: dict[str, Any] | None = None

    @model_validator(mode="after")
    def _check_fields(self) -> "PlanUpdate":
        if not self.model_fields_set:
            raise ValueError("at least one of name, plan_data is required")
        for field in self.model_fields_set:
            if getattr(self, field) is None:
                raise ValueError(f"{field} must not be null")
        return self


class PlanRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    plan_data: dict[str, Any]
    created_at: datetime
    updated_at: datetime


class GeneratePlanRequest(BaseModel):
    recipe_ids: list[int] | None = None  # restrict the pool; None = every stored recipe
    seed: int | None = None  # reproducible plan when set
    save_as: PlanName | None = None  # persist the generated plan under this name


class GeneratePlanResponse(BaseModel):
    days: list[str]
    recipes_available: int
    plan: dict[str, list[RecipeRead]]
    saved_plan_id: int | None = None
