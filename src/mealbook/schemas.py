"""Request and response schemas for the HTTP API."""

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

RECIPE_IDS_HINT = "recipe_ids must be a JSON list of integer recipe ids, e.g. \"[1, 2]\""


def parse_recipe_ids(raw: str) -> list[int]:
    """Decode the serialized recipe id list stored on a meal plan."""
    try:
        value = json.loads(raw)
    except (TypeError, ValueError):
        raise ValueError(RECIPE_IDS_HINT)
    if not isinstance(value, list) or not all(
        isinstance(item, int) and not isinstance(item, bool) and -(2**63) <= item < 2**63
        for item in value
    ):
        raise ValueError(RECIPE_IDS_HINT)
    return value


# =============================================================================
# Recipes
# =============================================================================


class RecipeCreate(BaseModel):
    """Writable recipe fields."""

    name: str = Field(min_length=1)
    category: str = Field(min_length=1, description="Free-form, e.g. lunch or dinner")
    instructions: str = Field(min_length=1)
    ingredients: str = Field(min_length=1, description="Comma-delimited ingredient list")
    prep_time: int = Field(ge=-(2**63), le=2**63 - 1, description="Preparation time in minutes")


class Recipe(RecipeCreate):
    """Stored recipe."""

    model_config = ConfigDict(from_attributes=True)

    id: int


class RecipeCreatedResponse(BaseModel):
    message: str
    recipe: Recipe


# =============================================================================
# Meal plans
# =============================================================================


class MealPlanCreate(BaseModel):
    """Writable meal plan fields.

    ``recipe_ids`` is accepted either as its serialized text form or as a
    JSON array; arrays are serialized before storage.
    """

    name: str = Field(min_length=1)
    date: str = Field(min_length=1, description="Application-level date string")
    recipe_ids: str = Field(description="Serialized list of recipe ids")
    notes: str = ""

    @field_validator("recipe_ids", mode="before")
    @classmethod
    def serialize_recipe_ids(cls, value: Any) -> Any:
        if isinstance(value, list):
            value = json.dumps(value)
        if isinstance(value, str):
            parse_recipe_ids(value)
        return value

    @property
    def recipe_id_list(self) -> list[int]:
        return parse_recipe_ids(self.recipe_ids)


class MealPlan(BaseModel):
    """Stored meal plan."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    date: str
    recipe_ids: str
    notes: str


class MealPlanCreatedResponse(BaseModel):
    message: str
    meal_plan: MealPlan


# =============================================================================
# Shared
# =============================================================================


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    error: str
    details: list[dict[str, Any]] | None = None
