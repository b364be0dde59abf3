"""API routes for recipes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from mealbook.dependencies import get_store
from mealbook.errors import NotFoundError
from mealbook.logging_config import get_logger
from mealbook.schemas import (
    ErrorResponse,
    MessageResponse,
    Recipe,
    RecipeCreate,
    RecipeCreatedResponse,
)
from mealbook.store import Store

logger = get_logger(__name__)

router = APIRouter(tags=["recipes"])

NOT_FOUND = "Recipe not found"


@router.get("/recipe", response_model=list[Recipe])
async def list_recipes(
    category: Annotated[str | None, Query(description="Only return recipes in this category")] = None,
    store: Store = Depends(get_store),
) -> list[Recipe]:
    """List all recipes, optionally filtered by exact category."""
    logger.info(f"Listing recipes: category={category}")
    return await store.list_recipes(category=category)


@router.get(
    "/recipe/{recipe_id}",
    response_model=Recipe,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_recipe(
    recipe_id: str,
    store: Store = Depends(get_store),
) -> Recipe:
    """Get a single recipe. Non-numeric ids are treated as unknown."""
    recipe = await store.get_recipe(recipe_id)
    if recipe is None:
        raise NotFoundError(NOT_FOUND)
    return recipe


@router.post(
    "/recipe",
    response_model=RecipeCreatedResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_recipe(
    request: RecipeCreate,
    store: Store = Depends(get_store),
) -> RecipeCreatedResponse:
    recipe = await store.create_recipe(request)
    return RecipeCreatedResponse(message="Recipe created successfully", recipe=recipe)


@router.delete(
    "/recipe/{recipe_id}",
    response_model=MessageResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def delete_recipe(
    recipe_id: str,
    store: Store = Depends(get_store),
) -> MessageResponse:
    """
    Delete a recipe.

    Returns 404 when nothing was deleted. Meal plans that still list the
    recipe keep their reference.
    """
    result = await store.delete_recipe(recipe_id)
    if result.changes == 0:
        raise NotFoundError(NOT_FOUND)

    logger.info(f"Deleted recipe {recipe_id}")
    return MessageResponse(message="Recipe deleted successfully")
