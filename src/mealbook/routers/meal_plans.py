"""API routes for meal plans."""

from fastapi import APIRouter, Depends, status

from mealbook.dependencies import get_store
from mealbook.errors import NotFoundError
from mealbook.logging_config import get_logger
from mealbook.schemas import (
    ErrorResponse,
    MealPlan,
    MealPlanCreate,
    MealPlanCreatedResponse,
    MessageResponse,
)
from mealbook.store import Store

logger = get_logger(__name__)

router = APIRouter(tags=["meal-plans"])

NOT_FOUND = "Meal plan not found"


@router.get("/meal_plans", response_model=list[MealPlan])
async def list_meal_plans(store: Store = Depends(get_store)) -> list[MealPlan]:
    return await store.list_meal_plans()


@router.get(
    "/meal_plans/{plan_id}",
    response_model=MealPlan,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def get_meal_plan(
    plan_id: str,
    store: Store = Depends(get_store),
) -> MealPlan:
    plan = await store.get_meal_plan(plan_id)
    if plan is None:
        raise NotFoundError(NOT_FOUND)
    return plan


@router.post(
    "/meal_plans",
    response_model=MealPlanCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def create_meal_plan(
    request: MealPlanCreate,
    store: Store = Depends(get_store),
) -> MealPlanCreatedResponse:
    """
    Create a meal plan.

    Every id in ``recipe_ids`` must belong to an existing recipe, otherwise
    the request is rejected with 422.
    """
    logger.info(f"Creating meal plan {request.name!r} for {request.date}")
    plan = await store.create_meal_plan(request)
    return MealPlanCreatedResponse(message="Meal plan created successfully", meal_plan=plan)


@router.delete(
    "/meal_plans/{plan_id}",
    response_model=MessageResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
async def delete_meal_plan(
    plan_id: str,
    store: Store = Depends(get_store),
) -> MessageResponse:
    result = await store.delete_meal_plan(plan_id)
    if result.changes == 0:
        raise NotFoundError(NOT_FOUND)

    logger.info(f"Deleted meal plan {plan_id}")
    return MessageResponse(message="Meal plan deleted successfully")
