"""Data access for recipes and meal plans.

Every public operation runs in its own session and commits at most once.
SQLAlchemy errors are classified here as ``StoreFailure``; absence is never an
error at this layer (``get_*`` returns ``None``, ``delete_*`` reports the
number of removed rows).
"""

import asyncio
import re
from collections.abc import AsyncIterator
from contextlib import AbstractAsyncContextManager, asynccontextmanager, nullcontext
from dataclasses import dataclass
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

from mealbook.config import Settings
from mealbook.database import Base, build_engine
from mealbook.errors import StoreFailure, ValidationFailure
from mealbook.logging_config import get_logger
from mealbook.models import MealPlan as MealPlanRow
from mealbook.models import Recipe as RecipeRow
from mealbook.schemas import MealPlan, MealPlanCreate, Recipe, RecipeCreate

logger = get_logger(__name__)

# Signed 64-bit, the range of a SQLite INTEGER
MIN_ID = -(2**63)
MAX_ID = 2**63 - 1

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

SAMPLE_RECIPES: list[dict[str, Any]] = [
    {
        "name": "Spaghetti Bolognese",
        "category": "dinner",
        "instructions": "Cook spaghetti, prepare sauce, mix together.",
        "ingredients": "spaghetti, minced meat, tomato sauce",
        "prep_time": 30,
    },
    {
        "name": "Caesar Salad",
        "category": "lunch",
        "instructions": "Toss lettuce with dressing and croutons.",
        "ingredients": "romaine lettuce, croutons, Caesar dressing",
        "prep_time": 15,
    },
    {
        "name": "Chicken Curry",
        "category": "dinner",
        "instructions": "Cook chicken, add curry powder and coconut milk.",
        "ingredients": "chicken, curry powder, coconut milk",
        "prep_time": 40,
    },
    {
        "name": "Vegetable Stir Fry",
        "category": "lunch",
        "instructions": "Stir fry vegetables with soy sauce and garlic.",
        "ingredients": "mixed vegetables, soy sauce, garlic",
        "prep_time": 20,
    },
]

SAMPLE_MEAL_PLANS: list[dict[str, Any]] = [
    {
        "name": "Weekly Dinner Plan",
        "date": "2023-10-01",
        "recipe_ids": "[1, 2]",
        "notes": "Includes spaghetti bolognese",
    },
    {
        "name": "Weekly Lunch Plan",
        "date": "2023-10-01",
        "recipe_ids": "[3, 4]",
        "notes": "Includes Caesar salad and vegetable stir fry",
    },
]


@dataclass(frozen=True)
class DeleteResult:
    """Outcome of a delete: how many rows were actually removed (0 or 1)."""

    changes: int


def coerce_id(value: Any) -> int | None:
    """Turn a path identifier into a primary key, or None if it cannot match."""
    if isinstance(value, bool):
        return None
    if not isinstance(value, int):
        text = str(value).strip()
        if not _ID_PATTERN.fullmatch(text):
            return None
        value = int(text)
    if not MIN_ID <= value <= MAX_ID:
        return None
    return value


class Store:
    """Sole owner of persisted recipe and meal plan records."""

    def __init__(self, engine: AsyncEngine, seed: bool = True):
        self.engine = engine
        self.seed = seed
        self._sessions = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
        self._ready = asyncio.Event()
        # Sessions on a pinned single connection must not overlap
        self._lock = asyncio.Lock() if isinstance(engine.sync_engine.pool, StaticPool) else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "Store":
        engine = build_engine(settings.database_url, echo=settings.sql_echo)
        return cls(engine, seed=settings.seed_sample_data)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def start(self) -> None:
        """Create tables, seed sample rows if enabled, then signal readiness."""
        async with self._exclusive(), self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables initialized")

        if self.seed:
            await self._seed()

        self._ready.set()

    async def _seed(self) -> None:
        async with self._session("seeding sample data") as session:
            recipe_count = await session.scalar(select(func.count()).select_from(RecipeRow))
            if recipe_count:
                logger.info(f"Skipping seed, {recipe_count} recipes already present")
                return

            session.add_all(RecipeRow(**fields) for fields in SAMPLE_RECIPES)
            await session.flush()

            plan_count = await session.scalar(select(func.count()).select_from(MealPlanRow))
            if not plan_count:
                session.add_all(MealPlanRow(**fields) for fields in SAMPLE_MEAL_PLANS)

            await session.commit()

        logger.info(
            f"Seeded {len(SAMPLE_RECIPES)} sample recipes and "
            f"{len(SAMPLE_MEAL_PLANS)} sample meal plans"
        )

    @property
    def is_ready(self) -> bool:
        return self._ready.is_set()

    async def wait_until_ready(self) -> None:
        """Block until ``start`` has finished. Resolves exactly once."""
        await self._ready.wait()

    async def close(self) -> None:
        await self.engine.dispose()
        logger.info("Database connection closed")

    def _exclusive(self) -> AbstractAsyncContextManager:
        return self._lock if self._lock is not None else nullcontext()

    @asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        async with self._exclusive(), self._sessions() as session:
            try:
                yield session
            except (SQLAlchemyError, OverflowError) as e:
                logger.error(f"Store failure while {action}: {e}")
                raise StoreFailure() from e

    # =========================================================================
    # Recipes
    # =========================================================================

    async def list_recipes(self, category: str | None = None) -> list[Recipe]:
        """All recipes in id order, optionally only those in ``category``."""
        query = select(RecipeRow).order_by(RecipeRow.id)
        if category is not None:
            query = query.where(RecipeRow.category == category)

        async with self._session("listing recipes") as session:
            result = await session.execute(query)
            return [Recipe.model_validate(row) for row in result.scalars()]

    async def get_recipe(self, recipe_id: Any) -> Recipe | None:
        pk = coerce_id(recipe_id)
        if pk is None:
            return None

        async with self._session(f"fetching recipe {pk}") as session:
            row = await session.get(RecipeRow, pk)
            return Recipe.model_validate(row) if row else None

    async def create_recipe(self, data: RecipeCreate) -> Recipe:
        row = RecipeRow(**data.model_dump())
        async with self._session("creating recipe") as session:
            session.add(row)
            await session.commit()
            logger.info(f"Created recipe {row.id}: {row.name}")
            return Recipe.model_validate(row)

    async def delete_recipe(self, recipe_id: Any) -> DeleteResult:
        pk = coerce_id(recipe_id)
        if pk is None:
            return DeleteResult(changes=0)

        async with self._session(f"deleting recipe {pk}") as session:
            result = await session.execute(delete(RecipeRow).where(RecipeRow.id == pk))
            await session.commit()
            return DeleteResult(changes=result.rowcount)

    # =========================================================================
    # Meal plans
    # =========================================================================

    async def list_meal_plans(self) -> list[MealPlan]:
        async with self._session("listing meal plans") as session:
            result = await session.execute(select(MealPlanRow).order_by(MealPlanRow.id))
            return [MealPlan.model_validate(row) for row in result.scalars()]

    async def get_meal_plan(self, plan_id: Any) -> MealPlan | None:
        pk = coerce_id(plan_id)
        if pk is None:
            return None

        async with self._session(f"fetching meal plan {pk}") as session:
            row = await session.get(MealPlanRow, pk)
            return MealPlan.model_validate(row) if row else None

    async def create_meal_plan(self, data: MealPlanCreate) -> MealPlan:
        """Insert a meal plan after checking every referenced recipe exists.

        The existence check and the insert share one transaction.
        """
        wanted = set(data.recipe_id_list)
        row = MealPlanRow(**data.model_dump())

        async with self._session("creating meal plan") as session:
            if wanted:
                result = await session.execute(
                    select(RecipeRow.id).where(RecipeRow.id.in_(sorted(wanted)))
                )
                missing = sorted(wanted - set(result.scalars()))
                if missing:
                    raise ValidationFailure(
                        "Meal plan references unknown recipes: "
                        + ", ".join(str(recipe_id) for recipe_id in missing),
                        details=[{"field": "recipe_ids", "missing": missing}],
                    )

            session.add(row)
            await session.commit()
            logger.info(f"Created meal plan {row.id}: {row.name}")
            return MealPlan.model_validate(row)

    async def delete_meal_plan(self, plan_id: Any) -> DeleteResult:
        pk = coerce_id(plan_id)
        if pk is None:
            return DeleteResult(changes=0)

        async with self._session(f"deleting meal plan {pk}") as session:
            result = await session.execute(delete(MealPlanRow).where(MealPlanRow.id == pk))
            await session.commit()
            return DeleteResult(changes=result.rowcount)
