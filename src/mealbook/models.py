"""SQLAlchemy database models."""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from mealbook.database import Base


class Recipe(Base):
    """Recipe with a flat ingredient list and instructions."""

    __tablename__ = "recipes"
    # AUTOINCREMENT keeps SQLite from reusing the ids of deleted rows
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    category: Mapped[str] = mapped_column(String, nullable=False)  # "dinner", "lunch", ...
    instructions: Mapped[str] = mapped_column(Text, nullable=False)
    ingredients: Mapped[str] = mapped_column(Text, nullable=False)  # comma-delimited
    prep_time: Mapped[int] = mapped_column(Integer, nullable=False)  # minutes


class MealPlan(Base):
    """Named meal plan referencing recipes by id."""

    __tablename__ = "meal_plans"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    date: Mapped[str] = mapped_column(String, nullable=False)
    recipe_ids: Mapped[str] = mapped_column(Text, nullable=False)  # JSON list, e.g. "[1, 2]"
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
