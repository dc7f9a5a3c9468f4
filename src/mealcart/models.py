"""SQLAlchemy database models."""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mealcart.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Recipe(Base):
    """Recipe with a free-text ingredient list and instructions."""

    __tablename__ = "recipes"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(String, nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # List of {name, quantity, unit_price, currency, image, source_id}
    ingredients: Mapped[list] = mapped_column(JSON, default=list)
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow, onupdate=_utcnow)

    plan_entries: Mapped[list["MealPlanRecipe"]] = relationship(
        "MealPlanRecipe", back_populates="recipe", cascade="all, delete-orphan"
    )

    __table_args__ = (Index("idx_recipes_created_by", "created_by"),)


class MealPlan(Base):
    """A titled meal plan owned by a user."""

    __tablename__ = "meal_plans"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    title: Mapped[str] = mapped_column(String, nullable=False)
    created_by: Mapped[str] = mapped_column(String, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=_utcnow)

    entries: Mapped[list["MealPlanRecipe"]] = relationship(
        "MealPlanRecipe",
        back_populates="plan",
        order_by="MealPlanRecipe.position",
        cascade="all, delete-orphan",
    )

    __table_args__ = (Index("idx_meal_plans_created_by", "created_by"),)

    @property
    def recipe_ids(self) -> list[str]:
        return [entry.recipe_id for entry in self.entries]


class MealPlanRecipe(Base):
    """Ordered join between meal plans and recipes. A recipe may appear more than once."""

    __tablename__ = "meal_plan_recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    meal_plan_id: Mapped[str] = mapped_column(
        String, ForeignKey("meal_plans.id", ondelete="CASCADE"), nullable=False
    )
    recipe_id: Mapped[str] = mapped_column(
        String, ForeignKey("recipes.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)

    plan: Mapped["MealPlan"] = relationship("MealPlan", back_populates="entries")
    recipe: Mapped["Recipe"] = relationship("Recipe", back_populates="plan_entries")

    __table_args__ = (Index("idx_meal_plan_recipes_plan_id", "meal_plan_id"),)
