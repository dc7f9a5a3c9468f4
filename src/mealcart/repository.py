"""Repositories for recipe and meal plan persistence."""

import uuid
from collections.abc import Sequence
from typing import Any

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from mealcart.database import get_db
from mealcart.logging_config import get_logger
from mealcart.models import MealPlan, MealPlanRecipe, Recipe

logger = get_logger(__name__)


class RecipeRepository:
    """Recipe storage operations."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_for_user(self, user_id: str) -> list[Recipe]:
        result = await self.db.execute(
            select(Recipe).where(Recipe.created_by == user_id).order_by(Recipe.created_at)
        )
        return list(result.scalars().all())

    async def get(self, recipe_id: str) -> Recipe | None:
        result = await self.db.execute(select(Recipe).where(Recipe.id == recipe_id))
        return result.scalar_one_or_none()

    async def get_many(self, recipe_ids: Sequence[str]) -> dict[str, Recipe]:
        """Fetch recipes by id. Missing ids are simply absent from the result."""
        if not recipe_ids:
            return {}
        result = await self.db.execute(select(Recipe).where(Recipe.id.in_(set(recipe_ids))))
        return {recipe.id: recipe for recipe in result.scalars().all()}

    async def create(
        self,
        user_id: str,
        name: str,
        instructions: str,
        ingredients: list[dict[str, Any]],
    ) -> Recipe:
        recipe = Recipe(
            id=str(uuid.uuid4()),
            name=name,
            instructions=instructions,
            ingredients=ingredients,
            created_by=user_id,
        )
        self.db.add(recipe)
        await self.db.commit()
        await self.db.refresh(recipe)
        logger.info(f"Created recipe {recipe.id}")
        return recipe

    async def update(
        self,
        recipe: Recipe,
        name: str,
        instructions: str,
        ingredients: list[dict[str, Any]],
    ) -> Recipe:
        recipe.name = name
        recipe.instructions = instructions
        # Assign a new list so the JSON column is flagged dirty
        recipe.ingredients = list(ingredients)
        await self.db.commit()
        await self.db.refresh(recipe)
        return recipe

    async def delete(self, recipe: Recipe) -> None:
        await self.db.delete(recipe)
        await self.db.commit()


class MealPlanRepository:
    """Meal plan storage operations. Plans are loaded with their recipes in order."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _select_with_recipes(self):
        return select(MealPlan).options(
            selectinload(MealPlan.entries).selectinload(MealPlanRecipe.recipe)
        )

    async def list_for_user(self, user_id: str) -> list[MealPlan]:
        result = await self.db.execute(
            self._select_with_recipes()
            .where(MealPlan.created_by == user_id)
            .order_by(MealPlan.created_at.desc())
        )
        return list(result.scalars().all())

    async def get(self, plan_id: str) -> MealPlan | None:
        result = await self.db.execute(self._select_with_recipes().where(MealPlan.id == plan_id))
        return result.scalar_one_or_none()

    async def create(self, user_id: str, title: str, recipe_ids: Sequence[str]) -> MealPlan:
        plan_id = str(uuid.uuid4())
        plan = MealPlan(id=plan_id, title=title, created_by=user_id)
        plan.entries = [
            MealPlanRecipe(recipe_id=recipe_id, position=position)
            for position, recipe_id in enumerate(recipe_ids)
        ]
        self.db.add(plan)
        await self.db.commit()
        logger.info(f"Created meal plan {plan_id} with {len(recipe_ids)} recipes")

        # Re-fetch so recipes are eagerly loaded
        return await self._reload(plan_id)

    async def update(self, plan: MealPlan, title: str, recipe_ids: Sequence[str]) -> MealPlan:
        plan.title = title
        plan.entries = [
            MealPlanRecipe(recipe_id=recipe_id, position=position)
            for position, recipe_id in enumerate(recipe_ids)
        ]
        await self.db.commit()
        return await self._reload(plan.id)

    async def delete(self, plan: MealPlan) -> None:
        await self.db.delete(plan)
        await self.db.commit()

    async def _reload(self, plan_id: str) -> MealPlan:
        self.db.expunge_all()
        result = await self.db.execute(self._select_with_recipes().where(MealPlan.id == plan_id))
        return result.scalar_one()


def get_recipe_repository(db: AsyncSession = Depends(get_db)) -> RecipeRepository:
    """Dependency providing a recipe repository."""
    return RecipeRepository(db)


def get_meal_plan_repository(db: AsyncSession = Depends(get_db)) -> MealPlanRepository:
    """Dependency providing a meal plan repository."""
    return MealPlanRepository(db)
