"""Pytest configuration and shared fixtures."""

import uuid
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pytest
from fastapi.testclient import TestClient

from mealcart.main import app
from mealcart.plan.domain import Ingredient, MealPlan, Recipe
from mealcart.repository import get_meal_plan_repository, get_recipe_repository

# =============================================================================
# Pytest Configuration
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (require external services)"
    )
    config.addinivalue_line("markers", "slow: marks tests as slow running")


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def pancakes():
    """Breakfast recipe with a mix of priced and unpriced ingredients."""
    return Recipe(
        name="Pancakes",
        ingredients=(
            Ingredient(name="Flour", quantity="2 cups", unit_price=0.5, currency="USD"),
            Ingredient(name="Milk", quantity="1.5 cups", unit_price=1.0),
            Ingredient(name="Eggs", quantity="2"),
            Ingredient(name="Salt", quantity="a pinch"),
        ),
    )


@pytest.fixture
def bread():
    """Bread recipe sharing flour and salt with pancakes."""
    return Recipe(
        name="Bread",
        ingredients=(
            Ingredient(name=" flour ", quantity="3 cups", unit_price=0.75, currency="CAD"),
            Ingredient(name="Yeast", quantity="1 packet", unit_price=0.99),
            Ingredient(name="Salt", quantity="1 tsp", unit_price=0.05),
            Ingredient(name="Water", quantity="1.25 cups"),
        ),
    )


@pytest.fixture
def weekend_plan(pancakes, bread):
    """Meal plan combining pancakes and bread."""
    return MealPlan(title="Weekend", recipes=(pancakes, bread))


@pytest.fixture
def mock_bluecart_search_response():
    """Sample search response from the BlueCart API."""
    return {
        "request_info": {
            "success": True,
            "credits_used": 1,
            "credits_remaining": 99,
            "credits_reset_at": "2026-11-01T00:00:00.000Z",
        },
        "search_results": [
            {
                "product": {
                    "title": "Great Value All-Purpose Flour, 5 lb",
                    "item_id": "10535089",
                    "link": "https://www.walmart.com/ip/10535089",
                    "images": [
                        "https://i5.walmartimages.com/flour-1.jpeg",
                        "https://i5.walmartimages.com/flour-2.jpeg",
                    ],
                    "rating": 4.7,
                },
                "offers": {"primary": {"price": 2.92, "currency": "USD"}},
            },
            {
                "product": {
                    "title": "Gold Medal Bread Flour, 5 lb",
                    "item_id": "10291502",
                    "link": "https://www.walmart.com/ip/10291502",
                    "images": [],
                },
                "offers": {},
            },
            {
                "product": {"title": "", "item_id": "0"},
                "offers": {"primary": {"price": 1.0, "currency": "USD"}},
            },
        ],
    }


# =============================================================================
# In-memory Repositories
# =============================================================================


@dataclass
class FakeRecipeRecord:
    """Stand-in for the Recipe table row."""

    id: str
    name: str
    instructions: str
    ingredients: list[dict[str, Any]]
    created_by: str
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class FakePlanEntry:
    """Stand-in for the MealPlanRecipe join row."""

    recipe_id: str
    recipe: FakeRecipeRecord | None


@dataclass
class FakeMealPlanRecord:
    """Stand-in for the MealPlan table row."""

    id: str
    title: str
    created_by: str
    entries: list[FakePlanEntry] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)


class FakeRecipeRepository:
    """Dict-backed replacement for RecipeRepository."""

    def __init__(self):
        self.recipes: dict[str, FakeRecipeRecord] = {}

    async def list_for_user(self, user_id: str) -> list[FakeRecipeRecord]:
        return [r for r in self.recipes.values() if r.created_by == user_id]

    async def get(self, recipe_id: str) -> FakeRecipeRecord | None:
        return self.recipes.get(recipe_id)

    async def get_many(self, recipe_ids: Sequence[str]) -> dict[str, FakeRecipeRecord]:
        return {rid: self.recipes[rid] for rid in recipe_ids if rid in self.recipes}

    async def create(self, user_id, name, instructions, ingredients) -> FakeRecipeRecord:
        recipe = FakeRecipeRecord(
            id=str(uuid.uuid4()),
            name=name,
            instructions=instructions,
            ingredients=list(ingredients),
            created_by=user_id,
        )
        self.recipes[recipe.id] = recipe
        return recipe

    async def update(self, recipe, name, instructions, ingredients) -> FakeRecipeRecord:
        recipe.name = name
        recipe.instructions = instructions
        recipe.ingredients = list(ingredients)
        return recipe

    async def delete(self, recipe) -> None:
        del self.recipes[recipe.id]


class FakeMealPlanRepository:
    """Dict-backed replacement for MealPlanRepository."""

    def __init__(self, recipes: FakeRecipeRepository):
        self.recipe_store = recipes
        self.plans: dict[str, FakeMealPlanRecord] = {}

    def _entries(self, recipe_ids: Sequence[str]) -> list[FakePlanEntry]:
        return [
            FakePlanEntry(recipe_id=rid, recipe=self.recipe_store.recipes.get(rid))
            for rid in recipe_ids
        ]

    async def list_for_user(self, user_id: str) -> list[FakeMealPlanRecord]:
        return [p for p in self.plans.values() if p.created_by == user_id]

    async def get(self, plan_id: str) -> FakeMealPlanRecord | None:
        return self.plans.get(plan_id)

    async def create(self, user_id, title, recipe_ids) -> FakeMealPlanRecord:
        plan = FakeMealPlanRecord(
            id=str(uuid.uuid4()),
            title=title,
            created_by=user_id,
            entries=self._entries(recipe_ids),
        )
        self.plans[plan.id] = plan
        return plan

    async def update(self, plan, title, recipe_ids) -> FakeMealPlanRecord:
        plan.title = title
        plan.entries = self._entries(recipe_ids)
        return plan

    async def delete(self, plan) -> None:
        del self.plans[plan.id]


@pytest.fixture
def recipe_repository():
    """Empty in-memory recipe repository."""
    return FakeRecipeRepository()


@pytest.fixture
def meal_plan_repository(recipe_repository):
    """Empty in-memory meal plan repository sharing the recipe store."""
    return FakeMealPlanRepository(recipe_repository)


@pytest.fixture
def client(recipe_repository, meal_plan_repository):
    """Test client with repositories swapped for in-memory fakes."""
    app.dependency_overrides[get_recipe_repository] = lambda: recipe_repository
    app.dependency_overrides[get_meal_plan_repository] = lambda: meal_plan_repository
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    """Headers identifying the default test user."""
    return {"X-User-Id": "user-1"}


@pytest.fixture
def other_user_headers():
    """Headers identifying a second user."""
    return {"X-User-Id": "user-2"}
