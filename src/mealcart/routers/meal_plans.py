"""API routes for meal plans and their shopping lists."""

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from mealcart.auth import ensure_owner, get_current_user_id
from mealcart.logging_config import get_logger
from mealcart.models import MealPlan
from mealcart.plan.costing import item_cost
from mealcart.plan.domain import MealPlan as MealPlanValue
from mealcart.plan.domain import Recipe as RecipeValue
from mealcart.plan.shopping_list import build_shopping_list
from mealcart.repository import (
    MealPlanRepository,
    RecipeRepository,
    get_meal_plan_repository,
    get_recipe_repository,
)
from mealcart.schemas import RecipeResponse, ShoppingListItem

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/meal-plans", tags=["meal-plans"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class MealPlanRequest(BaseModel):
    """Create or replace a meal plan. Recipe ids are ordered and may repeat."""

    title: str = Field(min_length=1)
    recipe_ids: list[str]


class MealPlanResponse(BaseModel):
    """Meal plan with its recipes resolved in plan order."""

    id: str
    title: str
    recipe_ids: list[str]
    recipes: list[RecipeResponse]
    created_by: str
    created_at: datetime | None = None


class MealPlanListResponse(BaseModel):
    """Meal plans owned by the caller."""

    plans: list[MealPlanResponse]
    total: int


class ShoppingListResponse(BaseModel):
    """Consolidated shopping list for a meal plan."""

    meal_plan_id: str
    title: str
    items: list[ShoppingListItem]
    total_cost: float
    currencies: list[str] = Field(default_factory=list)
    priced_items_count: int = 0
    unpriced_items_count: int = 0


# =============================================================================
# Helper Functions
# =============================================================================


def _plan_response(plan: MealPlan) -> MealPlanResponse:
    return MealPlanResponse(
        id=plan.id,
        title=plan.title,
        recipe_ids=[entry.recipe_id for entry in plan.entries],
        recipes=[RecipeResponse.from_record(entry.recipe) for entry in plan.entries if entry.recipe],
        created_by=plan.created_by,
        created_at=plan.created_at,
    )


def _plan_value(plan: MealPlan) -> MealPlanValue:
    """Convert a stored plan into the value consumed by the shopping list code."""
    return MealPlanValue(
        title=plan.title,
        recipes=tuple(
            RecipeValue.from_record(entry.recipe) for entry in plan.entries if entry.recipe
        ),
    )


async def get_owned_plan(
    plan_id: str,
    user_id: str,
    repository: MealPlanRepository,
) -> MealPlan:
    """Load a meal plan, raising 404 if it is missing and 403 if it belongs to someone else."""
    try:
        plan = await repository.get(plan_id)
    except Exception as e:
        logger.error(f"Failed to fetch meal plan {plan_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get meal plan",
        )

    if not plan:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Meal plan {plan_id} not found",
        )

    ensure_owner(plan.created_by, user_id, "meal plans")
    return plan


async def validate_recipe_ids(
    recipe_ids: list[str],
    user_id: str,
    recipes: RecipeRepository,
) -> None:
    """Reject recipe ids that do not exist or are not visible to the caller."""
    try:
        found = await recipes.get_many(recipe_ids)
    except Exception as e:
        logger.error(f"Failed to resolve recipes: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to resolve recipes",
        )

    unknown = sorted(
        {rid for rid in recipe_ids if rid not in found or found[rid].created_by != user_id}
    )
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown recipe ids: {', '.join(unknown)}",
        )


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=MealPlanResponse, status_code=status.HTTP_201_CREATED)
async def create_meal_plan(
    request: MealPlanRequest,
    user_id: str = Depends(get_current_user_id),
    plans: MealPlanRepository = Depends(get_meal_plan_repository),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> MealPlanResponse:
    """Save a new meal plan owned by the caller."""
    logger.info(f"Creating meal plan '{request.title}' with {len(request.recipe_ids)} recipes")

    await validate_recipe_ids(request.recipe_ids, user_id, recipes)

    try:
        plan = await plans.create(user_id, request.title, request.recipe_ids)
    except Exception as e:
        logger.error(f"Failed to save meal plan: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save meal plan",
        )

    return _plan_response(plan)


@router.get("", response_model=MealPlanListResponse)
async def list_meal_plans(
    user_id: str = Depends(get_current_user_id),
    plans: MealPlanRepository = Depends(get_meal_plan_repository),
) -> MealPlanListResponse:
    """List meal plans created by the caller, newest first."""
    try:
        found = await plans.list_for_user(user_id)
    except Exception as e:
        logger.error(f"Failed to load meal plans: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load meal plans",
        )

    logger.info(f"Found {len(found)} meal plans")
    return MealPlanListResponse(plans=[_plan_response(plan) for plan in found], total=len(found))


@router.get("/{plan_id}", response_model=MealPlanResponse)
async def get_meal_plan(
    plan_id: str,
    user_id: str = Depends(get_current_user_id),
    plans: MealPlanRepository = Depends(get_meal_plan_repository),
) -> MealPlanResponse:
    """Get a single meal plan with its recipes."""
    plan = await get_owned_plan(plan_id, user_id, plans)
    return _plan_response(plan)


@router.put("/{plan_id}", response_model=MealPlanResponse)
async def update_meal_plan(
    plan_id: str,
    request: MealPlanRequest,
    user_id: str = Depends(get_current_user_id),
    plans: MealPlanRepository = Depends(get_meal_plan_repository),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> MealPlanResponse:
    """Replace a meal plan's title and recipe list."""
    plan = await get_owned_plan(plan_id, user_id, plans)
    await validate_recipe_ids(request.recipe_ids, user_id, recipes)

    try:
        plan = await plans.update(plan, request.title, request.recipe_ids)
    except Exception as e:
        logger.error(f"Failed to update meal plan {plan_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update meal plan",
        )

    logger.info(f"Updated meal plan {plan_id}")
    return _plan_response(plan)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meal_plan(
    plan_id: str,
    user_id: str = Depends(get_current_user_id),
    plans: MealPlanRepository = Depends(get_meal_plan_repository),
) -> None:
    """Delete a meal plan. Its recipes are kept."""
    plan = await get_owned_plan(plan_id, user_id, plans)

    try:
        await plans.delete(plan)
    except Exception as e:
        logger.error(f"Failed to delete meal plan {plan_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete meal plan",
        )

    logger.info(f"Deleted meal plan {plan_id}")


@router.get("/{plan_id}/shopping-list", response_model=ShoppingListResponse)
async def get_shopping_list(
    plan_id: str,
    user_id: str = Depends(get_current_user_id),
    plans: MealPlanRepository = Depends(get_meal_plan_repository),
) -> ShoppingListResponse:
    """
    Get the consolidated shopping list for a meal plan.

    Ingredients sharing a name (ignoring case and surrounding whitespace) are
    merged into one item, in the order they first appear in the plan. Each
    item lists the recipes that contributed to it.
    """
    plan = await get_owned_plan(plan_id, user_id, plans)
    shopping_list = build_shopping_list(_plan_value(plan))

    logger.info(
        f"Shopping list for plan {plan_id}: {len(shopping_list.items)} items, "
        f"total cost: {shopping_list.total_cost:.2f}"
    )

    return ShoppingListResponse(
        meal_plan_id=plan.id,
        title=shopping_list.title,
        items=[
            ShoppingListItem.from_line_item(item, item_cost(item))
            for item in shopping_list.items
        ],
        total_cost=shopping_list.total_cost,
        currencies=shopping_list.currencies,
        priced_items_count=shopping_list.priced_items_count,
        unpriced_items_count=shopping_list.unpriced_items_count,
    )
