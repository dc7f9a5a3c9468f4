"""API routes for recipes and their costs."""

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from mealcart.auth import ensure_owner, get_current_user_id
from mealcart.logging_config import get_logger
from mealcart.models import Recipe
from mealcart.plan.costing import cost_breakdown
from mealcart.plan.domain import Ingredient
from mealcart.plan.domain import Recipe as RecipeValue
from mealcart.repository import RecipeRepository, get_recipe_repository
from mealcart.schemas import CostSummary, IngredientSchema, ProductSchema, RecipeResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/recipes", tags=["recipes"])


# =============================================================================
# Request/Response Schemas
# =============================================================================


class RecipeRequest(BaseModel):
    """Create or replace a recipe."""

    name: str = Field(min_length=1)
    instructions: str
    ingredients: list[IngredientSchema]


class RecipeListResponse(BaseModel):
    """Recipes owned by the caller."""

    recipes: list[RecipeResponse]
    total: int


class RecipeCostResponse(CostSummary):
    """Per-recipe cost breakdown."""

    recipe_id: str
    recipe_name: str


class IngredientFromProductRequest(BaseModel):
    """Add an ingredient built from a product-search result."""

    product: ProductSchema
    quantity: str


# =============================================================================
# Helper Functions
# =============================================================================


async def get_owned_recipe(
    recipe_id: str,
    user_id: str,
    repository: RecipeRepository,
) -> Recipe:
    """Load a recipe, raising 404 if it is missing and 403 if it belongs to someone else."""
    try:
        recipe = await repository.get(recipe_id)
    except Exception as e:
        logger.error(f"Failed to fetch recipe {recipe_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch recipe",
        )

    if not recipe:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {recipe_id} not found",
        )

    ensure_owner(recipe.created_by, user_id, "recipes")
    return recipe


def _ingredient_dicts(ingredients: list[IngredientSchema]) -> list[dict]:
    return [ingredient.to_domain().to_dict() for ingredient in ingredients]


# =============================================================================
# Endpoints
# =============================================================================


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
async def create_recipe(
    request: RecipeRequest,
    user_id: str = Depends(get_current_user_id),
    repository: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeResponse:
    """Save a new recipe owned by the caller."""
    logger.info(f"Creating recipe '{request.name}' with {len(request.ingredients)} ingredients")

    try:
        recipe = await repository.create(
            user_id=user_id,
            name=request.name,
            instructions=request.instructions,
            ingredients=_ingredient_dicts(request.ingredients),
        )
    except Exception as e:
        logger.error(f"Failed to save recipe: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save recipe",
        )

    return RecipeResponse.from_record(recipe)


@router.get("", response_model=RecipeListResponse)
async def list_recipes(
    user_id: str = Depends(get_current_user_id),
    repository: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeListResponse:
    """List recipes created by the caller."""
    try:
        recipes = await repository.list_for_user(user_id)
    except Exception as e:
        logger.error(f"Failed to load recipes: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load recipes",
        )

    logger.info(f"Found {len(recipes)} recipes")
    return RecipeListResponse(
        recipes=[RecipeResponse.from_record(recipe) for recipe in recipes],
        total=len(recipes),
    )


@router.get("/{recipe_id}", response_model=RecipeResponse)
async def get_recipe(
    recipe_id: str,
    user_id: str = Depends(get_current_user_id),
    repository: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeResponse:
    """Get a single recipe."""
    recipe = await get_owned_recipe(recipe_id, user_id, repository)
    return RecipeResponse.from_record(recipe)


@router.put("/{recipe_id}", response_model=RecipeResponse)
async def update_recipe(
    recipe_id: str,
    request: RecipeRequest,
    user_id: str = Depends(get_current_user_id),
    repository: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeResponse:
    """Replace a recipe's name, instructions and ingredients. The creator is kept."""
    recipe = await get_owned_recipe(recipe_id, user_id, repository)

    try:
        recipe = await repository.update(
            recipe,
            name=request.name,
            instructions=request.instructions,
            ingredients=_ingredient_dicts(request.ingredients),
        )
    except Exception as e:
        logger.error(f"Failed to update recipe {recipe_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update recipe",
        )

    logger.info(f"Updated recipe {recipe_id}")
    return RecipeResponse.from_record(recipe)


@router.delete("/{recipe_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_recipe(
    recipe_id: str,
    user_id: str = Depends(get_current_user_id),
    repository: RecipeRepository = Depends(get_recipe_repository),
) -> None:
    """Delete a recipe."""
    recipe = await get_owned_recipe(recipe_id, user_id, repository)

    try:
        await repository.delete(recipe)
    except Exception as e:
        logger.error(f"Failed to delete recipe {recipe_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete recipe",
        )

    logger.info(f"Deleted recipe {recipe_id}")


@router.get("/{recipe_id}/cost", response_model=RecipeCostResponse)
async def get_recipe_cost(
    recipe_id: str,
    user_id: str = Depends(get_current_user_id),
    repository: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeCostResponse:
    """
    Cost of a single recipe.

    Each priced ingredient costs its unit price times the number leading its
    quantity; unpriced ingredients cost nothing.
    """
    record = await get_owned_recipe(recipe_id, user_id, repository)
    recipe = RecipeValue.from_record(record)

    summary = CostSummary.from_breakdown(cost_breakdown(recipe.ingredients))
    return RecipeCostResponse(
        recipe_id=record.id,
        recipe_name=recipe.name,
        **summary.model_dump(),
    )


@router.post(
    "/{recipe_id}/ingredients/from-product",
    response_model=RecipeResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_ingredient_from_product(
    recipe_id: str,
    request: IngredientFromProductRequest,
    user_id: str = Depends(get_current_user_id),
    repository: RecipeRepository = Depends(get_recipe_repository),
) -> RecipeResponse:
    """
    Append an ingredient picked from product search results.

    The product's name, price, currency, image and id are stored verbatim.
    """
    recipe = await get_owned_recipe(recipe_id, user_id, repository)
    ingredient = Ingredient.from_product(request.product.model_dump(), request.quantity)

    try:
        recipe = await repository.update(
            recipe,
            name=recipe.name,
            instructions=recipe.instructions,
            ingredients=[*(recipe.ingredients or []), ingredient.to_dict()],
        )
    except Exception as e:
        logger.error(f"Failed to add ingredient to recipe {recipe_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to add ingredient",
        )

    logger.info(f"Added product {ingredient.source_id} to recipe {recipe_id}")
    return RecipeResponse.from_record(recipe)
