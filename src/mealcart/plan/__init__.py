"""Shopping list consolidation and costing."""

from mealcart.plan.costing import (
    CostBreakdown,
    CostLine,
    cost_breakdown,
    item_cost,
    priced_currencies,
    total_cost,
)
from mealcart.plan.domain import (
    DEFAULT_CURRENCY,
    ConsolidatedLineItem,
    Ingredient,
    MealPlan,
    Recipe,
)
from mealcart.plan.quantity import (
    ParsedQuantity,
    format_magnitude,
    ingredient_key,
    parse_quantity,
)
from mealcart.plan.shopping_list import (
    ShoppingList,
    build_shopping_list,
    consolidate,
    consolidate_recipes,
    merge_quantities,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "ConsolidatedLineItem",
    "CostBreakdown",
    "CostLine",
    "Ingredient",
    "MealPlan",
    "ParsedQuantity",
    "Recipe",
    "ShoppingList",
    "build_shopping_list",
    "consolidate",
    "consolidate_recipes",
    "cost_breakdown",
    "format_magnitude",
    "ingredient_key",
    "item_cost",
    "merge_quantities",
    "parse_quantity",
    "priced_currencies",
    "total_cost",
]
