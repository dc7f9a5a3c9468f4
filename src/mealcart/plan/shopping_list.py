"""Shopping list consolidation from meal plans."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from mealcart.logging_config import get_logger
from mealcart.plan.costing import priced_currencies, total_cost
from mealcart.plan.domain import ConsolidatedLineItem, Ingredient, MealPlan, Recipe
from mealcart.plan.quantity import format_magnitude, ingredient_key, parse_quantity

logger = get_logger(__name__)


def merge_quantities(existing: str, incoming: str) -> str:
    """
    Combine an accumulated quantity with an incoming one.

    Magnitudes are added when the incoming text carries a unit token and the
    existing text starts with a number; the incoming unit is used for display.
    Units are not compared, so "2 cups" + "1 tbsp" gives "3 tbsp".
    Anything else is joined verbatim with " + ".
    """
    current = parse_quantity(existing)
    added = parse_quantity(incoming)

    if added.has_unit and current.numeric:
        return f"{format_magnitude(current.magnitude + added.magnitude)} {added.unit}"

    return f"{existing} + {incoming}"


def _new_line_item(key: str, ingredient: Ingredient, recipe_name: str) -> ConsolidatedLineItem:
    return ConsolidatedLineItem(
        name=ingredient.name,
        key=key,
        total_quantity=ingredient.quantity,
        unit_price=ingredient.unit_price,
        currency=ingredient.effective_currency,
        image=ingredient.image,
        contributing_recipes=[recipe_name],
    )


def _fold_into(item: ConsolidatedLineItem, ingredient: Ingredient, recipe_name: str) -> None:
    item.total_quantity = merge_quantities(item.total_quantity, ingredient.quantity)
    item.contributing_recipes.append(recipe_name)

    # First priced ingredient wins; an existing price is never replaced
    if not item.has_price and ingredient.has_price:
        item.unit_price = ingredient.unit_price
        item.currency = ingredient.effective_currency

    if not item.image and ingredient.image:
        item.image = ingredient.image


def consolidate_recipes(recipes: Iterable[Recipe]) -> list[ConsolidatedLineItem]:
    """
    Fold the ingredients of ``recipes`` into consolidated line items.

    Recipes are walked in order, and ingredients in list order. Items come
    back in the order their group was first seen. The inputs are not mutated
    and every ingredient is counted in exactly one ``contributing_recipes``.
    """
    items: dict[str, ConsolidatedLineItem] = {}

    for recipe in recipes:
        for ingredient in recipe.ingredients:
            key = ingredient_key(ingredient.name)
            existing = items.get(key)
            if existing is None:
                items[key] = _new_line_item(key, ingredient, recipe.name)
            else:
                _fold_into(existing, ingredient, recipe.name)

    return list(items.values())


def consolidate(plan: MealPlan) -> list[ConsolidatedLineItem]:
    """Consolidate every recipe in a meal plan into a shopping list."""
    items = consolidate_recipes(plan.recipes)
    logger.debug(
        f"Consolidated plan '{plan.title}': "
        f"{plan.ingredient_count} ingredients into {len(items)} line items"
    )
    return items


@dataclass
class ShoppingList:
    """Consolidated items for a meal plan together with their cost."""

    title: str
    items: list[ConsolidatedLineItem] = field(default_factory=list)
    total_cost: float = 0.0

    @property
    def currencies(self) -> list[str]:
        """Currencies of priced items, in first-seen order."""
        return priced_currencies(self.items)

    @property
    def priced_items_count(self) -> int:
        return sum(1 for item in self.items if item.has_price)

    @property
    def unpriced_items_count(self) -> int:
        return len(self.items) - self.priced_items_count


def build_shopping_list(plan: MealPlan) -> ShoppingList:
    """Consolidate a meal plan and price the result."""
    items = consolidate(plan)
    return ShoppingList(title=plan.title, items=items, total_cost=total_cost(items))
