"""Plain value types consumed by the shopping list and costing code."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

DEFAULT_CURRENCY = "USD"


@dataclass(frozen=True)
class Ingredient:
    """One entry in a recipe's ingredient list."""

    name: str
    quantity: str
    unit_price: float | None = None
    currency: str | None = None
    image: str | None = None
    source_id: str | None = None

    @property
    def has_price(self) -> bool:
        return self.unit_price is not None

    @property
    def effective_currency(self) -> str | None:
        """Currency to display, defaulting to USD for priced ingredients."""
        if self.currency:
            return self.currency
        if self.has_price:
            return DEFAULT_CURRENCY
        return None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Ingredient":
        """
        Build an ingredient from a stored or submitted dict.

        Accepts both snake_case keys and the camelCase keys used by the
        browser client (``unitPrice``, ``sourceId``). ``price`` is accepted as
        an alias for the unit price.
        """
        unit_price = data.get("unit_price")
        if unit_price is None:
            unit_price = data.get("unitPrice", data.get("price"))

        return cls(
            name=data["name"],
            quantity=data["quantity"],
            unit_price=float(unit_price) if unit_price is not None else None,
            currency=data.get("currency"),
            image=data.get("image"),
            source_id=data.get("source_id") or data.get("sourceId"),
        )

    @classmethod
    def from_product(cls, product: Mapping[str, Any], quantity: str) -> "Ingredient":
        """
        Build an ingredient from a product-search result.

        The product's name, price, currency, image and id are copied verbatim.
        """
        price = product.get("price")
        return cls(
            name=product["name"],
            quantity=quantity,
            unit_price=float(price) if price is not None else None,
            currency=product.get("currency"),
            image=product.get("image"),
            source_id=product.get("source_id") or product.get("id"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON storage."""
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "currency": self.currency,
            "image": self.image,
            "source_id": self.source_id,
        }


@dataclass(frozen=True)
class Recipe:
    """A named, ordered list of ingredients."""

    name: str
    ingredients: tuple[Ingredient, ...] = ()
    id: str | None = None
    instructions: str = ""

    @classmethod
    def from_record(cls, record: Any) -> "Recipe":
        """Convert a stored recipe row (or any object with the same attributes)."""
        return cls(
            id=getattr(record, "id", None),
            name=record.name,
            instructions=getattr(record, "instructions", "") or "",
            ingredients=tuple(Ingredient.from_dict(ing) for ing in record.ingredients or []),
        )


@dataclass(frozen=True)
class MealPlan:
    """A titled, ordered sequence of recipes. Recipes may repeat."""

    title: str
    recipes: tuple[Recipe, ...] = ()

    @property
    def ingredient_count(self) -> int:
        return sum(len(recipe.ingredients) for recipe in self.recipes)


@dataclass
class ConsolidatedLineItem:
    """A shopping list entry folding every ingredient that shares a key."""

    name: str
    key: str
    total_quantity: str
    unit_price: float | None = None
    currency: str | None = None
    image: str | None = None
    contributing_recipes: list[str] = field(default_factory=list)

    @property
    def quantity(self) -> str:
        """Alias so line items can be priced like ingredients."""
        return self.total_quantity

    @property
    def has_price(self) -> bool:
        return self.unit_price is not None
