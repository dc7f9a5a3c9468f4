"""Request and response schemas shared by the API routers."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from mealcart.plan.costing import CostBreakdown
from mealcart.plan.domain import ConsolidatedLineItem, Ingredient


class IngredientSchema(BaseModel):
    """One ingredient as submitted by, and returned to, the client."""

    name: str = Field(min_length=1)
    quantity: str
    unit_price: float | None = Field(default=None, ge=0)
    currency: str | None = None
    image: str | None = None
    source_id: str | None = None

    def to_domain(self) -> Ingredient:
        return Ingredient(
            name=self.name,
            quantity=self.quantity,
            unit_price=self.unit_price,
            currency=self.currency,
            image=self.image,
            source_id=self.source_id,
        )

    @classmethod
    def from_domain(cls, ingredient: Ingredient) -> "IngredientSchema":
        return cls(
            name=ingredient.name,
            quantity=ingredient.quantity,
            unit_price=ingredient.unit_price,
            currency=ingredient.currency,
            image=ingredient.image,
            source_id=ingredient.source_id,
        )


class RecipeResponse(BaseModel):
    """A stored recipe."""

    id: str
    name: str
    instructions: str
    ingredients: list[IngredientSchema]
    created_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_record(cls, record: Any) -> "RecipeResponse":
        return cls(
            id=record.id,
            name=record.name,
            instructions=record.instructions or "",
            ingredients=[
                IngredientSchema.from_domain(Ingredient.from_dict(ing))
                for ing in record.ingredients or []
            ],
            created_by=record.created_by,
            created_at=record.created_at,
            updated_at=getattr(record, "updated_at", None),
        )


class CostLineSchema(BaseModel):
    """Cost of a single ingredient or shopping list item."""

    name: str
    quantity: str
    unit_price: float | None = None
    currency: str | None = None
    cost: float


class CostSummary(BaseModel):
    """Itemised costs and their total."""

    items: list[CostLineSchema]
    total_cost: float
    currencies: list[str] = Field(default_factory=list)

    @classmethod
    def from_breakdown(cls, breakdown: CostBreakdown) -> "CostSummary":
        return cls(
            items=[
                CostLineSchema(
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=line.unit_price,
                    currency=line.currency,
                    cost=line.cost,
                )
                for line in breakdown.lines
            ],
            total_cost=breakdown.total,
            currencies=breakdown.currencies,
        )


class ShoppingListItem(BaseModel):
    """A consolidated shopping list entry."""

    name: str
    total_quantity: str
    unit_price: float | None = None
    currency: str | None = None
    image: str | None = None
    cost: float = 0.0
    contributing_recipes: list[str] = Field(default_factory=list)

    @classmethod
    def from_line_item(cls, item: ConsolidatedLineItem, cost: float) -> "ShoppingListItem":
        return cls(
            name=item.name,
            total_quantity=item.total_quantity,
            unit_price=item.unit_price,
            currency=item.currency,
            image=item.image,
            cost=cost,
            contributing_recipes=list(item.contributing_recipes),
        )


class ProductSchema(BaseModel):
    """A product returned by the search proxy."""

    id: str | None = None
    name: str
    price: float | None = None
    currency: str | None = None
    image: str | None = None
    link: str | None = None
    rating: float | None = None
