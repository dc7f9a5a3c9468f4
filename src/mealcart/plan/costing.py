"""Cost calculation for ingredients and shopping list items."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, Protocol

from mealcart.plan.quantity import parse_quantity


class Priceable(Protocol):
    """Anything with a name, a free-text quantity and an optional unit price."""

    name: str
    unit_price: float | None

    @property
    def quantity(self) -> str: ...


def item_cost(item: Priceable) -> float:
    """
    Price of one ingredient or line item.

    The unit price is multiplied by the number leading the quantity text
    ("3 cups" at 2.5 -> 7.5). Unparsable quantities count as one unit and
    unpriced items cost nothing.
    """
    if item.unit_price is None:
        return 0.0
    return item.unit_price * parse_quantity(item.quantity).magnitude


def total_cost(items: Iterable[Priceable]) -> float:
    """Sum of ``item_cost`` over ``items``."""
    return sum((item_cost(item) for item in items), 0.0)


def priced_currencies(items: Iterable[Any]) -> list[str]:
    """Currencies of priced items, in first-seen order."""
    seen: list[str] = []
    for item in items:
        if item.unit_price is not None and item.currency and item.currency not in seen:
            seen.append(item.currency)
    return seen


@dataclass
class CostLine:
    """One priced row of a cost breakdown."""

    name: str
    quantity: str
    unit_price: float | None
    currency: str | None
    cost: float


@dataclass
class CostBreakdown:
    """Itemised costs with their grand total."""

    lines: list[CostLine] = field(default_factory=list)
    total: float = 0.0

    @property
    def currencies(self) -> list[str]:
        return priced_currencies(self.lines)


def cost_breakdown(items: Iterable[Priceable]) -> CostBreakdown:
    """Price each item and total them, keeping the input order."""
    breakdown = CostBreakdown()

    for item in items:
        cost = item_cost(item)
        currency = getattr(item, "effective_currency", None) or getattr(item, "currency", None)
        breakdown.lines.append(
            CostLine(
                name=item.name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                currency=currency,
                cost=cost,
            )
        )
        breakdown.total += cost

    return breakdown
