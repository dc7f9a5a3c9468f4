"""Free-text quantity parsing and ingredient grouping keys."""

import re
from dataclasses import dataclass

# Leading integer or decimal at the very start, e.g. "2", "1.5"
_NUMBER_RE = re.compile(r"^(\d+(?:\.\d+)?)")

# Unit token: letters (any script) after a number and at least one whitespace character
_UNIT_RE = re.compile(r"^\d+(?:\.\d+)?\s+([^\W\d_]+)")


@dataclass(frozen=True)
class ParsedQuantity:
    """Best-effort reading of a quantity string."""

    magnitude: float
    unit: str | None
    numeric: bool  # False when magnitude is the default, not a parsed number

    @property
    def has_unit(self) -> bool:
        return self.unit is not None


def parse_quantity(quantity: str) -> ParsedQuantity:
    """
    Extract a magnitude and unit from a quantity such as "2 cups".

    Never raises. Text without a leading number reads as one unit with no
    unit token:

        "2 cups"  -> (2.0, "cups")
        "1.5 tbsp" -> (1.5, "tbsp")
        "500g"    -> (500.0, None)
        "a pinch" -> (1.0, None)
    """
    number_match = _NUMBER_RE.match(quantity)
    if not number_match:
        return ParsedQuantity(magnitude=1.0, unit=None, numeric=False)

    unit_match = _UNIT_RE.match(quantity)
    return ParsedQuantity(
        magnitude=float(number_match.group(1)),
        unit=unit_match.group(1) if unit_match else None,
        numeric=True,
    )


def format_magnitude(value: float) -> str:
    """Render a magnitude without a trailing ".0" for whole numbers."""
    if value.is_integer():
        return str(int(value))
    return str(value)


def ingredient_key(name: str) -> str:
    """Grouping key for an ingredient name: trimmed and lower-cased."""
    return name.strip().lower()
