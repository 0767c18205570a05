"""Domain models for the weekly shopping list."""

from dataclasses import dataclass

INGREDIENT_CATEGORIES = (
    "Produce",
    "Dairy",
    "Meat",
    "Seafood",
    "Pantry",
    "Frozen",
    "Bakery",
    "Beverages",
    "Other",
)

FALLBACK_CATEGORY_LABEL = "Other"


@dataclass(frozen=True)
class ShoppingItem:
    """Aggregated quantity for one ingredient, unit and category."""

    name: str
    quantity: float
    unit: str
    category: str

    @property
    def key(self) -> str:
        """Stable identifier for the item within a week."""
        return f"{self.name}|{self.unit}|{self.category}"


GroupedShoppingList = dict[str, list[ShoppingItem]]


def order_categories(grouped: GroupedShoppingList) -> list[str]:
    """Order categories for display.

    Known categories come first in their fixed order, followed by any other
    category in the order it appears in ``grouped``. Empty groups are left out.
    """
    known = [
        category for category in INGREDIENT_CATEGORIES if grouped.get(category)
    ]
    unknown = [
        category
        for category, items in grouped.items()
        if items and category not in INGREDIENT_CATEGORIES
    ]
    return known + unknown


def category_label(category: str) -> str:
    """Return the display label for a category key."""
    return category.strip() or FALLBACK_CATEGORY_LABEL
