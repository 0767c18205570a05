"""Domain models for the weekly meal plan ledger."""

from dataclasses import dataclass
from datetime import date
from typing import Literal
from uuid import UUID

from meal_planner.domain.dishes import Dish

MealType = Literal["breakfast", "lunch", "dinner"]
MealStatus = Literal["planned", "eaten", "skipped"]

MEAL_TYPES: tuple[MealType, ...] = ("breakfast", "lunch", "dinner")
MEAL_STATUSES: tuple[MealStatus, ...] = ("planned", "eaten", "skipped")


@dataclass(frozen=True)
class DishMeal:
    """Meal cooked from a catalog dish.

    ``label`` overrides the dish name for display, e.g. voided leftovers.
    """

    dish_id: UUID
    label: str | None = None


@dataclass(frozen=True)
class CustomMeal:
    """Free-text meal that does not reference the catalog."""

    name: str


MealContent = DishMeal | CustomMeal


@dataclass(frozen=True)
class MealPlanEntry:
    """One scheduled meal for a household day and slot."""

    id: UUID
    household_id: str
    day: date
    meal_type: MealType
    content: MealContent
    servings_used: float
    status: MealStatus
    is_leftover: bool = False
    source_meal_id: UUID | None = None

    @property
    def dish_id(self) -> UUID | None:
        """Return the referenced dish id for dish meals."""
        if isinstance(self.content, DishMeal):
            return self.content.dish_id
        return None

    @property
    def is_leftover_source(self) -> bool:
        """Return True for an eaten, original cook event."""
        return (
            self.status == "eaten"
            and not self.is_leftover
            and self.dish_id is not None
        )


@dataclass(frozen=True)
class NewMealPlanEntry:
    """Fields for inserting a ledger entry."""

    household_id: str
    day: date
    meal_type: MealType
    content: MealContent
    servings_used: float
    status: MealStatus = "planned"
    is_leftover: bool = False
    source_meal_id: UUID | None = None


@dataclass(frozen=True)
class MealWithDish:
    """Ledger entry joined with its resolved dish, if any."""

    meal: MealPlanEntry
    dish: Dish | None

    @property
    def display_name(self) -> str:
        """Return the name shown for the meal."""
        content = self.meal.content
        if isinstance(content, CustomMeal):
            return content.name
        if content.label:
            return content.label
        return self.dish.name if self.dish else ""
