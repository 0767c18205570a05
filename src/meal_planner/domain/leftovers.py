"""Domain models for leftover accounting."""

from dataclasses import dataclass

from meal_planner.domain.dishes import Dish
from meal_planner.domain.meal_plans import MealPlanEntry


@dataclass(frozen=True)
class LeftoverSource:
    """A cook event with servings still available for reuse."""

    meal: MealPlanEntry
    dish: Dish
    available: float


def servings_consumed(source: MealPlanEntry, meals: list[MealPlanEntry]) -> float:
    """Sum eaten servings drawn from a cook event, including the event itself."""
    return sum(
        meal.servings_used
        for meal in meals
        if meal.status == "eaten"
        and meal.dish_id == source.dish_id
        and (meal.id == source.id or meal.source_meal_id == source.id)
    )


def remaining_servings(
    dish: Dish, source: MealPlanEntry, meals: list[MealPlanEntry]
) -> float:
    """Return unconsumed servings of a cook event, never below zero."""
    return max(0.0, dish.default_servings - servings_consumed(source, meals))


def servings_committed(source: MealPlanEntry, meals: list[MealPlanEntry]) -> float:
    """Sum servings of a cook event and its leftovers that are not skipped.

    Counts planned entries as well as eaten ones, so requests that are not
    eaten yet still hold their share of the dish.
    """
    return sum(
        meal.servings_used
        for meal in meals
        if meal.status != "skipped"
        and meal.dish_id == source.dish_id
        and (meal.id == source.id or meal.source_meal_id == source.id)
    )
