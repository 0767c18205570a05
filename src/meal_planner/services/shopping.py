"""Weekly shopping list aggregation."""

import logging
import math
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from meal_planner.domain.calendar import format_day_key, week_day_keys
from meal_planner.domain.dishes import Dish
from meal_planner.domain.meal_plans import MealPlanEntry
from meal_planner.domain.shopping import GroupedShoppingList, ShoppingItem
from meal_planner.services.dishes import DishService
from meal_planner.services.meal_plans import MealPlanRepository

logger = logging.getLogger(__name__)

IngredientKey = tuple[str, str, str]


@dataclass
class ShoppingListService:
    """Rolls a week of planned meals up into a categorized shopping list."""

    repository: MealPlanRepository
    dish_service: DishService

    def week_shopping_list(
        self, household_id: str, start: date
    ) -> GroupedShoppingList:
        """Return ingredients for the seven days starting at ``start``.

        Skipped meals and custom meals contribute nothing. Quantities are
        scaled by the serving ratio and merged on exact name, unit and
        category, without unit conversion.
        """
        keys = set(week_day_keys(start))
        meals = [
            meal
            for meal in self.repository.list_household_meals(household_id)
            if format_day_key(meal.day) in keys
            and meal.status != "skipped"
            and meal.dish_id is not None
        ]
        dishes = self.dish_service.get_dishes(
            [meal.dish_id for meal in meals if meal.dish_id is not None]
        )
        return aggregate_ingredients(meals, dishes)


def aggregate_ingredients(
    meals: list[MealPlanEntry], dishes: dict[UUID, Dish]
) -> GroupedShoppingList:
    """Sum serving-scaled ingredient quantities and group them by category."""
    totals: dict[IngredientKey, float] = {}
    for meal in meals:
        dish = dishes.get(meal.dish_id) if meal.dish_id else None
        if dish is None:
            continue
        if dish.default_servings <= 0:
            logger.warning(
                "Skipping dish without servings", extra={"dish_id": str(dish.id)}
            )
            continue
        ratio = meal.servings_used / dish.default_servings
        for ingredient in dish.ingredients:
            key = (ingredient.name, ingredient.unit, ingredient.category)
            totals[key] = totals.get(key, 0.0) + ingredient.quantity * ratio

    grouped: GroupedShoppingList = {}
    for (name, unit, category), quantity in totals.items():
        grouped.setdefault(category, []).append(
            ShoppingItem(
                name=name,
                quantity=_round_quantity(quantity),
                unit=unit,
                category=category,
            )
        )
    for items in grouped.values():
        items.sort(key=lambda item: (item.name.casefold(), item.name))
    return grouped


def _round_quantity(quantity: float) -> float:
    """Round half up to two decimals."""
    return math.floor(quantity * 100 + 0.5) / 100
