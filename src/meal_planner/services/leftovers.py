"""Leftover accounting over the meal plan ledger."""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID
from zoneinfo import ZoneInfo

from meal_planner.domain.dishes import Dish
from meal_planner.domain.leftovers import LeftoverSource, remaining_servings
from meal_planner.domain.meal_plans import DishMeal, MealPlanEntry, NewMealPlanEntry
from meal_planner.services.dishes import DishService
from meal_planner.services.meal_plans import MealPlanRepository

logger = logging.getLogger(__name__)

VOID_MEAL_TYPE = "dinner"


@dataclass
class LeftoverService:
    """Derives remaining servings from the ledger on every read.

    Availability is never stored; it is recomputed from the eaten entries
    linked to a cook event.
    """

    repository: MealPlanRepository
    dish_service: DishService
    timezone_name: str = "UTC"

    def available_servings(self, household_id: str, source_meal_id: UUID) -> float:
        """Return unconsumed servings of a cook event, or 0 when unresolvable."""
        resolved = self._resolve_source(household_id, source_meal_id)
        if resolved is None:
            return 0.0
        source, dish = resolved
        return remaining_servings(
            dish, source, self.repository.list_meals_by_dish(dish.id)
        )

    def leftover_sources(self, household_id: str) -> list[LeftoverSource]:
        """Return eaten cook events that still have servings to reuse."""
        meals = self.repository.list_household_meals(household_id)
        candidates = [meal for meal in meals if meal.is_leftover_source]
        dishes = self.dish_service.get_dishes(
            [meal.dish_id for meal in candidates if meal.dish_id is not None]
        )
        sources: list[LeftoverSource] = []
        for meal in candidates:
            dish = dishes.get(meal.dish_id) if meal.dish_id else None
            if dish is None:
                continue
            available = remaining_servings(dish, meal, meals)
            if available > 0:
                sources.append(
                    LeftoverSource(meal=meal, dish=dish, available=available)
                )
        return sources

    def void_leftovers(
        self, household_id: str, source_meal_id: UUID
    ) -> MealPlanEntry | None:
        """Write off remaining servings of a cook event.

        Inserts an eaten leftover entry for today that consumes whatever is
        left. Returns None when nothing remains.
        """
        resolved = self._resolve_source(household_id, source_meal_id)
        if resolved is None:
            return None
        source, dish = resolved
        remaining = remaining_servings(
            dish, source, self.repository.list_meals_by_dish(dish.id)
        )
        if remaining <= 0:
            return None

        entry = self.repository.create_meal(
            NewMealPlanEntry(
                household_id=source.household_id,
                day=self._today(),
                meal_type=VOID_MEAL_TYPE,
                content=DishMeal(dish_id=dish.id, label=f"{dish.name} (voided)"),
                servings_used=remaining,
                status="eaten",
                is_leftover=True,
                source_meal_id=source.id,
            )
        )
        logger.info(
            "Voided leftovers",
            extra={"source_meal_id": str(source.id), "servings": remaining},
        )
        return entry

    def _resolve_source(
        self, household_id: str, source_meal_id: UUID
    ) -> tuple[MealPlanEntry, Dish] | None:
        source = self.repository.get_meal(source_meal_id)
        if source is None or source.household_id != household_id:
            return None
        # Leftover entries are never tracked as sources of further leftovers.
        if source.is_leftover or source.dish_id is None:
            return None
        dish = self.dish_service.get_dish(household_id, source.dish_id)
        if dish is None:
            return None
        return source, dish

    def _today(self) -> date:
        return datetime.now(tz=ZoneInfo(self.timezone_name)).date()
