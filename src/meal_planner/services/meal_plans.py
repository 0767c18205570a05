"""Meal plan ledger service."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from meal_planner.domain.calendar import format_day_key, week_day_keys
from meal_planner.domain.errors import (
    ConflictError,
    InsufficientServingsError,
    InvalidInputError,
    LeftoverChainError,
    NotFoundError,
)
from meal_planner.domain.leftovers import servings_committed
from meal_planner.domain.meal_plans import (
    MEAL_TYPES,
    CustomMeal,
    DishMeal,
    MealContent,
    MealPlanEntry,
    MealStatus,
    MealType,
    MealWithDish,
    NewMealPlanEntry,
)
from meal_planner.services.dishes import DishService

logger = logging.getLogger(__name__)


class MealPlanRepository(Protocol):
    """Persistence interface for meal plan entries."""

    def create_meal(self, entry: NewMealPlanEntry) -> MealPlanEntry:
        """Insert a ledger entry and return it."""

    def get_meal(self, meal_id: UUID) -> MealPlanEntry | None:
        """Return a ledger entry by id, if present."""

    def list_household_meals(self, household_id: str) -> list[MealPlanEntry]:
        """Return every ledger entry of a household."""

    def list_meals_by_dish(self, dish_id: UUID) -> list[MealPlanEntry]:
        """Return every ledger entry referencing a dish."""

    def list_slot_meals(
        self, household_id: str, day: date, meal_type: MealType
    ) -> list[MealPlanEntry]:
        """Return entries planned for a household day and slot."""

    def update_status(self, meal_id: UUID, status: MealStatus) -> MealPlanEntry:
        """Patch an entry's status and return it."""

    def update_details(  # noqa: PLR0913
        self,
        meal_id: UUID,
        content: MealContent,
        servings_used: float,
        is_leftover: bool,
        source_meal_id: UUID | None,
    ) -> MealPlanEntry:
        """Replace an entry's meal, servings and leftover link."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete an entry."""

    def clear_source_references(self, source_meal_id: UUID) -> int:
        """Unlink entries that reuse the given source and return their count."""


@dataclass
class MealPlanService:
    """Service that plans meals and moves them through their lifecycle."""

    repository: MealPlanRepository
    dish_service: DishService
    enforce_unique_slots: bool = True
    enforce_leftover_availability: bool = False

    def plan_meal(  # noqa: PLR0913
        self,
        household_id: str,
        day: date,
        meal_type: MealType,
        content: MealContent,
        servings_used: float,
        is_leftover: bool = False,
        source_meal_id: UUID | None = None,
    ) -> MealPlanEntry:
        """Create a planned entry after validating its references."""
        if meal_type not in MEAL_TYPES:
            raise InvalidInputError(f"Unknown meal type: {meal_type}")
        _validate_servings(servings_used)
        self._validate_content(household_id, content)
        self._validate_leftover_link(
            household_id,
            content=content,
            servings_used=servings_used,
            is_leftover=is_leftover,
            source_meal_id=source_meal_id,
        )
        if self.enforce_unique_slots and self.repository.list_slot_meals(
            household_id, day, meal_type
        ):
            logger.warning(
                "Rejected duplicate meal slot",
                extra={"household_id": household_id, "day": format_day_key(day)},
            )
            raise ConflictError(format_day_key(day), meal_type)

        entry = self.repository.create_meal(
            NewMealPlanEntry(
                household_id=household_id,
                day=day,
                meal_type=meal_type,
                content=content,
                servings_used=servings_used,
                is_leftover=is_leftover,
                source_meal_id=source_meal_id,
            )
        )
        logger.info(
            "Planned meal",
            extra={"meal_id": str(entry.id), "household_id": household_id},
        )
        return entry

    def mark_eaten(self, household_id: str, meal_id: UUID) -> MealPlanEntry:
        """Mark a meal as eaten."""
        return self._set_status(household_id, meal_id, "eaten")

    def mark_skipped(self, household_id: str, meal_id: UUID) -> MealPlanEntry:
        """Mark a meal as skipped."""
        return self._set_status(household_id, meal_id, "skipped")

    def update_meal(  # noqa: PLR0913
        self,
        household_id: str,
        meal_id: UUID,
        content: MealContent,
        servings_used: float,
        is_leftover: bool = False,
        source_meal_id: UUID | None = None,
    ) -> MealPlanEntry:
        """Replace the meal, servings and leftover link of an entry."""
        current = self.get_entry_or_raise(household_id, meal_id)
        content = _keep_label(current.content, content)
        _validate_servings(servings_used)
        self._validate_content(household_id, content)
        self._validate_leftover_link(
            household_id,
            content=content,
            servings_used=servings_used,
            is_leftover=is_leftover,
            source_meal_id=source_meal_id,
            current=current,
        )
        return self.repository.update_details(
            meal_id,
            content=content,
            servings_used=servings_used,
            is_leftover=is_leftover,
            source_meal_id=source_meal_id,
        )

    def remove_meal(self, household_id: str, meal_id: UUID) -> None:
        """Delete an entry and unlink the leftovers that reused it."""
        self.get_entry_or_raise(household_id, meal_id)
        self.repository.delete_meal(meal_id)
        unlinked = self.repository.clear_source_references(meal_id)
        logger.info(
            "Removed meal",
            extra={"meal_id": str(meal_id), "unlinked_leftovers": unlinked},
        )

    def get_meal(self, household_id: str, meal_id: UUID) -> MealWithDish | None:
        """Return an entry joined with its dish."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.household_id != household_id:
            return None
        dish = None
        if meal.dish_id is not None:
            dish = self.dish_service.get_dish(household_id, meal.dish_id)
        return MealWithDish(meal=meal, dish=dish)

    def get_week(self, household_id: str, start: date) -> list[MealWithDish]:
        """Return the entries of the seven days starting at ``start``."""
        keys = set(week_day_keys(start))
        meals = [
            meal
            for meal in self.repository.list_household_meals(household_id)
            if format_day_key(meal.day) in keys
        ]
        dishes = self.dish_service.get_dishes(
            [meal.dish_id for meal in meals if meal.dish_id is not None]
        )
        meals.sort(key=lambda meal: (meal.day, MEAL_TYPES.index(meal.meal_type)))
        return [
            MealWithDish(
                meal=meal,
                dish=dishes.get(meal.dish_id) if meal.dish_id else None,
            )
            for meal in meals
        ]

    def get_entry_or_raise(self, household_id: str, meal_id: UUID) -> MealPlanEntry:
        """Return a household entry or raise NotFoundError."""
        meal = self.repository.get_meal(meal_id)
        if meal is None or meal.household_id != household_id:
            raise NotFoundError(f"Meal not found: {meal_id}")
        return meal

    def _set_status(
        self, household_id: str, meal_id: UUID, status: MealStatus
    ) -> MealPlanEntry:
        self.get_entry_or_raise(household_id, meal_id)
        entry = self.repository.update_status(meal_id, status)
        logger.info(
            "Updated meal status", extra={"meal_id": str(meal_id), "status": status}
        )
        return entry

    def _validate_content(self, household_id: str, content: MealContent) -> None:
        if isinstance(content, CustomMeal):
            if not content.name.strip():
                raise InvalidInputError("Custom meal name must not be empty")
            return
        self.dish_service.get_dish_or_raise(household_id, content.dish_id)

    def _validate_leftover_link(  # noqa: PLR0913
        self,
        household_id: str,
        *,
        content: MealContent,
        servings_used: float,
        is_leftover: bool,
        source_meal_id: UUID | None,
        current: MealPlanEntry | None = None,
    ) -> None:
        if current is not None and self._has_linked_leftovers(current):
            if is_leftover:
                raise LeftoverChainError(
                    "A cook event with leftovers cannot be a leftover"
                )
            if not isinstance(content, DishMeal) or content.dish_id != current.dish_id:
                raise InvalidInputError(
                    "A cook event with leftovers cannot change its dish"
                )
        if source_meal_id is None:
            return
        if not is_leftover:
            raise InvalidInputError("Only leftover meals can link to a source meal")
        if current is not None and source_meal_id == current.id:
            raise LeftoverChainError("A meal cannot reuse itself as leftovers")
        source = self.get_entry_or_raise(household_id, source_meal_id)
        if source.is_leftover:
            raise LeftoverChainError(
                "Leftovers can only reuse an original cook event, not other leftovers"
            )
        if source.dish_id is None:
            raise InvalidInputError("Leftovers need a source meal cooked from a dish")
        if not isinstance(content, DishMeal) or content.dish_id != source.dish_id:
            raise InvalidInputError("Leftover dish must match the source meal's dish")

        if not self.enforce_leftover_availability:
            return
        dish = self.dish_service.get_dish_or_raise(household_id, source.dish_id)
        meals = [
            meal
            for meal in self.repository.list_meals_by_dish(source.dish_id)
            if current is None or meal.id != current.id
        ]
        committed = servings_committed(source, meals)
        available = max(0.0, dish.default_servings - committed)
        if servings_used > available:
            logger.warning(
                "Rejected leftover request",
                extra={"source_meal_id": str(source.id), "available": available},
            )
            raise InsufficientServingsError(available, servings_used)

    def _has_linked_leftovers(self, meal: MealPlanEntry) -> bool:
        if meal.dish_id is None:
            return False
        return any(
            other.source_meal_id == meal.id
            for other in self.repository.list_meals_by_dish(meal.dish_id)
        )


def _validate_servings(servings_used: float) -> None:
    if servings_used <= 0:
        raise InvalidInputError("Servings used must be positive")


def _keep_label(current: MealContent, content: MealContent) -> MealContent:
    """Carry a display label forward when the dish stays the same."""
    if (
        isinstance(current, DishMeal)
        and isinstance(content, DishMeal)
        and current.label
        and content.label is None
        and content.dish_id == current.dish_id
    ):
        return DishMeal(dish_id=content.dish_id, label=current.label)
    return content
