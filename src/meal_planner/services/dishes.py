"""Services for managing the household dish catalog."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from meal_planner.domain.dishes import DISH_TAGS, Dish, DishDraft
from meal_planner.domain.errors import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


class DishRepository(Protocol):
    """Persistence interface for the dish catalog."""

    def create_dish(self, household_id: str, draft: DishDraft) -> Dish:
        """Create a dish and return it."""

    def update_dish(self, dish_id: UUID, draft: DishDraft) -> Dish:
        """Replace a dish's editable fields and return it."""

    def delete_dish(self, dish_id: UUID) -> None:
        """Delete a dish."""

    def get_dish(self, dish_id: UUID) -> Dish | None:
        """Return a dish by id, if present."""

    def get_dishes(self, dish_ids: list[UUID]) -> list[Dish]:
        """Return the dishes that exist among the given ids."""

    def list_dishes(self, household_id: str) -> list[Dish]:
        """Return all dishes of a household."""

    def search_dishes(self, household_id: str, query: str) -> list[Dish]:
        """Return dishes whose name contains the query, ignoring case."""

    def list_dishes_by_tags(self, household_id: str, tags: list[str]) -> list[Dish]:
        """Return dishes carrying any of the tags."""


@dataclass
class DishService:
    """Application service for catalog operations."""

    repository: DishRepository

    def create_dish(self, household_id: str, draft: DishDraft) -> Dish:
        """Validate and create a dish."""
        _validate_draft(draft)
        dish = self.repository.create_dish(household_id, draft)
        logger.info(
            "Created dish",
            extra={"dish_id": str(dish.id), "household_id": household_id},
        )
        return dish

    def update_dish(self, household_id: str, dish_id: UUID, draft: DishDraft) -> Dish:
        """Validate and replace a dish's fields."""
        self.get_dish_or_raise(household_id, dish_id)
        _validate_draft(draft)
        return self.repository.update_dish(dish_id, draft)

    def remove_dish(self, household_id: str, dish_id: UUID) -> None:
        """Delete a dish; meals that reference it keep a dangling dish id."""
        self.get_dish_or_raise(household_id, dish_id)
        self.repository.delete_dish(dish_id)
        logger.info("Removed dish", extra={"dish_id": str(dish_id)})

    def get_dish(self, household_id: str, dish_id: UUID) -> Dish | None:
        """Return a household dish by id."""
        dish = self.repository.get_dish(dish_id)
        if dish is None or dish.household_id != household_id:
            return None
        return dish

    def get_dish_or_raise(self, household_id: str, dish_id: UUID) -> Dish:
        """Return a household dish or raise NotFoundError."""
        dish = self.get_dish(household_id, dish_id)
        if dish is None:
            raise NotFoundError(f"Dish not found: {dish_id}")
        return dish

    def get_dishes(self, dish_ids: list[UUID]) -> dict[UUID, Dish]:
        """Resolve dish ids to dishes, skipping missing ones."""
        unique_ids = list(dict.fromkeys(dish_ids))
        if not unique_ids:
            return {}
        return {dish.id: dish for dish in self.repository.get_dishes(unique_ids)}

    def get_all(self, household_id: str) -> list[Dish]:
        """Return all dishes of a household sorted by name."""
        return _by_name(self.repository.list_dishes(household_id))

    def search(self, household_id: str, query: str | None) -> list[Dish]:
        """Search dishes by name, returning all dishes when query is empty."""
        cleaned = (query or "").strip()
        if not cleaned:
            return self.get_all(household_id)
        return _by_name(self.repository.search_dishes(household_id, cleaned))

    def get_by_tags(self, household_id: str, tags: list[str]) -> list[Dish]:
        """Return dishes matching any tag, or all dishes when no tag is given."""
        if not tags:
            return self.get_all(household_id)
        _validate_tags(tags)
        return _by_name(self.repository.list_dishes_by_tags(household_id, tags))


def _validate_draft(draft: DishDraft) -> None:
    if not draft.name.strip():
        raise InvalidInputError("Dish name must not be empty")
    if draft.default_servings < 1:
        raise InvalidInputError("Default servings must be at least 1")
    for ingredient in draft.ingredients:
        if not ingredient.name.strip():
            raise InvalidInputError("Ingredient name must not be empty")
    _validate_tags(draft.tags)


def _validate_tags(tags: list[str]) -> None:
    unknown = sorted(set(tags) - set(DISH_TAGS))
    if unknown:
        raise InvalidInputError(f"Unknown dish tags: {', '.join(unknown)}")


def _by_name(dishes: list[Dish]) -> list[Dish]:
    return sorted(dishes, key=lambda dish: (dish.name.casefold(), dish.name))
