"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date
from uuid import UUID, uuid4

import pytest

from meal_planner.config import Settings
from meal_planner.containers import AppContainer, wire_services
from meal_planner.domain.dishes import Dish, DishDraft, Ingredient
from meal_planner.domain.meal_plans import (
    MealContent,
    MealPlanEntry,
    MealStatus,
    MealType,
    NewMealPlanEntry,
)
from meal_planner.services.dishes import DishRepository, DishService
from meal_planner.services.meal_plans import MealPlanRepository

HOUSEHOLD_ID = "household-1"


@dataclass
class InMemoryDishRepository(DishRepository):
    """In-memory dish repository for tests."""

    dishes: dict[UUID, Dish] = field(default_factory=dict)

    def create_dish(self, household_id: str, draft: DishDraft) -> Dish:
        dish = Dish(
            id=uuid4(),
            household_id=household_id,
            name=draft.name,
            description=draft.description,
            ingredients=tuple(draft.ingredients),
            default_servings=draft.default_servings,
            tags=tuple(draft.tags),
            url=draft.url,
            instructions=draft.instructions,
        )
        self.dishes[dish.id] = dish
        return dish

    def update_dish(self, dish_id: UUID, draft: DishDraft) -> Dish:
        current = self.dishes[dish_id]
        updated = replace(
            current,
            name=draft.name,
            description=draft.description,
            ingredients=tuple(draft.ingredients),
            default_servings=draft.default_servings,
            tags=tuple(draft.tags),
            url=draft.url,
            instructions=draft.instructions,
        )
        self.dishes[dish_id] = updated
        return updated

    def delete_dish(self, dish_id: UUID) -> None:
        self.dishes.pop(dish_id, None)

    def get_dish(self, dish_id: UUID) -> Dish | None:
        return self.dishes.get(dish_id)

    def get_dishes(self, dish_ids: list[UUID]) -> list[Dish]:
        return [self.dishes[dish_id] for dish_id in dish_ids if dish_id in self.dishes]

    def list_dishes(self, household_id: str) -> list[Dish]:
        return [
            dish for dish in self.dishes.values() if dish.household_id == household_id
        ]

    def search_dishes(self, household_id: str, query: str) -> list[Dish]:
        query_lower = query.lower()
        return [
            dish
            for dish in self.list_dishes(household_id)
            if query_lower in dish.name.lower()
        ]

    def list_dishes_by_tags(self, household_id: str, tags: list[str]) -> list[Dish]:
        wanted = set(tags)
        return [
            dish for dish in self.list_dishes(household_id) if wanted & set(dish.tags)
        ]


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    """In-memory meal plan repository for tests."""

    meals: dict[UUID, MealPlanEntry] = field(default_factory=dict)

    def create_meal(self, entry: NewMealPlanEntry) -> MealPlanEntry:
        meal = MealPlanEntry(
            id=uuid4(),
            household_id=entry.household_id,
            day=entry.day,
            meal_type=entry.meal_type,
            content=entry.content,
            servings_used=entry.servings_used,
            status=entry.status,
            is_leftover=entry.is_leftover,
            source_meal_id=entry.source_meal_id,
        )
        self.meals[meal.id] = meal
        return meal

    def get_meal(self, meal_id: UUID) -> MealPlanEntry | None:
        return self.meals.get(meal_id)

    def list_household_meals(self, household_id: str) -> list[MealPlanEntry]:
        return [
            meal for meal in self.meals.values() if meal.household_id == household_id
        ]

    def list_meals_by_dish(self, dish_id: UUID) -> list[MealPlanEntry]:
        return [meal for meal in self.meals.values() if meal.dish_id == dish_id]

    def list_slot_meals(
        self, household_id: str, day: date, meal_type: MealType
    ) -> list[MealPlanEntry]:
        return [
            meal
            for meal in self.list_household_meals(household_id)
            if meal.day == day and meal.meal_type == meal_type
        ]

    def update_status(self, meal_id: UUID, status: MealStatus) -> MealPlanEntry:
        updated = replace(self.meals[meal_id], status=status)
        self.meals[meal_id] = updated
        return updated

    def update_details(  # noqa: PLR0913
        self,
        meal_id: UUID,
        content: MealContent,
        servings_used: float,
        is_leftover: bool,
        source_meal_id: UUID | None,
    ) -> MealPlanEntry:
        updated = replace(
            self.meals[meal_id],
            content=content,
            servings_used=servings_used,
            is_leftover=is_leftover,
            source_meal_id=source_meal_id,
        )
        self.meals[meal_id] = updated
        return updated

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)

    def clear_source_references(self, source_meal_id: UUID) -> int:
        linked = [
            meal
            for meal in self.meals.values()
            if meal.source_meal_id == source_meal_id
        ]
        for meal in linked:
            self.meals[meal.id] = replace(meal, source_meal_id=None)
        return len(linked)


def make_dish(
    dish_service: DishService,
    name: str,
    ingredients: list[Ingredient] | None = None,
    default_servings: float = 1,
    tags: list[str] | None = None,
) -> Dish:
    """Create a dish for the default test household."""
    return dish_service.create_dish(
        HOUSEHOLD_ID,
        DishDraft(
            name=name,
            ingredients=ingredients or [],
            default_servings=default_servings,
            tags=tags or [],
        ),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
    )


@pytest.fixture
def dish_repository() -> InMemoryDishRepository:
    return InMemoryDishRepository()


@pytest.fixture
def meal_plan_repository() -> InMemoryMealPlanRepository:
    return InMemoryMealPlanRepository()


@pytest.fixture
def container(
    settings: Settings,
    dish_repository: InMemoryDishRepository,
    meal_plan_repository: InMemoryMealPlanRepository,
) -> AppContainer:
    return wire_services(settings, dish_repository, meal_plan_repository)
