"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from meal_planner.adapters.supabase_dish_repository import SupabaseDishRepository
from meal_planner.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from meal_planner.config import Settings
from meal_planner.services.dishes import DishRepository, DishService
from meal_planner.services.leftovers import LeftoverService
from meal_planner.services.meal_plans import MealPlanRepository, MealPlanService
from meal_planner.services.shopping import ShoppingListService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    dish_service: DishService
    meal_plan_service: MealPlanService
    leftover_service: LeftoverService
    shopping_list_service: ShoppingListService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    dish_repository = SupabaseDishRepository(supabase_client)
    meal_plan_repository = SupabaseMealPlanRepository(supabase_client)
    return wire_services(resolved_settings, dish_repository, meal_plan_repository)


def wire_services(
    settings: Settings,
    dish_repository: DishRepository,
    meal_plan_repository: MealPlanRepository,
) -> AppContainer:
    """Build services on top of the given repositories."""
    dish_service = DishService(dish_repository)
    meal_plan_service = MealPlanService(
        repository=meal_plan_repository,
        dish_service=dish_service,
        enforce_unique_slots=settings.enforce_unique_slots,
        enforce_leftover_availability=settings.enforce_leftover_availability,
    )
    leftover_service = LeftoverService(
        repository=meal_plan_repository,
        dish_service=dish_service,
        timezone_name=settings.timezone,
    )
    shopping_list_service = ShoppingListService(
        repository=meal_plan_repository,
        dish_service=dish_service,
    )
    return AppContainer(
        settings=settings,
        dish_service=dish_service,
        meal_plan_service=meal_plan_service,
        leftover_service=leftover_service,
        shopping_list_service=shopping_list_service,
    )
