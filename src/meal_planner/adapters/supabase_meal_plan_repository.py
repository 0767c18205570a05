"""Supabase repository for meal plan entries."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from meal_planner.domain.calendar import format_day_key, parse_day_key
from meal_planner.domain.meal_plans import (
    CustomMeal,
    DishMeal,
    MealContent,
    MealPlanEntry,
    MealStatus,
    MealType,
    NewMealPlanEntry,
)
from meal_planner.services.meal_plans import MealPlanRepository

MEAL_PLANS_TABLE = "meal_plans"


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase implementation for the meal plan ledger."""

    client: Client

    def create_meal(self, entry: NewMealPlanEntry) -> MealPlanEntry:
        """Insert a ledger entry and return it."""
        response = (
            self.client.table(MEAL_PLANS_TABLE)
            .insert(
                {
                    "household_id": entry.household_id,
                    "day": format_day_key(entry.day),
                    "meal_type": entry.meal_type,
                    **_serialize_content(entry.content),
                    "servings_used": entry.servings_used,
                    "status": entry.status,
                    "is_leftover": entry.is_leftover,
                    "source_meal_id": _optional_id(entry.source_meal_id),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal plan entry")
        return _parse_entry(response.data[0])

    def get_meal(self, meal_id: UUID) -> MealPlanEntry | None:
        """Return a ledger entry by id."""
        response = (
            self.client.table(MEAL_PLANS_TABLE)
            .select("*")
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_entry(response.data[0])

    def list_household_meals(self, household_id: str) -> list[MealPlanEntry]:
        """Return every ledger entry of a household."""
        response = (
            self.client.table(MEAL_PLANS_TABLE)
            .select("*")
            .eq("household_id", household_id)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_meals_by_dish(self, dish_id: UUID) -> list[MealPlanEntry]:
        """Return every ledger entry referencing a dish."""
        response = (
            self.client.table(MEAL_PLANS_TABLE)
            .select("*")
            .eq("dish_id", str(dish_id))
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def list_slot_meals(
        self, household_id: str, day: date, meal_type: MealType
    ) -> list[MealPlanEntry]:
        """Return entries planned for a household day and slot."""
        response = (
            self.client.table(MEAL_PLANS_TABLE)
            .select("*")
            .eq("household_id", household_id)
            .eq("day", format_day_key(day))
            .eq("meal_type", meal_type)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def update_status(self, meal_id: UUID, status: MealStatus) -> MealPlanEntry:
        """Patch an entry's status."""
        response = (
            self.client.table(MEAL_PLANS_TABLE)
            .update({"status": status})
            .eq("id", str(meal_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal plan status")
        return _parse_entry(response.data[0])

    def update_details(  # noqa: PLR0913
        self,
        meal_id: UUID,
        content: MealContent,
        servings_used: float,
        is_leftover: bool,
        source_meal_id: UUID | None,
    ) -> MealPlanEntry:
        """Replace an entry's meal, servings and leftover link."""
        response = (
            self.client.table(MEAL_PLANS_TABLE)
            .update(
                {
                    **_serialize_content(content),
                    "servings_used": servings_used,
                    "is_leftover": is_leftover,
                    "source_meal_id": _optional_id(source_meal_id),
                }
            )
            .eq("id", str(meal_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update meal plan entry")
        return _parse_entry(response.data[0])

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete an entry."""
        self.client.table(MEAL_PLANS_TABLE).delete().eq("id", str(meal_id)).execute()

    def clear_source_references(self, source_meal_id: UUID) -> int:
        """Null out ``source_meal_id`` on entries reusing the source."""
        response = (
            self.client.table(MEAL_PLANS_TABLE)
            .update({"source_meal_id": None})
            .eq("source_meal_id", str(source_meal_id))
            .execute()
        )
        return len(response.data or [])


def _serialize_content(content: MealContent) -> dict[str, object]:
    if isinstance(content, DishMeal):
        return {"dish_id": str(content.dish_id), "custom_name": content.label}
    return {"dish_id": None, "custom_name": content.name}


def _optional_id(value: UUID | None) -> str | None:
    return str(value) if value else None


def _parse_entry(row: dict[str, object]) -> MealPlanEntry:
    dish_id = row.get("dish_id")
    custom_name = row.get("custom_name")
    content: MealContent
    if dish_id:
        content = DishMeal(dish_id=UUID(str(dish_id)), label=custom_name or None)
    else:
        content = CustomMeal(name=str(custom_name or ""))
    source_meal_id = row.get("source_meal_id")
    return MealPlanEntry(
        id=UUID(str(row["id"])),
        household_id=str(row.get("household_id", "")),
        day=parse_day_key(str(row["day"])),
        meal_type=row.get("meal_type", "dinner"),
        content=content,
        servings_used=float(row.get("servings_used", 0.0)),
        status=row.get("status", "planned"),
        is_leftover=bool(row.get("is_leftover", False)),
        source_meal_id=UUID(str(source_meal_id)) if source_meal_id else None,
    )
