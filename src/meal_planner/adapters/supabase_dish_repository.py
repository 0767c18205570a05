"""Supabase implementation for the dish catalog."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from meal_planner.domain.dishes import Dish, DishDraft, Ingredient
from meal_planner.services.dishes import DishRepository

DISHES_TABLE = "dishes"


@dataclass
class SupabaseDishRepository(DishRepository):
    """Supabase-backed repository for household dishes."""

    client: Client

    def create_dish(self, household_id: str, draft: DishDraft) -> Dish:
        """Create a dish and return it."""
        response = (
            self.client.table(DISHES_TABLE)
            .insert({"household_id": household_id, **_serialize_draft(draft)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create dish")
        return _parse_dish(response.data[0])

    def update_dish(self, dish_id: UUID, draft: DishDraft) -> Dish:
        """Replace a dish's editable fields and return it."""
        response = (
            self.client.table(DISHES_TABLE)
            .update(_serialize_draft(draft))
            .eq("id", str(dish_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update dish")
        return _parse_dish(response.data[0])

    def delete_dish(self, dish_id: UUID) -> None:
        """Delete a dish."""
        self.client.table(DISHES_TABLE).delete().eq("id", str(dish_id)).execute()

    def get_dish(self, dish_id: UUID) -> Dish | None:
        """Return a dish by id, if present."""
        response = (
            self.client.table(DISHES_TABLE)
            .select("*")
            .eq("id", str(dish_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_dish(response.data[0])

    def get_dishes(self, dish_ids: list[UUID]) -> list[Dish]:
        """Return the dishes that exist among the given ids."""
        response = (
            self.client.table(DISHES_TABLE)
            .select("*")
            .in_("id", [str(dish_id) for dish_id in dish_ids])
            .execute()
        )
        return [_parse_dish(row) for row in response.data or []]

    def list_dishes(self, household_id: str) -> list[Dish]:
        """Return all dishes of a household."""
        response = (
            self.client.table(DISHES_TABLE)
            .select("*")
            .eq("household_id", household_id)
            .order("name", desc=False)
            .execute()
        )
        return [_parse_dish(row) for row in response.data or []]

    def search_dishes(self, household_id: str, query: str) -> list[Dish]:
        """Return dishes whose name contains the query, ignoring case."""
        response = (
            self.client.table(DISHES_TABLE)
            .select("*")
            .eq("household_id", household_id)
            .ilike("name", f"%{query}%")
            .execute()
        )
        return [_parse_dish(row) for row in response.data or []]

    def list_dishes_by_tags(self, household_id: str, tags: list[str]) -> list[Dish]:
        """Return dishes whose tags overlap the given tags."""
        response = (
            self.client.table(DISHES_TABLE)
            .select("*")
            .eq("household_id", household_id)
            .ov("tags", tags)
            .execute()
        )
        return [_parse_dish(row) for row in response.data or []]


def _serialize_draft(draft: DishDraft) -> dict[str, object]:
    return {
        "name": draft.name,
        "description": draft.description,
        "ingredients": [
            {
                "name": ingredient.name,
                "quantity": ingredient.quantity,
                "unit": ingredient.unit,
                "category": ingredient.category,
            }
            for ingredient in draft.ingredients
        ],
        "default_servings": draft.default_servings,
        "tags": list(draft.tags),
        "url": draft.url,
        "instructions": draft.instructions,
    }


def _parse_dish(row: dict[str, object]) -> Dish:
    """Parse a dish row into a domain model."""
    raw_ingredients = row.get("ingredients") or []
    raw_servings = row.get("default_servings")
    return Dish(
        id=UUID(str(row["id"])),
        household_id=str(row.get("household_id", "")),
        name=str(row.get("name", "")),
        description=str(row.get("description") or ""),
        ingredients=tuple(_parse_ingredient(item) for item in raw_ingredients),
        default_servings=float(raw_servings) if raw_servings is not None else 1.0,
        tags=tuple(str(tag) for tag in row.get("tags") or []),
        url=row.get("url") or None,
        instructions=str(row.get("instructions") or ""),
    )


def _parse_ingredient(item: dict[str, object]) -> Ingredient:
    return Ingredient(
        name=str(item.get("name", "")),
        quantity=float(item.get("quantity", 0.0)),
        unit=str(item.get("unit") or ""),
        category=str(item.get("category") or ""),
    )
