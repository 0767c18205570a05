"""Pydantic request models and response serializers for the HTTP API."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from meal_planner.domain.dishes import Dish, DishDraft, Ingredient
from meal_planner.domain.leftovers import LeftoverSource
from meal_planner.domain.meal_plans import (
    CustomMeal,
    DishMeal,
    MealContent,
    MealPlanEntry,
    MealType,
    MealWithDish,
)
from meal_planner.domain.shopping import (
    GroupedShoppingList,
    ShoppingItem,
    category_label,
    order_categories,
)


class IngredientPayload(BaseModel):
    """Ingredient line of a dish payload."""

    name: str = Field(min_length=1)
    quantity: float = Field(ge=0)
    unit: str = ""
    category: str = ""


class DishPayload(BaseModel):
    """Dish create/update payload."""

    name: str = Field(min_length=1)
    description: str = ""
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    default_servings: float = Field(default=1, ge=1)
    tags: list[str] = Field(default_factory=list)
    url: str | None = None
    instructions: str = ""

    def to_draft(self) -> DishDraft:
        """Convert the payload into a domain draft."""
        return DishDraft(
            name=self.name,
            description=self.description,
            ingredients=[
                Ingredient(
                    name=item.name,
                    quantity=item.quantity,
                    unit=item.unit,
                    category=item.category,
                )
                for item in self.ingredients
            ],
            default_servings=self.default_servings,
            tags=list(self.tags),
            url=self.url,
            instructions=self.instructions,
        )


class MealDetailsPayload(BaseModel):
    """Replaceable fields of a meal plan entry."""

    dish_id: UUID | None = None
    custom_name: str | None = None
    servings_used: float = Field(gt=0)
    is_leftover: bool = False
    source_meal_id: UUID | None = None

    @model_validator(mode="after")
    def _require_single_meal_kind(self) -> "MealDetailsPayload":
        has_custom_name = bool(self.custom_name and self.custom_name.strip())
        if (self.dish_id is None) == (not has_custom_name):
            raise ValueError("Provide exactly one of dish_id or custom_name")
        return self

    def content(self) -> MealContent:
        """Return the tagged meal content."""
        if self.dish_id is not None:
            return DishMeal(dish_id=self.dish_id)
        return CustomMeal(name=str(self.custom_name).strip())


class PlanMealPayload(MealDetailsPayload):
    """Payload for planning a new meal."""

    day: date
    meal_type: MealType


def serialize_dish(dish: Dish) -> dict[str, object]:
    """Serialize a dish for JSON responses."""
    return {
        "id": str(dish.id),
        "household_id": dish.household_id,
        "name": dish.name,
        "description": dish.description,
        "ingredients": [
            {
                "name": ingredient.name,
                "quantity": ingredient.quantity,
                "unit": ingredient.unit,
                "category": ingredient.category,
            }
            for ingredient in dish.ingredients
        ],
        "default_servings": dish.default_servings,
        "tags": list(dish.tags),
        "url": dish.url,
        "instructions": dish.instructions,
    }


def serialize_meal(meal: MealPlanEntry) -> dict[str, object]:
    """Serialize a ledger entry for JSON responses."""
    content = meal.content
    return {
        "id": str(meal.id),
        "household_id": meal.household_id,
        "day": meal.day.isoformat(),
        "meal_type": meal.meal_type,
        "dish_id": str(content.dish_id) if isinstance(content, DishMeal) else None,
        "custom_name": (
            content.name if isinstance(content, CustomMeal) else content.label
        ),
        "servings_used": meal.servings_used,
        "status": meal.status,
        "is_leftover": meal.is_leftover,
        "source_meal_id": str(meal.source_meal_id) if meal.source_meal_id else None,
    }


def serialize_meal_with_dish(item: MealWithDish) -> dict[str, object]:
    """Serialize an entry with its display name and resolved dish."""
    return {
        **serialize_meal(item.meal),
        "name": item.display_name,
        "dish": serialize_dish(item.dish) if item.dish else None,
    }


def serialize_leftover_source(source: LeftoverSource) -> dict[str, object]:
    """Serialize a cook event with its available servings."""
    return {
        "meal": serialize_meal(source.meal),
        "dish": serialize_dish(source.dish),
        "available": source.available,
    }


def serialize_shopping_item(item: ShoppingItem) -> dict[str, object]:
    """Serialize a shopping list line including its key."""
    return {
        "key": item.key,
        "name": item.name,
        "quantity": item.quantity,
        "unit": item.unit,
        "category": item.category,
    }


def serialize_shopping_list(grouped: GroupedShoppingList) -> dict[str, object]:
    """Serialize the grouped list along with its display order."""
    return {
        "categories": {
            category: [serialize_shopping_item(item) for item in items]
            for category, items in grouped.items()
        },
        "order": [
            {"category": category, "label": category_label(category)}
            for category in order_categories(grouped)
        ],
    }
