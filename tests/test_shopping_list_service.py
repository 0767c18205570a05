"""Tests for weekly shopping list aggregation."""

from datetime import date

from meal_planner.containers import AppContainer
from meal_planner.domain.dishes import Dish, Ingredient
from meal_planner.domain.meal_plans import CustomMeal, DishMeal, MealPlanEntry
from meal_planner.domain.shopping import (
    ShoppingItem,
    category_label,
    order_categories,
)
from meal_planner.services.shopping import aggregate_ingredients
from tests.conftest import HOUSEHOLD_ID, make_dish

WEEK_START = date(2026, 3, 9)


def _plan(
    container: AppContainer,
    dish: Dish,
    servings: float,
    day: date,
    meal_type: str = "dinner",
) -> MealPlanEntry:
    return container.meal_plan_service.plan_meal(
        HOUSEHOLD_ID, day, meal_type, DishMeal(dish.id), servings
    )


def test_week_shopping_list_scales_and_merges(container: AppContainer) -> None:
    chili = make_dish(
        container.dish_service,
        "Chili",
        ingredients=[
            Ingredient("beans", 2, "cans", "Pantry"),
            Ingredient("onion", 1, "piece", "Produce"),
        ],
        default_servings=4,
    )
    salad = make_dish(
        container.dish_service,
        "Salad",
        ingredients=[Ingredient("onion", 0.5, "piece", "Produce")],
        default_servings=2,
    )
    _plan(container, chili, 4, WEEK_START)
    _plan(container, chili, 2, date(2026, 3, 10))
    _plan(container, salad, 1, date(2026, 3, 10), "lunch")

    grouped = container.shopping_list_service.week_shopping_list(
        HOUSEHOLD_ID, WEEK_START
    )

    assert grouped == {
        "Pantry": [ShoppingItem("beans", 3, "cans", "Pantry")],
        "Produce": [ShoppingItem("onion", 1.75, "piece", "Produce")],
    }


def test_week_shopping_list_keeps_unit_and_category_apart(
    container: AppContainer,
) -> None:
    soup = make_dish(
        container.dish_service,
        "Soup",
        ingredients=[
            Ingredient("milk", 1, "cup", "Dairy"),
            Ingredient("milk", 200, "ml", "Dairy"),
            Ingredient("milk", 1, "cup", "Pantry"),
        ],
        default_servings=1,
    )
    _plan(container, soup, 1, WEEK_START)

    grouped = container.shopping_list_service.week_shopping_list(
        HOUSEHOLD_ID, WEEK_START
    )

    assert [item.unit for item in grouped["Dairy"]] == ["cup", "ml"]
    assert grouped["Pantry"] == [ShoppingItem("milk", 1, "cup", "Pantry")]


def test_week_shopping_list_skips_skipped_and_custom_meals(
    container: AppContainer,
) -> None:
    pasta = make_dish(
        container.dish_service,
        "Pasta",
        ingredients=[Ingredient("spaghetti", 500, "g", "Pantry")],
        default_servings=4,
    )
    eaten = _plan(container, pasta, 4, WEEK_START)
    container.meal_plan_service.mark_eaten(HOUSEHOLD_ID, eaten.id)
    skipped = _plan(container, pasta, 4, date(2026, 3, 11))
    container.meal_plan_service.mark_skipped(HOUSEHOLD_ID, skipped.id)
    container.meal_plan_service.plan_meal(
        HOUSEHOLD_ID, date(2026, 3, 12), "dinner", CustomMeal("Takeout"), 2
    )

    grouped = container.shopping_list_service.week_shopping_list(
        HOUSEHOLD_ID, WEEK_START
    )

    assert grouped == {"Pantry": [ShoppingItem("spaghetti", 500, "g", "Pantry")]}


def test_week_shopping_list_only_covers_seven_days(container: AppContainer) -> None:
    bread = make_dish(
        container.dish_service,
        "Toast",
        ingredients=[Ingredient("bread", 2, "slices", "Bakery")],
    )
    _plan(container, bread, 1, date(2026, 3, 8))
    _plan(container, bread, 1, date(2026, 3, 15))
    _plan(container, bread, 1, date(2026, 3, 15), "breakfast")
    _plan(container, bread, 1, date(2026, 3, 16))

    assert container.shopping_list_service.week_shopping_list(
        HOUSEHOLD_ID, WEEK_START
    ) == {"Bakery": [ShoppingItem("bread", 4, "slices", "Bakery")]}
    assert (
        container.shopping_list_service.week_shopping_list(
            HOUSEHOLD_ID, date(2026, 3, 1)
        )
        == {}
    )


def test_week_shopping_list_ignores_deleted_dishes(container: AppContainer) -> None:
    tea = make_dish(
        container.dish_service,
        "Tea",
        ingredients=[Ingredient("tea bags", 1, "", "Beverages")],
    )
    _plan(container, tea, 1, WEEK_START)
    container.dish_service.remove_dish(HOUSEHOLD_ID, tea.id)

    assert (
        container.shopping_list_service.week_shopping_list(HOUSEHOLD_ID, WEEK_START)
        == {}
    )


def test_aggregate_ingredients_sorts_and_rounds(container: AppContainer) -> None:
    dish = make_dish(
        container.dish_service,
        "Stir fry",
        ingredients=[
            Ingredient("carrot", 1, "piece", "Produce"),
            Ingredient("Bok choy", 1, "piece", "Produce"),
            Ingredient("apple", 1, "piece", "Produce"),
            Ingredient("salt", 1, "pinch"),
        ],
        default_servings=3,
    )
    meal = _plan(container, dish, 1, WEEK_START)

    grouped = aggregate_ingredients([meal], {dish.id: dish})

    assert [item.name for item in grouped["Produce"]] == ["apple", "Bok choy", "carrot"]
    assert grouped["Produce"][0].quantity == 0.33
    assert grouped[""] == [ShoppingItem("salt", 0.33, "pinch", "")]


def test_aggregate_ingredients_rounds_half_up(container: AppContainer) -> None:
    dish = make_dish(
        container.dish_service,
        "Rice",
        ingredients=[Ingredient("rice", 0.125, "cup", "Pantry")],
        default_servings=1,
    )
    meal = _plan(container, dish, 1, WEEK_START)

    grouped = aggregate_ingredients([meal], {dish.id: dish})

    assert grouped["Pantry"][0].quantity == 0.13


def test_order_categories_puts_known_first() -> None:
    item = ShoppingItem("x", 1, "", "")
    grouped = {
        "Spices": [item],
        "": [item],
        "Dairy": [item],
        "Frozen": [],
        "Produce": [item],
    }

    assert order_categories(grouped) == ["Produce", "Dairy", "Spices", ""]


def test_category_label_and_item_key() -> None:
    assert category_label("") == "Other"
    assert category_label("Dairy") == "Dairy"
    assert ShoppingItem("milk", 1, "cup", "Dairy").key == "milk|cup|Dairy"


def test_week_shopping_list_is_stable_for_same_ledger(
    container: AppContainer,
) -> None:
    chili = make_dish(
        container.dish_service,
        "Chili",
        ingredients=[
            Ingredient("beans", 2, "cans", "Pantry"),
            Ingredient("onion", 1, "piece", "Produce"),
            Ingredient("cumin", 1, "tsp", "Spices"),
        ],
        default_servings=4,
    )
    _plan(container, chili, 3, WEEK_START)
    _plan(container, chili, 1, date(2026, 3, 12), "lunch")

    first = container.shopping_list_service.week_shopping_list(
        HOUSEHOLD_ID, WEEK_START
    )
    second = container.shopping_list_service.week_shopping_list(
        HOUSEHOLD_ID, WEEK_START
    )

    assert first == second
    assert order_categories(first) == order_categories(second)
    assert order_categories(first) == ["Produce", "Pantry", "Spices"]
