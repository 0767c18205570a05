"""Domain models for the dish catalog."""

from dataclasses import dataclass, field
from uuid import UUID

DISH_TAGS = (
    "high-protein",
    "high-fiber",
    "low-carb",
    "vegetarian",
    "vegan",
    "gluten-free",
    "dairy-free",
    "quick",
    "meal-prep",
)


@dataclass(frozen=True)
class Ingredient:
    """A single ingredient line of a dish."""

    name: str
    quantity: float
    unit: str = ""
    category: str = ""


@dataclass(frozen=True)
class Dish:
    """A reusable recipe owned by a household."""

    id: UUID
    household_id: str
    name: str
    description: str = ""
    ingredients: tuple[Ingredient, ...] = ()
    default_servings: float = 1
    tags: tuple[str, ...] = ()
    url: str | None = None
    instructions: str = ""


@dataclass(frozen=True)
class DishDraft:
    """Editable dish fields used for create and update."""

    name: str
    description: str = ""
    ingredients: list[Ingredient] = field(default_factory=list)
    default_servings: float = 1
    tags: list[str] = field(default_factory=list)
    url: str | None = None
    instructions: str = ""
