"""Domain errors raised by meal planner services."""


class MealPlannerError(Exception):
    """Base class for rejected meal planner operations."""

    code = "MEAL_PLANNER_ERROR"


class NotFoundError(MealPlannerError):
    """A referenced dish or meal entry does not exist."""

    code = "NOT_FOUND"


class InvalidInputError(MealPlannerError):
    """A write operation received input it cannot accept."""

    code = "INVALID_INPUT"


class LeftoverChainError(InvalidInputError):
    """A leftover entry tried to reuse another leftover entry."""

    code = "LEFTOVER_CHAIN"


class ConflictError(MealPlannerError):
    """A meal is already planned for the same day and slot."""

    code = "CONFLICT"

    def __init__(self, day: str, meal_type: str) -> None:
        super().__init__(f"Meal already exists for {meal_type} on {day}")
        self.day = day
        self.meal_type = meal_type


class InsufficientServingsError(MealPlannerError):
    """A leftover request asks for more servings than remain."""

    code = "INSUFFICIENT_SERVINGS"

    def __init__(self, available: float, requested: float) -> None:
        super().__init__(
            f"Only {available:g} servings available, {requested:g} requested"
        )
        self.available = available
        self.requested = requested
