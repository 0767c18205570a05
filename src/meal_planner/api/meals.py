"""Meal plan, leftover and shopping list endpoints."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003
from zoneinfo import ZoneInfo

from fastapi import APIRouter, HTTPException, Request, status

from meal_planner.api.models import (
    MealDetailsPayload,
    PlanMealPayload,
    serialize_leftover_source,
    serialize_meal,
    serialize_meal_with_dish,
    serialize_shopping_list,
)
from meal_planner.domain.calendar import week_start

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

router = APIRouter(prefix="/households/{household_id}", tags=["meals"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _resolve_start(container: AppContainer, start: date | None) -> date:
    if start is not None:
        return start
    today = datetime.now(tz=ZoneInfo(container.settings.timezone)).date()
    return week_start(today)


@router.get("/week")
async def get_week(
    household_id: str, request: Request, start: date | None = None
) -> dict[str, object]:
    """Return the week's entries joined with their dishes."""
    container = _container(request)
    resolved_start = _resolve_start(container, start)
    meals = container.meal_plan_service.get_week(household_id, resolved_start)
    return {
        "start": resolved_start.isoformat(),
        "meals": [serialize_meal_with_dish(item) for item in meals],
    }


@router.get("/meals/{meal_id}")
async def get_meal(
    household_id: str, meal_id: UUID, request: Request
) -> dict[str, object]:
    """Return one entry joined with its dish."""
    item = _container(request).meal_plan_service.get_meal(household_id, meal_id)
    if item is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return serialize_meal_with_dish(item)


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def plan_meal(
    household_id: str, payload: PlanMealPayload, request: Request
) -> dict[str, str]:
    """Plan a new meal."""
    entry = _container(request).meal_plan_service.plan_meal(
        household_id,
        day=payload.day,
        meal_type=payload.meal_type,
        content=payload.content(),
        servings_used=payload.servings_used,
        is_leftover=payload.is_leftover,
        source_meal_id=payload.source_meal_id,
    )
    return {"id": str(entry.id)}


@router.post("/meals/{meal_id}/eat")
async def eat_meal(
    household_id: str, meal_id: UUID, request: Request
) -> dict[str, object]:
    """Mark a meal as eaten."""
    entry = _container(request).meal_plan_service.mark_eaten(household_id, meal_id)
    return serialize_meal(entry)


@router.post("/meals/{meal_id}/skip")
async def skip_meal(
    household_id: str, meal_id: UUID, request: Request
) -> dict[str, object]:
    """Mark a meal as skipped."""
    entry = _container(request).meal_plan_service.mark_skipped(household_id, meal_id)
    return serialize_meal(entry)


@router.put("/meals/{meal_id}")
async def update_meal(
    household_id: str,
    meal_id: UUID,
    payload: MealDetailsPayload,
    request: Request,
) -> dict[str, object]:
    """Replace a meal's dish, servings and leftover link."""
    entry = _container(request).meal_plan_service.update_meal(
        household_id,
        meal_id,
        content=payload.content(),
        servings_used=payload.servings_used,
        is_leftover=payload.is_leftover,
        source_meal_id=payload.source_meal_id,
    )
    return serialize_meal(entry)


@router.delete("/meals/{meal_id}")
async def remove_meal(
    household_id: str, meal_id: UUID, request: Request
) -> dict[str, str]:
    """Delete a meal."""
    _container(request).meal_plan_service.remove_meal(household_id, meal_id)
    return {"status": "ok"}


@router.get("/meals/{meal_id}/leftovers")
async def available_leftovers(
    household_id: str, meal_id: UUID, request: Request
) -> dict[str, float]:
    """Return the servings still available from a cook event."""
    available = _container(request).leftover_service.available_servings(
        household_id, meal_id
    )
    return {"available": available}


@router.post("/meals/{meal_id}/void")
async def void_leftovers(
    household_id: str, meal_id: UUID, request: Request
) -> dict[str, str | None]:
    """Write off the remaining servings of a cook event."""
    entry = _container(request).leftover_service.void_leftovers(household_id, meal_id)
    return {"id": str(entry.id) if entry else None}


@router.get("/leftovers")
async def leftover_sources(household_id: str, request: Request) -> dict[str, object]:
    """Return cook events that still have servings to reuse."""
    sources = _container(request).leftover_service.leftover_sources(household_id)
    return {"sources": [serialize_leftover_source(source) for source in sources]}


@router.get("/shopping-list")
async def shopping_list(
    household_id: str, request: Request, start: date | None = None
) -> dict[str, object]:
    """Return the week's aggregated shopping list."""
    container = _container(request)
    resolved_start = _resolve_start(container, start)
    grouped = container.shopping_list_service.week_shopping_list(
        household_id, resolved_start
    )
    return {"start": resolved_start.isoformat(), **serialize_shopping_list(grouped)}
