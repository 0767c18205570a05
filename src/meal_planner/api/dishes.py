"""Dish catalog endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Annotated
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, HTTPException, Query, Request, status

from meal_planner.api.models import DishPayload, serialize_dish

if TYPE_CHECKING:
    from meal_planner.containers import AppContainer

router = APIRouter(prefix="/households/{household_id}/dishes", tags=["dishes"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("")
async def list_dishes(household_id: str, request: Request) -> dict[str, object]:
    """Return every dish of the household."""
    dishes = _container(request).dish_service.get_all(household_id)
    return {"dishes": [serialize_dish(dish) for dish in dishes]}


@router.get("/search")
async def search_dishes(
    household_id: str, request: Request, q: str | None = None
) -> dict[str, object]:
    """Search dishes by name."""
    dishes = _container(request).dish_service.search(household_id, q)
    return {"dishes": [serialize_dish(dish) for dish in dishes]}


@router.get("/by-tags")
async def dishes_by_tags(
    household_id: str,
    request: Request,
    tag: Annotated[list[str] | None, Query()] = None,
) -> dict[str, object]:
    """Return dishes carrying any of the given tags."""
    dishes = _container(request).dish_service.get_by_tags(household_id, tag or [])
    return {"dishes": [serialize_dish(dish) for dish in dishes]}


@router.get("/{dish_id}")
async def get_dish(
    household_id: str, dish_id: UUID, request: Request
) -> dict[str, object]:
    """Return a dish by id."""
    dish = _container(request).dish_service.get_dish(household_id, dish_id)
    if dish is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return serialize_dish(dish)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_dish(
    household_id: str, payload: DishPayload, request: Request
) -> dict[str, object]:
    """Create a dish."""
    dish = _container(request).dish_service.create_dish(
        household_id, payload.to_draft()
    )
    return serialize_dish(dish)


@router.put("/{dish_id}")
async def update_dish(
    household_id: str, dish_id: UUID, payload: DishPayload, request: Request
) -> dict[str, object]:
    """Replace a dish's fields."""
    dish = _container(request).dish_service.update_dish(
        household_id, dish_id, payload.to_draft()
    )
    return serialize_dish(dish)


@router.delete("/{dish_id}")
async def remove_dish(
    household_id: str, dish_id: UUID, request: Request
) -> dict[str, str]:
    """Delete a dish."""
    _container(request).dish_service.remove_dish(household_id, dish_id)
    return {"status": "ok"}
