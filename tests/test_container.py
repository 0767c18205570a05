"""Tests for container wiring."""

import pytest

from meal_planner import containers
from meal_planner.adapters.supabase_dish_repository import SupabaseDishRepository
from meal_planner.config import Settings
from meal_planner.containers import build_container
from tests.test_supabase_adapters import FakeSupabaseClient


def test_build_container_creates_services(
    settings: Settings, monkeypatch: pytest.MonkeyPatch
) -> None:
    created: list[tuple[str, str]] = []

    def fake_create_client(url: str, key: str) -> FakeSupabaseClient:
        created.append((url, key))
        return FakeSupabaseClient()

    monkeypatch.setattr(containers, "create_client", fake_create_client)

    container = build_container(settings)

    assert created == [("https://example.supabase.co", "service-key")]
    assert isinstance(container.dish_service.repository, SupabaseDishRepository)
    assert container.meal_plan_service.repository is (
        container.leftover_service.repository
    )
    assert container.meal_plan_service.enforce_unique_slots
    assert not container.meal_plan_service.enforce_leftover_availability
    assert container.leftover_service.timezone_name == "UTC"
