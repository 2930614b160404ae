"""Tests for container wiring."""

import asyncio

from nutrition_engine.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.daily_summary_service is not None
    assert container.daily_summary_service.resolver is container.unit_resolver
    assert container.trend_service.window_days == settings.trend_window_days
    asyncio.run(container.close_resources())
