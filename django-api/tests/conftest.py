"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta

import pytest
from rest_framework.test import APIClient

from rooms.domain import Room
from tests.factories import InMemoryRoomStore, make_room


@pytest.fixture
def api_client() -> APIClient:
    return APIClient()


@pytest.fixture(autouse=True)
def clear_cache():
    from django.core.cache import cache
    cache.clear()
    yield
    cache.clear()


@pytest.fixture(autouse=True)
def utc_time_zone(settings):
    settings.TIME_ZONE = "UTC"


@pytest.fixture
def room() -> Room:
    return make_room()


@pytest.fixture
def store() -> InMemoryRoomStore:
    return InMemoryRoomStore()


@pytest.fixture
def future_day() -> date:
    from django.utils import timezone
    return timezone.now().date() + timedelta(days=7)
