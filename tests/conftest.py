"""Shared fixtures."""

from datetime import datetime

import pytest

from symptom_diary.services import CorrelationService, EntryStorage
from symptom_diary.utils.config import Settings, get_settings
from tests.factories import NOW, create_food, create_symptom, frozen_service


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def service() -> CorrelationService:
    """Correlation service with the clock frozen at NOW."""
    return frozen_service()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_dir=tmp_path / "data")


@pytest.fixture
def storage(settings):
    with EntryStorage(settings) as s:
        yield s


@pytest.fixture
def env_data_dir(tmp_path, monkeypatch):
    """Point get_settings() at a temporary data directory."""
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "data"))
    get_settings.cache_clear()
    yield tmp_path / "data"
    get_settings.cache_clear()


@pytest.fixture
def bread_entries():
    """Five lunches of white bread, each followed by bloating three hours later."""
    entries = []
    for day in range(1, 6):
        entries.append(create_food(datetime(2024, 1, day, 12, 0), food_item="White Bread"))
        entries.append(create_symptom(datetime(2024, 1, day, 15, 0), severity=5 + day))
    return entries
