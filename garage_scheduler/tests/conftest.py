from datetime import date

import pytest

from garage_scheduler.core.config import Settings
from garage_scheduler.infrastructure.database.dependencies import (
    GarageScheduler,
    build_in_memory,
)

from .fixtures import MONDAY, SATURDAY


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings isolated from the developer's environment and data directory."""
    return Settings(DATA_DIR=tmp_path, LOG_LEVEL="DEBUG")


@pytest.fixture
def scheduler(settings) -> GarageScheduler:
    return build_in_memory(settings)


@pytest.fixture
def monday() -> date:
    return MONDAY


@pytest.fixture
def saturday() -> date:
    return SATURDAY


@pytest.fixture
def defined_monday(scheduler, monday) -> date:
    """Monday defined with the default staffing and a ceiling of 7 cars."""
    scheduler.capacity.define_day(monday)
    return monday
