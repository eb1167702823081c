"""Shared fixtures for the travel budget tests."""

import pytest

from travel_budget.audit import AuditLogger
from travel_budget.config import get_settings
from travel_budget.models.audit import AuditEvent
from travel_budget.models.budget import BudgetConfig


class RecordingAuditLogger(AuditLogger):
    """Audit logger that keeps events in memory instead of emitting them."""

    def __init__(self):
        super().__init__()
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True

    def event_types(self) -> list[str]:
        return [event.event_type.value for event in self.events]


@pytest.fixture
def audit_logger() -> RecordingAuditLogger:
    return RecordingAuditLogger()


@pytest.fixture
def madrid_config() -> BudgetConfig:
    """Two Madrid days, a Madrid cap and a free-spending pool."""
    return BudgetConfig(
        daily_allowance={"Madrid": {"day_1": 50.0, "day_2": 50.0}},
        city_cap={"Madrid": 500.0},
        pool_allowance=100.0,
    )


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
