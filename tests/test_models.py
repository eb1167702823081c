"""
Tests for Travel Budget models

Test strategy:
1. Unit tests for documents, intents and audit events
2. Engine, parser, reports and storage each get their own module
3. No real chat transport in tests
"""

import json

import pytest

from travel_budget.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from travel_budget.models.budget import (
    BudgetConfig,
    BudgetState,
    LogEntry,
    LogEntryKind,
    day_index,
    day_key,
    split_state_key,
    state_key,
)
from travel_budget.models.commands import CityBalanceQuery, CityExpense, PoolExpense


class TestKeys:
    """Tests for day and state key helpers."""

    def test_day_key_format(self):
        assert day_key(1) == "day_1"
        assert day_key(12) == "day_12"

    def test_day_index_reads_trailing_number(self):
        assert day_index("day_12") == 12
        assert day_index("dia_3") == 3
        assert day_index("arrival") is None

    def test_state_key_round_trip(self):
        key = state_key("San Sebastian", "day_5")
        assert key == "San Sebastian||day_5"
        assert split_state_key(key) == ("San Sebastian", "day_5")


class TestBudgetConfig:
    """Tests for the read-only budget document."""

    def test_loads_camel_case_document(self):
        document = json.dumps({
            "dailyAllowance": {"Madrid": {"day_1": 50}},
            "cityCap": {"Madrid": 500},
            "poolAllowance": 100,
        })
        config = BudgetConfig.model_validate_json(document)
        assert config.allowance_for("Madrid", "day_1") == 50.0
        assert config.city_cap["Madrid"] == 500.0
        assert config.pool_allowance == 100.0

    def test_missing_sections_default_to_empty(self):
        config = BudgetConfig.model_validate_json("{}")
        assert config.daily_allowance == {}
        assert config.city_cap == {}
        assert config.pool_allowance == 0.0

    def test_allowance_for_unknown_returns_none(self, madrid_config):
        assert madrid_config.allowance_for("Paris", "day_1") is None
        assert madrid_config.allowance_for("Madrid", "day_9") is None

    def test_sorted_days_uses_numeric_order(self):
        config = BudgetConfig(
            daily_allowance={"Lisbon": {"day_10": 1, "day_2": 2, "day_1": 3}}
        )
        assert config.sorted_days("Lisbon") == ["day_1", "day_2", "day_10"]

    def test_resolve_day_key_prefers_underscore_form(self, madrid_config):
        assert madrid_config.resolve_day_key("Madrid", 2) == "day_2"
        assert madrid_config.resolve_day_key("Madrid", 9) is None

    def test_resolve_day_key_accepts_other_spellings(self):
        config = BudgetConfig(daily_allowance={"Madrid": {"day1": 50, "dia_2": 40}})
        assert config.resolve_day_key("Madrid", 1) == "day1"
        assert config.resolve_day_key("Madrid", 2) == "dia_2"

    def test_resolve_day_key_ambiguous_is_none(self):
        config = BudgetConfig(daily_allowance={"Madrid": {"day1": 50, "dia1": 40}})
        assert config.resolve_day_key("Madrid", 1) is None

    def test_config_is_frozen(self, madrid_config):
        with pytest.raises(ValueError):
            madrid_config.pool_allowance = 5.0


class TestBudgetState:
    """Tests for the mutable state document."""

    def test_unactivated_day_is_none_not_zero(self):
        state = BudgetState()
        assert state.remaining_for("Madrid", "day_1") is None

    def test_set_remaining_activates_key(self):
        state = BudgetState()
        state.set_remaining("Madrid", "day_1", 0.0)
        assert state.remaining_for("Madrid", "day_1") == 0.0
        assert state.activated_keys() == [("Madrid", "day_1")]

    def test_document_omits_absent_pool(self):
        document = BudgetState(cumulative_balance=12.5).to_document()
        assert document == {"cumulativeBalance": 12.5, "remaining": {}}

    def test_document_includes_pool_once_used(self):
        document = BudgetState(pool_remaining=450.0).to_document()
        assert document["poolRemaining"] == 450.0


class TestLogEntry:
    """Tests for expense log entries."""

    def test_city_entry_document(self):
        entry = LogEntry(
            kind=LogEntryKind.CITY_EXPENSE,
            amount=10.0,
            city="Madrid",
            day=1,
            remaining_after=40.0,
            balance_after=140.0,
        )
        document = entry.to_document()
        assert document["kind"] == "CITY_EXPENSE"
        assert document["remainingAfter"] == 40.0
        assert document["balanceAfter"] == 140.0
        assert "timestamp" in document

    def test_pool_entry_has_no_city_or_day(self):
        entry = LogEntry(
            kind=LogEntryKind.POOL_EXPENSE,
            amount=50.0,
            remaining_after=450.0,
        )
        document = entry.to_document()
        assert "city" not in document
        assert "day" not in document

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValueError):
            LogEntry(kind="REFUND", amount=1.0, remaining_after=0.0)


class TestCommandModels:
    """Tests for parsed intents."""

    def test_city_expense_strips_city(self):
        intent = CityExpense(amount=10, city="  Madrid ", day=1)
        assert intent.city == "Madrid"

    def test_negative_amount_rejected(self):
        with pytest.raises(ValueError):
            PoolExpense(amount=-1)

    def test_infinite_amount_rejected(self):
        with pytest.raises(ValueError):
            CityExpense(amount=float("inf"), city="Madrid", day=1)

    def test_blank_city_rejected(self):
        with pytest.raises(ValueError):
            CityBalanceQuery(city="   ")


class TestAuditModels:
    """Tests for audit-related models."""

    def test_audit_event_defaults(self):
        event = AuditEvent(
            event_type=AuditEventType.COMMAND_RECEIVED,
            description="Command received: GlobalBalanceQuery",
        )
        assert event.severity == AuditSeverity.INFO
        assert event.correlation_id is None

    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.expense_registered(
            kind="CITY_EXPENSE",
            amount=10.0,
            remaining_after=40.0,
            balance_after=140.0,
            city="Madrid",
            day=1,
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "expense_registered"
        assert log_dict["details"]["city"] == "Madrid"
        assert "Madrid, day 1" in log_dict["description"]

    def test_lookup_failure_is_not_an_error(self):
        event = AuditEventBuilder.lookup_failed(
            error_type="UnknownCityError",
            message="Error: I couldn't find a budget for the city Paris.",
        )
        assert event.severity == AuditSeverity.INFO

    def test_lookup_failure_with_very_long_message(self):
        message = "Error: I couldn't find a budget for the city " + "x" * 600 + "."
        event = AuditEventBuilder.lookup_failed(
            error_type="UnknownCityError",
            message=message,
        )
        assert event.description == "Lookup failed: UnknownCityError"
        assert event.details["message"] == message

    def test_document_failures_severity(self):
        load = AuditEventBuilder.document_load_failed("state", "state.json", "boom")
        save = AuditEventBuilder.document_save_failed("state", "state.json", "boom")
        assert load.severity == AuditSeverity.WARNING
        assert save.severity == AuditSeverity.ERROR


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
