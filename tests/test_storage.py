"""Tests for the JSON file and in-memory ledger storage."""

import json

import pytest

from travel_budget.config import StorageSettings
from travel_budget.models.budget import (
    BudgetConfig,
    BudgetState,
    LogEntry,
    LogEntryKind,
)
from travel_budget.storage import InMemoryLedgerStorage, JsonFileLedgerStorage


@pytest.fixture
def paths(tmp_path):
    return {
        "budget_path": tmp_path / "budget.json",
        "state_path": tmp_path / "state.json",
        "log_path": tmp_path / "log.json",
    }


@pytest.fixture
def storage(paths, audit_logger) -> JsonFileLedgerStorage:
    return JsonFileLedgerStorage(**paths, audit_logger=audit_logger)


def write_budget(path, document: dict) -> None:
    path.write_text(json.dumps(document), encoding="utf-8")


class TestJsonLoad:
    """Loading never raises; broken documents fall back to defaults."""

    def test_missing_files_yield_defaults(self, storage, audit_logger):
        snapshot = storage.load()

        assert snapshot.config == BudgetConfig()
        assert snapshot.state == BudgetState()
        assert snapshot.log == []
        assert audit_logger.event_types() == ["document_load_failed"] * 3

    def test_corrupt_state_yields_default(self, storage, paths, audit_logger):
        paths["state_path"].write_text("{not json", encoding="utf-8")
        write_budget(paths["budget_path"], {"poolAllowance": 10})
        paths["log_path"].write_text("[]", encoding="utf-8")

        snapshot = storage.load()

        assert snapshot.state == BudgetState()
        assert snapshot.config.pool_allowance == 10.0
        assert len(audit_logger.events) == 1
        assert audit_logger.events[0].details["document"] == "state"

    def test_wrong_shape_yields_default(self, storage, paths):
        paths["log_path"].write_text('{"kind": "CITY_EXPENSE"}', encoding="utf-8")

        assert storage.load().log == []

    def test_reads_budget_document(self, storage, paths):
        write_budget(paths["budget_path"], {
            "dailyAllowance": {"Madrid": {"day_1": 50}},
            "cityCap": {"Madrid": 500},
            "poolAllowance": 100,
        })

        config = storage.load().config

        assert config.allowance_for("Madrid", "day_1") == 50.0
        assert config.city_cap == {"Madrid": 500.0}


class TestJsonSave:

    def test_save_then_load(self, storage, paths):
        state = BudgetState(
            cumulative_balance=140.0,
            remaining={"Madrid||day_1": 40.0},
        )
        log = [
            LogEntry(
                kind=LogEntryKind.CITY_EXPENSE,
                amount=10.0,
                city="Madrid",
                day=1,
                remaining_after=40.0,
                balance_after=140.0,
            )
        ]

        assert storage.save(state, log) is True
        snapshot = storage.load()

        assert snapshot.state == state
        assert snapshot.log[0].city == "Madrid"
        assert snapshot.log[0].balance_after == 140.0

    def test_documents_use_camel_case(self, storage, paths):
        storage.save(BudgetState(pool_remaining=450.0), [])

        state_document = json.loads(paths["state_path"].read_text(encoding="utf-8"))
        assert state_document == {
            "cumulativeBalance": 0.0,
            "remaining": {},
            "poolRemaining": 450.0,
        }
        assert json.loads(paths["log_path"].read_text(encoding="utf-8")) == []

    def test_budget_file_never_written(self, storage, paths):
        storage.save(BudgetState(), [])
        assert not paths["budget_path"].exists()

    def test_save_failure_is_reported_not_raised(self, tmp_path, audit_logger):
        blocked = tmp_path / "state.json"
        blocked.mkdir()
        storage = JsonFileLedgerStorage(
            budget_path=tmp_path / "budget.json",
            state_path=blocked,
            log_path=tmp_path / "log.json",
            audit_logger=audit_logger,
        )

        assert storage.save(BudgetState(), []) is False
        assert audit_logger.event_types() == ["document_save_failed"]
        # The log is still written
        assert (tmp_path / "log.json").exists()

    def test_from_settings(self, tmp_path):
        settings = StorageSettings(data_directory=tmp_path, state_filename="trip.json")

        storage = JsonFileLedgerStorage.from_settings(settings)
        storage.save(BudgetState(), [])

        assert (tmp_path / "trip.json").exists()


class TestInMemoryStorage:

    def test_load_returns_copies(self, madrid_config):
        storage = InMemoryLedgerStorage(config=madrid_config)

        snapshot = storage.load()
        snapshot.state.set_remaining("Madrid", "day_1", 1.0)

        assert storage.state.remaining == {}

    def test_save_replaces_documents(self):
        storage = InMemoryLedgerStorage()

        storage.save(BudgetState(cumulative_balance=5.0), [])

        assert storage.load().state.cumulative_balance == 5.0
        assert storage.save_count == 1
