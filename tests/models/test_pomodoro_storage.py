"""Unit tests for pomo_cli.models.pomodoro.storage.

Every ``TimerStateStore`` is constructed on a *tmp_path* file, and the
module-level helpers run against a monkeypatched $HOME, so the real
``~/.pomo.json`` is never touched.
"""

from __future__ import annotations

import json
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from pomo_cli.models.pomodoro.exceptions import StateSaveError
from pomo_cli.models.pomodoro.state import TimerPhase, TimerState
from pomo_cli.models.pomodoro.storage import (
    PersistedTimerState,
    TimerStateStore,
    config_path,
    load_state,
    save_state,
)

_T0 = 1_700_000_000


@pytest.fixture()
def store(tmp_path):
    return TimerStateStore(tmp_path / ".pomo.json")


@pytest.fixture()
def frozen_time():
    with patch("pomo_cli.models.pomodoro.state.time.time", return_value=float(_T0)):
        yield _T0


def _write(store: TimerStateStore, data) -> None:
    text = data if isinstance(data, str) else json.dumps(data)
    store.path.write_text(text, encoding="utf-8")


# ---------------------------------------------------------------------------
# config_path
# ---------------------------------------------------------------------------


class TestConfigPath:
    def test_ends_with_pomo_json(self):
        assert str(config_path()).endswith(".pomo.json")

    def test_lives_in_home(self, home_dir):
        assert config_path() == home_dir / ".pomo.json"

    def test_falls_back_to_tmp_without_home(self, monkeypatch, tmp_path):
        monkeypatch.delenv("HOME", raising=False)
        with patch("pomo_cli.config.tempfile.gettempdir", return_value=str(tmp_path)):
            assert config_path() == tmp_path / ".pomo.json"

    def test_store_defaults_to_config_path(self, home_dir):
        assert TimerStateStore().path == home_dir / ".pomo.json"


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------


class TestLoad:
    def test_missing_file_returns_default(self, store):
        assert store.load() == TimerState()

    def test_corrupt_json_returns_default(self, store):
        _write(store, "{not json")
        assert store.load() == TimerState()

    def test_empty_file_returns_default(self, store):
        _write(store, "")
        assert store.load() == TimerState()

    def test_unknown_phase_returns_default(self, store):
        _write(
            store,
            {"phase": "Nap", "remaining_seconds": 10, "is_paused": False, "last_update": None},
        )
        assert store.load() == TimerState()

    def test_negative_remaining_returns_default(self, store):
        _write(
            store,
            {"phase": "Work", "remaining_seconds": -1, "is_paused": False, "last_update": None},
        )
        assert store.load() == TimerState()

    def test_remaining_above_longest_phase_returns_default(self, store):
        _write(
            store,
            {"phase": "Work", "remaining_seconds": 1501, "is_paused": False, "last_update": None},
        )
        assert store.load() == TimerState()

    def test_missing_field_returns_default(self, store):
        _write(store, {"phase": "Work", "remaining_seconds": 10})
        assert store.load() == TimerState()

    @pytest.mark.parametrize(
        "field, value",
        [
            ("remaining_seconds", "60"),
            ("remaining_seconds", 60.5),
            ("is_paused", "yes"),
            ("is_paused", 1),
            ("last_update", "1700000000"),
            ("phase", "work"),
        ],
    )
    def test_wrongly_typed_field_returns_default(self, store, field, value):
        data = {"phase": "Work", "remaining_seconds": 60, "is_paused": False, "last_update": None}
        data[field] = value
        _write(store, data)
        assert store.load() == TimerState()

    def test_directory_instead_of_file_returns_default(self, store):
        store.path.mkdir()
        assert store.load() == TimerState()

    def test_loads_saved_fields(self, store, frozen_time):
        _write(
            store,
            {"phase": "Break", "remaining_seconds": 120, "is_paused": True, "last_update": _T0 - 50},
        )
        state = store.load()
        assert state.phase is TimerPhase.BREAK
        assert state.remaining_seconds == 120  # paused: nothing deducted
        assert state.is_paused is True
        assert state.last_update == _T0

    def test_load_accounts_for_time_since_last_save(self, store, frozen_time):
        _write(
            store,
            {"phase": "Work", "remaining_seconds": 600, "is_paused": False, "last_update": _T0 - 100},
        )
        state = store.load()
        assert state.remaining_seconds == 500
        assert state.last_update == _T0

    def test_load_after_long_absence_is_finished(self, store, frozen_time):
        _write(
            store,
            {"phase": "Work", "remaining_seconds": 600, "is_paused": False, "last_update": _T0 - 86400},
        )
        assert store.load().is_finished()

    def test_null_last_update_deducts_nothing(self, store, frozen_time):
        _write(
            store,
            {"phase": "Work", "remaining_seconds": 600, "is_paused": False, "last_update": None},
        )
        state = store.load()
        assert state.remaining_seconds == 600
        assert state.last_update == _T0


# ---------------------------------------------------------------------------
# save
# ---------------------------------------------------------------------------


class TestSave:
    def test_writes_pretty_json(self, store):
        store.save(TimerState(TimerPhase.BREAK, 300, True, 1234567890))
        text = store.path.read_text(encoding="utf-8")
        assert json.loads(text) == {
            "phase": "Break",
            "remaining_seconds": 300,
            "is_paused": True,
            "last_update": 1234567890,
        }
        assert '\n  "phase"' in text

    def test_overwrites_existing_file(self, store):
        _write(store, "garbage")
        store.save(TimerState())
        assert json.loads(store.path.read_text())["remaining_seconds"] == 1500

    def test_leaves_no_temp_file(self, store, tmp_path):
        store.save(TimerState())
        assert not (tmp_path / ".pomo.json.tmp").exists()
        assert store.path.exists()

    def test_round_trip_through_file(self, store, frozen_time):
        original = TimerState(TimerPhase.BREAK, 42, True, _T0)
        store.save(original)
        assert store.load() == original

    def test_unwritable_location_raises(self, tmp_path):
        store = TimerStateStore(tmp_path / "missing-dir" / ".pomo.json")
        with pytest.raises(StateSaveError, match="Failed to save state"):
            store.save(TimerState())

    def test_replace_failure_raises(self, store, mocker):
        _write(store, json.dumps(TimerState().to_dict()))
        mocker.patch(
            "pomo_cli.models.pomodoro.storage.os.replace",
            side_effect=PermissionError("read-only"),
        )
        with pytest.raises(StateSaveError):
            store.save(TimerState(TimerPhase.BREAK, 10))

        assert not store.path.with_name(".pomo.json.tmp").exists()
        assert json.loads(store.path.read_text())["phase"] == "Work"

    def test_write_failure_removes_temp_file(self, store, mocker):
        # open() creates the temp file, then write() rejects a non-string
        mocker.patch("pomo_cli.models.pomodoro.storage.json.dumps", return_value=123)
        with pytest.raises(StateSaveError):
            store.save(TimerState())
        assert not store.path.with_name(".pomo.json.tmp").exists()
        assert not store.path.exists()


# ---------------------------------------------------------------------------
# PersistedTimerState
# ---------------------------------------------------------------------------


class TestPersistedTimerState:
    @pytest.mark.parametrize(
        "state",
        [
            TimerState(),
            TimerState(TimerPhase.BREAK, 300, True, 1234567890),
            TimerState(TimerPhase.WORK, 0, False, 0),
            TimerState(TimerPhase.BREAK, 17, False, None),
        ],
    )
    def test_round_trip(self, state):
        document = json.dumps(state.to_dict())
        assert PersistedTimerState.model_validate_json(document).to_state() == state

    def test_missing_last_update_is_null(self):
        document = json.dumps({"phase": "Work", "remaining_seconds": 60, "is_paused": False})
        state = PersistedTimerState.model_validate_json(document).to_state()
        assert state.last_update is None
        assert state.phase is TimerPhase.WORK

    def test_rejects_string_typed_numbers(self):
        document = json.dumps(
            {"phase": "Work", "remaining_seconds": "60", "is_paused": "yes", "last_update": None}
        )
        with pytest.raises(ValidationError):
            PersistedTimerState.model_validate_json(document)


# ---------------------------------------------------------------------------
# Module-level helpers
# ---------------------------------------------------------------------------


class TestModuleHelpers:
    def test_save_then_load_uses_home(self, home_dir, frozen_time):
        save_state(TimerState(TimerPhase.BREAK, 30, True, _T0))
        assert (home_dir / ".pomo.json").exists()
        assert load_state() == TimerState(TimerPhase.BREAK, 30, True, _T0)

    def test_load_without_file_is_default(self, home_dir):
        assert load_state() == TimerState()
