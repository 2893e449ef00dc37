import json
from datetime import datetime, timezone

import pytest

from backend.muscles import MUSCLE_GROUPS, MuscleGroup
from backend.services.app_state import log_session, new_app_state
from backend.services.fatigue import initial
from backend.services.history import WorkoutSession
from backend.services.snapshot import SCHEMA_VERSION, dump_snapshot, load_snapshot

T0 = datetime(2025, 3, 1, 8, 0, tzinfo=timezone.utc)
NOW = datetime(2025, 3, 9, 8, 0, tzinfo=timezone.utc)


def _populated():
    app = new_app_state(T0)
    app = log_session(
        app,
        WorkoutSession(muscle=MuscleGroup.CHEST, minutes=45, load=3, logged_at=T0, note="bench"),
        T0,
        18,
    )
    return log_session(
        app,
        WorkoutSession(muscle=MuscleGroup.CARDIO, minutes=30, load=2, logged_at=T0),
        T0,
        18,
    )


def _valid_document() -> dict:
    return json.loads(dump_snapshot(_populated()))


def _assert_fresh(app):
    assert app.fatigue == initial()
    assert len(app.history) == 0
    assert app.last_evaluated == NOW


def test_dump_layout():
    doc = _valid_document()
    assert set(doc) == {"schema_version", "fatigue", "history", "last_evaluated"}
    assert doc["schema_version"] == SCHEMA_VERSION
    assert set(doc["fatigue"]) == {g.value for g in MUSCLE_GROUPS}
    assert doc["fatigue"]["chest"] == 98.5
    assert [s["muscle"] for s in doc["history"]] == ["cardio", "chest"]
    assert doc["history"][1]["note"] == "bench"


def test_load_restores_state():
    original = _populated()
    restored = load_snapshot(dump_snapshot(original), NOW)
    assert restored == original


def test_integer_scores_accepted():
    doc = _valid_document()
    doc["fatigue"] = {g.value: 0 for g in MUSCLE_GROUPS}
    app = load_snapshot(json.dumps(doc), NOW)
    assert app.fatigue == initial()
    assert len(app.history) == 2


def test_missing_snapshot_yields_initial():
    _assert_fresh(load_snapshot(None, NOW))


def _drop_field(doc, field):
    del doc[field]


def _drop_group(doc):
    del doc["fatigue"]["core"]


def _bad_score(doc):
    doc["fatigue"]["chest"] = 140


def _bad_load(doc):
    doc["history"][0]["load"] = 9


def _bad_minutes(doc):
    doc["history"][0]["minutes"] = 0


def _unknown_muscle(doc):
    doc["history"][0]["muscle"] = "forearms"


def _duplicate_id(doc):
    doc["history"][1]["id"] = doc["history"][0]["id"]


def _future_version(doc):
    doc["schema_version"] = SCHEMA_VERSION + 1


def _extra_field(doc):
    doc["surprise"] = True


def _naive_timestamp(doc):
    doc["last_evaluated"] = "2025-03-01T08:00:00"


@pytest.mark.parametrize(
    "corrupt",
    [
        lambda d: _drop_field(d, "history"),
        lambda d: _drop_field(d, "fatigue"),
        lambda d: _drop_field(d, "last_evaluated"),
        lambda d: _drop_field(d, "schema_version"),
        _drop_group,
        _bad_score,
        _bad_load,
        _bad_minutes,
        _unknown_muscle,
        _duplicate_id,
        _future_version,
        _extra_field,
        _naive_timestamp,
    ],
)
def test_invalid_snapshot_falls_back(corrupt):
    doc = _valid_document()
    corrupt(doc)
    _assert_fresh(load_snapshot(json.dumps(doc), NOW))


@pytest.mark.parametrize("raw", ["", "not json", "[]", "null", '{"fatigue": '])
def test_unparsable_snapshot_falls_back(raw: str):
    _assert_fresh(load_snapshot(raw, NOW))
