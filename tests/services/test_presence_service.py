# tests/services/test_presence_service.py
"""Tests for heartbeats, the online window and presence sweeping."""

from datetime import timedelta

import pytest
from sqlalchemy import select

from tally_stage.db.time import to_millis
from tally_stage.models import PresenceRecord
from tally_stage.services.errors import InvalidIdentityError
from tally_stage.services.presence_service import (
    get_online_identities,
    heartbeat,
    sweep_presence,
)


def _online(db, now) -> set[str]:
    return {r.identity for r in get_online_identities(db, now=now)}


def _all_identities(db) -> list[str]:
    return list(db.scalars(select(PresenceRecord.identity).order_by(PresenceRecord.identity)))


def test_heartbeat_refreshes_last_seen(db_session, base_time) -> None:
    t1 = base_time
    t2 = base_time + timedelta(seconds=15)
    heartbeat(db_session, "alice", now=t1)
    record = heartbeat(db_session, "alice", now=t2)

    assert record.last_seen == to_millis(t2)
    assert _all_identities(db_session) == ["alice"]


def test_online_window_boundaries(db_session, base_time) -> None:
    heartbeat(db_session, "alice", now=base_time)

    assert "alice" in _online(db_session, base_time + timedelta(seconds=29))
    assert "alice" in _online(db_session, base_time + timedelta(seconds=30))
    assert "alice" not in _online(db_session, base_time + timedelta(seconds=31))
    # Passive expiry: the row is still stored.
    assert _all_identities(db_session) == ["alice"]


def test_online_window_follows_settings(db_session, base_time, override_settings) -> None:
    override_settings(online_window_seconds=5)
    heartbeat(db_session, "alice", now=base_time)

    assert _online(db_session, base_time + timedelta(seconds=6)) == set()


def test_rename_removes_previous_record(db_session, base_time) -> None:
    heartbeat(db_session, "A", now=base_time)
    heartbeat(db_session, "B", "A", now=base_time + timedelta(seconds=1))

    assert _all_identities(db_session) == ["B"]
    assert _online(db_session, base_time + timedelta(seconds=2)) == {"B"}


def test_rename_with_unknown_previous_is_noop(db_session, base_time) -> None:
    heartbeat(db_session, "B", "never-seen", now=base_time)

    assert _all_identities(db_session) == ["B"]


def test_previous_equal_to_identity_keeps_record(db_session, base_time) -> None:
    heartbeat(db_session, "alice", now=base_time)
    heartbeat(db_session, "alice", "alice", now=base_time + timedelta(seconds=1))

    assert _all_identities(db_session) == ["alice"]


def test_rename_onto_existing_identity_updates_it(db_session, base_time) -> None:
    heartbeat(db_session, "A", now=base_time)
    heartbeat(db_session, "B", now=base_time)
    later = base_time + timedelta(seconds=3)
    record = heartbeat(db_session, "B", "A", now=later)

    assert _all_identities(db_session) == ["B"]
    assert record.last_seen == to_millis(later)


@pytest.mark.parametrize("identity", ["", "  ", None])
def test_heartbeat_rejects_blank_identity(db_session, base_time, identity) -> None:
    with pytest.raises(InvalidIdentityError):
        heartbeat(db_session, identity, now=base_time)

    assert _all_identities(db_session) == []


def test_blank_identity_does_not_delete_previous(db_session, base_time) -> None:
    heartbeat(db_session, "A", now=base_time)

    with pytest.raises(InvalidIdentityError):
        heartbeat(db_session, "", "A", now=base_time)

    assert _all_identities(db_session) == ["A"]


def test_stable_key_with_mutable_name(db_session, base_time) -> None:
    heartbeat(db_session, "user-1", name="Alice", now=base_time)
    record = heartbeat(db_session, "user-1", name="Alicia", now=base_time + timedelta(seconds=1))

    assert record.identity == "user-1"
    assert record.name == "Alicia"
    assert _all_identities(db_session) == ["user-1"]


def test_name_defaults_to_identity(db_session, base_time) -> None:
    record = heartbeat(db_session, "bob", now=base_time)
    assert record.name == "bob"


def test_sweep_removes_only_stale_records(db_session, base_time) -> None:
    heartbeat(db_session, "stale", now=base_time - timedelta(hours=2))
    heartbeat(db_session, "fresh", now=base_time)

    removed = sweep_presence(db_session, older_than_seconds=3600, now=base_time)

    assert removed == 1
    assert _all_identities(db_session) == ["fresh"]


def test_sweep_never_cuts_into_online_window(db_session, base_time) -> None:
    heartbeat(db_session, "alice", now=base_time - timedelta(seconds=10))

    removed = sweep_presence(db_session, older_than_seconds=1, now=base_time)

    assert removed == 0
    assert _online(db_session, base_time) == {"alice"}
