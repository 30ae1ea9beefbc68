# mypy: ignore-errors
# tests/v1/test_activity.py
"""Tests for the recent activity endpoint."""

import pytest
from fastapi import status


def _increment(client, name: str) -> None:
    response = client.post("/api/v1/counters/increment", json={"actorIdentity": name})
    assert response.status_code == status.HTTP_204_NO_CONTENT


def test_recent_activity_empty(client) -> None:
    response = client.get("/api/v1/activity/recent")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == []


def test_recent_activity_newest_first_and_capped(client) -> None:
    for i in range(12):
        _increment(client, f"user-{i}")

    events = client.get("/api/v1/activity/recent").json()

    assert len(events) == 10
    assert events[0] == {
        "actorIdentity": "user-11",
        "action": "incremented counter",
        "timestamp": events[0]["timestamp"],
    }
    timestamps = [e["timestamp"] for e in events]
    assert timestamps == sorted(timestamps, reverse=True)
    assert len(set(timestamps)) == 10


def test_recent_activity_custom_limit(client) -> None:
    for name in ("alice", "bob", "carol"):
        _increment(client, name)

    events = client.get("/api/v1/activity/recent", params={"limit": 2}).json()
    assert [e["actorIdentity"] for e in events] == ["carol", "bob"]


def test_recent_activity_since_cutoff(client) -> None:
    _increment(client, "alice")
    first = client.get("/api/v1/activity/recent").json()[0]["timestamp"]
    _increment(client, "bob")

    events = client.get("/api/v1/activity/recent", params={"since": first}).json()
    assert [e["actorIdentity"] for e in events] == ["bob"]


@pytest.mark.parametrize("params", [{"limit": 0}, {"limit": 101}, {"since": -1}])
def test_recent_activity_validates_query(client, params) -> None:
    response = client.get("/api/v1/activity/recent", params=params)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
