# mypy: ignore-errors
# tests/v1/test_counters.py
"""Tests for counter endpoints."""

from datetime import timedelta

import pytest
from fastapi import status

from tally_stage.services import counter_service


def test_counters_start_at_zero(client) -> None:
    response = client.get("/api/v1/counters")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"dailyCount": 0, "totalCount": 0}


def test_increment_updates_both_counters(client) -> None:
    response = client.post("/api/v1/counters/increment", json={"actorIdentity": "alice"})
    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert response.content == b""

    client.post("/api/v1/counters/increment", json={"actorIdentity": "bob"})

    assert client.get("/api/v1/counters").json() == {"dailyCount": 2, "totalCount": 2}


def test_increment_accepts_snake_case_payload(client) -> None:
    response = client.post("/api/v1/counters/increment", json={"actor_identity": "alice"})
    assert response.status_code == status.HTTP_204_NO_CONTENT


@pytest.mark.parametrize(
    "payload",
    [{}, {"actorIdentity": ""}, {"actorIdentity": "   "}, {"actorIdentity": "x" * 65}],
)
def test_increment_rejects_invalid_identity(client, payload) -> None:
    response = client.post("/api/v1/counters/increment", json=payload)
    assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    assert client.get("/api/v1/counters").json() == {"dailyCount": 0, "totalCount": 0}
    assert client.get("/api/v1/activity/recent").json() == []


def test_daily_count_rolls_over(client, mocker, base_time) -> None:
    clock = mocker.patch.object(counter_service, "utcnow", return_value=base_time)
    client.post("/api/v1/counters/increment", json={"actorIdentity": "alice"})
    client.post("/api/v1/counters/increment", json={"actorIdentity": "bob"})

    clock.return_value = base_time + timedelta(days=1)
    assert client.get("/api/v1/counters").json() == {"dailyCount": 0, "totalCount": 2}

    client.post("/api/v1/counters/increment", json={"actorIdentity": "alice"})
    assert client.get("/api/v1/counters").json() == {"dailyCount": 1, "totalCount": 3}


def test_reset_forbidden_without_admin(client, override_settings) -> None:
    override_settings(admin_identity=None)
    client.post("/api/v1/counters/increment", json={"actorIdentity": "alice"})

    response = client.post("/api/v1/counters/reset", json={"requestedBy": "alice"})

    assert response.status_code == status.HTTP_403_FORBIDDEN
    assert client.get("/api/v1/counters").json() == {"dailyCount": 1, "totalCount": 1}


def test_reset_forbidden_for_other_identity(client, override_settings) -> None:
    override_settings(admin_identity="admin")

    assert client.post("/api/v1/counters/reset", json={"requestedBy": "alice"}).status_code == 403
    assert client.post("/api/v1/counters/reset").status_code == 403


def test_reset_by_admin(client, override_settings) -> None:
    override_settings(admin_identity="admin")
    for name in ("alice", "bob"):
        client.post("/api/v1/counters/increment", json={"actorIdentity": name})

    response = client.post("/api/v1/counters/reset", json={"requestedBy": "admin"})

    assert response.status_code == status.HTTP_204_NO_CONTENT
    assert client.get("/api/v1/counters").json() == {"dailyCount": 0, "totalCount": 0}
