"""Tests for the HTTP API."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from fitness_tracker.api.app import create_app
from fitness_tracker.domain.errors import StoreError


def _headers(user_id) -> dict[str, str]:  # type: ignore[no-untyped-def]
    return {"X-Api-Token": "api-token", "X-User-Id": str(user_id)}


@pytest.fixture
def client(container) -> TestClient:
    return TestClient(create_app(container))


def test_health(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_requests_require_token(client, user_repository) -> None:
    user = user_repository.add_user("Alice")

    assert client.get("/api/meals").status_code == 401
    response = client.get(
        "/api/meals", headers={"X-Api-Token": "wrong", "X-User-Id": str(user.id)}
    )
    assert response.status_code == 401
    response = client.get(
        "/api/meals", headers={"X-Api-Token": "api-token", "X-User-Id": "nope"}
    )
    assert response.status_code == 401


def test_meal_crud_and_records(client, user_repository) -> None:
    user = user_repository.add_user("Alice")
    headers = _headers(user.id)

    created = client.post(
        "/api/meals", json={"name": "Burrito", "calories": 900}, headers=headers
    )

    assert created.status_code == 201
    meal_id = created.json()["id"]
    assert client.get("/api/meals", headers=headers).json()[0]["name"] == "Burrito"

    updated = client.put(
        f"/api/meals/{meal_id}", json={"calories": 950}, headers=headers
    )
    assert updated.json()["calories"] == 950

    records = client.get("/api/records", headers=headers).json()
    by_type = {record["record_type"]: record for record in records}
    assert by_type["highest_calorie_meal"]["value"] == 950
    assert by_type["highest_calorie_meal"]["unit"] == "kcal"

    deleted = client.delete(f"/api/meals/{meal_id}", headers=headers)
    assert deleted.json() == {"msg": "Meal removed"}
    assert client.get("/api/meals", headers=headers).json() == []


def test_validation_and_ownership_errors(client, user_repository) -> None:
    alice = user_repository.add_user("Alice")
    bob = user_repository.add_user("Bob")
    workout = client.post(
        "/api/workouts",
        json={"name": "Run", "duration": "30 minutes", "calories_burned": 250},
        headers=_headers(alice.id),
    ).json()

    forbidden = client.delete(
        f"/api/workouts/{workout['id']}", headers=_headers(bob.id)
    )
    missing = client.delete(f"/api/workouts/{uuid4()}", headers=_headers(alice.id))
    invalid = client.post(
        "/api/meals", json={"name": "  ", "calories": 10}, headers=_headers(alice.id)
    )
    rejected = client.post(
        "/api/meals", json={"name": "Soup", "calories": -1}, headers=_headers(alice.id)
    )

    assert forbidden.status_code == 403
    assert missing.status_code == 404
    assert invalid.status_code == 400
    assert rejected.status_code == 422


def test_history_and_analytics(client, user_repository) -> None:
    user = user_repository.add_user("Alice")
    headers = _headers(user.id)
    client.post(
        "/api/workouts",
        json={"name": "Ride", "duration": "1 hour", "calories_burned": 500},
        headers=headers,
    )
    client.post("/api/meals", json={"name": "Oats", "calories": 700}, headers=headers)

    history = client.get("/api/history", headers=headers).json()
    summary = client.get("/api/analytics/summary", headers=headers).json()
    calories = client.get("/api/analytics/calorie-history", headers=headers).json()
    lifetime = client.get("/api/analytics/lifetime-stats", headers=headers).json()

    assert [item["type"] for item in history] == ["meal", "workout"]
    assert summary["average_daily_calories"] == 100
    assert summary["total_workouts"] == 1
    assert summary["current_streak"] == 1
    assert summary["workout_history"][0]["total_duration"] == 60
    assert summary["best_day"]["calories"] == 500
    assert calories[0]["total_calories"] == 700
    assert lifetime["total_calories_burned"] == 500


def test_records_update_endpoint(client, user_repository, workout_repository) -> None:
    user = user_repository.add_user("Alice")
    workout_repository.create_workout(
        user.id, "Swim", "45 min", None, datetime.now(tz=UTC)
    )

    response = client.post("/api/records/update", headers=_headers(user.id))

    updated = {r["record_type"]: r["value"] for r in response.json()["updated"]}
    assert updated["longest_workout"] == 45
    second = client.post("/api/records/update", headers=_headers(user.id))
    assert second.json() == {"updated": []}


def test_friends_flow_and_leaderboard(
    client, user_repository, completion_client, workout_repository
) -> None:
    alice = user_repository.add_user("Alice")
    bob = user_repository.add_user("Bob")
    completion_client.reply = '{"Salad": "Healthy"}'

    sent = client.post(
        f"/api/friends/send-request/{bob.id}", headers=_headers(alice.id)
    )
    duplicate = client.post(
        f"/api/friends/send-request/{bob.id}", headers=_headers(alice.id)
    )
    pending = client.get("/api/friends", headers=_headers(bob.id)).json()
    accepted = client.post(
        f"/api/friends/accept-request/{alice.id}", headers=_headers(bob.id)
    )

    assert sent.status_code == 200
    assert duplicate.status_code == 400
    assert pending["friend_requests"] == [{"id": str(alice.id), "name": "Alice"}]
    assert accepted.status_code == 200

    client.post(
        "/api/meals",
        json={"name": "Salad", "calories": 300},
        headers=_headers(bob.id),
    )
    workout_repository.create_workout(
        alice.id, "Run", "10 min", None, datetime.now(tz=UTC) - timedelta(hours=1)
    )

    board = client.get("/api/friends/leaderboard", headers=_headers(alice.id)).json()
    feed = client.get("/api/friends/feed", headers=_headers(alice.id)).json()
    search = client.get(
        "/api/friends/search", params={"q": "bo"}, headers=_headers(alice.id)
    ).json()

    assert board == [
        {"user_id": str(alice.id), "name": "Alice", "fit_score": 100.0},
        {"user_id": str(bob.id), "name": "Bob", "fit_score": 50.0},
    ]
    assert [item["user_name"] for item in feed] == ["Bob", "Alice"]
    assert search == [{"id": str(bob.id), "name": "Bob"}]


def test_leaderboard_survives_oracle_outage(
    client, user_repository, completion_client
) -> None:
    user = user_repository.add_user("Alice")
    completion_client.error = RuntimeError("quota exceeded")
    client.post(
        "/api/meals",
        json={"name": "Salad", "calories": 300},
        headers=_headers(user.id),
    )

    response = client.get("/api/friends/leaderboard", headers=_headers(user.id))

    assert response.status_code == 200
    assert response.json()[0]["fit_score"] == 0


def test_account_endpoints(client, user_repository) -> None:
    user = user_repository.add_user("Alice")
    headers = _headers(user.id)

    timezone = client.put(
        "/api/users/timezone", json={"timezone": "Europe/Berlin"}, headers=headers
    )
    bad_timezone = client.put(
        "/api/users/timezone", json={"timezone": "Nowhere/Land"}, headers=headers
    )
    profile = client.put("/api/users/profile", json={"weight": 70}, headers=headers)
    me = client.get("/api/users/me", headers=headers).json()

    assert timezone.status_code == 200
    assert bad_timezone.status_code == 400
    assert profile.json()["weight"] == 70
    assert me["timezone"] == "Europe/Berlin"
    assert me["name"] == "Alice"

    imported = client.post(
        "/api/users/import-data",
        json={
            "content": (
                "Type,Name,Date,Calories,Duration,Calories Burned\n"
                "Meal,Oats,2024-01-01T08:00:00Z,350,,\n"
                "Meal,Broken,,10,,\n"
            )
        },
        headers=headers,
    )
    exported = client.get("/api/users/export-data", headers=headers)

    assert imported.json() == {"meals": 1, "workouts": 0, "skipped": 1}
    assert exported.headers["content-type"].startswith("text/csv")
    assert "FitTrack_Export.csv" in exported.headers["content-disposition"]
    assert "Meal,Oats,2024-01-01T08:00:00+00:00,350,," in exported.text

    deleted = client.delete("/api/users/delete-account", headers=headers)

    assert deleted.status_code == 200
    assert client.get("/api/users/me", headers=headers).status_code == 404


def test_register_user(client) -> None:
    response = client.post(
        "/api/users",
        json={"name": "Carol", "email": "carol@example.com"},
        headers={"X-Api-Token": "api-token"},
    )
    duplicate = client.post(
        "/api/users",
        json={"name": "Carol", "email": "carol@example.com"},
        headers={"X-Api-Token": "api-token"},
    )

    assert response.status_code == 201
    assert response.json()["email"] == "carol@example.com"
    assert duplicate.status_code == 400


def test_store_errors_are_500(client, container, user_repository, monkeypatch) -> None:
    user = user_repository.add_user("Alice")

    def fail(*_args, **_kwargs):  # type: ignore[no-untyped-def]
        raise StoreError("database down")

    monkeypatch.setattr(container.meal_service, "list_meals", fail)

    response = client.get("/api/meals", headers=_headers(user.id))

    assert response.status_code == 500
    assert response.json() == {"msg": "database down"}
