"""
Tests for the telegram router.

- POST /telegram/webhook
- GET /telegram/remind
"""

import pytest
from fastapi import HTTPException

from api import deps
from tests.fakes import subscriber

pytestmark = pytest.mark.unit


def _start(chat_id=777, user_id=42):
    return {
        "update_id": 1,
        "message": {"chat": {"id": chat_id}, "from": {"id": user_id}, "text": "/start"},
    }


class TestWebhook:
    def test_start(self, client, store):
        response = client.post("/telegram/webhook", json=_start())

        assert response.json() == {"ok": True}
        assert store.subscribers.subscribers[0].chat_id == "777"
        assert store.notifier.sent[0]["button_url"] == "https://app.example"

    def test_other_text_is_acknowledged(self, client, store):
        update = {"update_id": 2, "message": {"chat": {"id": 1}, "text": "hi"}}

        response = client.post("/telegram/webhook", json=update)

        assert response.json() == {"ok": True}
        assert store.notifier.sent == []

    def test_failure_still_answers_200(self, app, client, store):
        app.dependency_overrides[deps.get_notifier] = lambda: None

        response = client.post("/telegram/webhook", json=_start())

        assert response.status_code == 200
        assert response.json() == {"ok": False, "error": "BOT_TOKEN or WEBAPP_URL missing"}


class TestRemind:
    @pytest.mark.parametrize("query", ["", "?secret=wrong"])
    def test_bad_secret(self, client, query):
        response = client.get(f"/telegram/remind{query}")

        assert response.status_code == 401
        assert response.json()["detail"] == "Unauthorized"

    def test_run(self, client, store):
        store.subscribers.subscribers = [subscriber("a"), subscriber("b"), subscriber("a", "dup")]

        response = client.get("/telegram/remind?secret=s3cret")

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["totalUsers"] == 2
        assert data["reminded"] == 2
        assert data["errors"] == []
        assert [m["chat_id"] for m in store.notifier.sent] == ["chat-a", "chat-b"]

    @pytest.mark.parametrize("query,status", [("", 401), ("?secret=s3cret", 503)])
    def test_secret_checked_before_store(self, app, client, query, status):
        def no_database():
            raise HTTPException(status_code=503, detail="Database not available.")

        app.dependency_overrides.pop(deps.get_subscriber_repo)
        app.dependency_overrides.pop(deps.get_history_repo)
        app.dependency_overrides[deps.get_supabase_client_required] = no_database

        response = client.get(f"/telegram/remind{query}")

        assert response.status_code == status
