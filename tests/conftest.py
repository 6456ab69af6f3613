"""
Shared pytest fixtures.

API tests build the app with test settings and swap every repository and
the notifier for the fakes of a single FakeStore.
"""
import pytest
from fastapi.testclient import TestClient

from api import deps
from backend.main import create_app
from backend.settings import Settings
from tests.fakes import FakeStore, create_store

TEST_USER_ID = "user-1"


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        environment="test",
        remind_secret="s3cret",
        telegram_bot_token="123:abc",
        webapp_url="https://app.example",
        supabase_service_role_key="service-key",
        _env_file=None,
    )


@pytest.fixture
def store() -> FakeStore:
    """Built-in program (5 days, push-ups 50 / squats 100) bound to TEST_USER_ID."""
    return create_store(user_id=TEST_USER_ID)


@pytest.fixture
def app(test_settings, store):
    app = create_app(settings=test_settings)
    app.dependency_overrides[deps.get_settings] = lambda: test_settings
    app.dependency_overrides[deps.get_program_repo] = lambda: store.programs
    app.dependency_overrides[deps.get_exercise_writer] = lambda: store.writer
    app.dependency_overrides[deps.get_user_state_repo] = lambda: store.states
    app.dependency_overrides[deps.get_progress_repo] = lambda: store.progress
    app.dependency_overrides[deps.get_history_repo] = lambda: store.history
    app.dependency_overrides[deps.get_subscriber_repo] = lambda: store.subscribers
    app.dependency_overrides[deps.get_notifier] = lambda: store.notifier
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def user_headers() -> dict:
    return {"X-User-Id": TEST_USER_ID}
