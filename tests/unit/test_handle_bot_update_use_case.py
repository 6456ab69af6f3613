"""
Unit tests for the bot /start handler.
"""
import pytest

from application.exceptions import NotificationError, StoreWriteError, ValidationError
from application.use_cases import HandleBotUpdateUseCase
from application.use_cases.handle_bot_update import WELCOME_BUTTON, WELCOME_TEXT
from tests.fakes import FakeNotifier, FakeSubscriberRepository

pytestmark = pytest.mark.unit

WEBAPP_URL = "https://app.example"


def _update(text="/start", *, chat_id=555, sender=None, key="message"):
    message = {"chat": {"id": chat_id}, "text": text}
    if sender is not None:
        message["from"] = sender
    return {"update_id": 1, key: message}


@pytest.fixture
def subscribers():
    return FakeSubscriberRepository()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def use_case(subscribers, notifier):
    return HandleBotUpdateUseCase(subscribers, notifier, webapp_url=WEBAPP_URL)


class TestHandleBotUpdate:
    def test_start_subscribes_and_welcomes(self, use_case, subscribers, notifier):
        sender = {"id": 42, "username": "runner", "first_name": "Ann", "last_name": "Lee"}

        result = use_case.execute(_update(sender=sender))

        assert result.handled is True
        assert result.subscriber.user_id == "42"
        assert result.subscriber.chat_id == "555"
        assert subscribers.subscribers[0].username == "runner"
        assert notifier.sent == [{
            "chat_id": "555",
            "text": WELCOME_TEXT,
            "button_text": WELCOME_BUTTON,
            "button_url": WEBAPP_URL,
        }]

    def test_start_with_payload(self, use_case, notifier):
        assert use_case.execute(_update("/start ref-1")).handled is True
        assert len(notifier.sent) == 1

    def test_user_id_defaults_to_chat(self, use_case):
        result = use_case.execute(_update())
        assert result.subscriber.user_id == "555"

    def test_edited_message(self, use_case):
        assert use_case.execute(_update(key="edited_message")).handled is True

    def test_repeated_start_keeps_one_row(self, use_case, subscribers):
        use_case.execute(_update(sender={"id": 42}))
        use_case.execute(_update(sender={"id": 42, "username": "new"}))

        assert len(subscribers.subscribers) == 1
        assert subscribers.subscribers[0].username == "new"

    @pytest.mark.parametrize("update", [
        {"update_id": 1},
        {"update_id": 1, "callback_query": {"id": "x"}},
        _update("hello"),
        _update(chat_id=None),
    ])
    def test_ignored_updates(self, use_case, subscribers, notifier, update):
        assert use_case.execute(update).handled is False
        assert subscribers.subscribers == []
        assert notifier.sent == []

    def test_unconfigured_bot(self, subscribers):
        use_case = HandleBotUpdateUseCase(subscribers, None, webapp_url=WEBAPP_URL)
        with pytest.raises(ValidationError, match="BOT_TOKEN or WEBAPP_URL missing"):
            use_case.execute(_update())
        assert subscribers.subscribers == []

    def test_store_failure(self, use_case, subscribers, notifier):
        subscribers.fail("upsert", "denied")
        with pytest.raises(StoreWriteError):
            use_case.execute(_update())
        assert notifier.sent == []

    def test_delivery_failure(self, use_case, notifier):
        notifier.rejected_chats.add("555")
        with pytest.raises(NotificationError):
            use_case.execute(_update())
