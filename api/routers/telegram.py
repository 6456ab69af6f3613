"""
Telegram router.

This router contains endpoints for:
- /telegram/webhook - Bot updates (/start subscribes and welcomes the user)
- /telegram/remind - Reminder batch, guarded by a shared secret

The webhook always answers 200 so Telegram does not redeliver an update that
failed on our side.
"""

import hmac
import logging
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query

from api.deps import get_handle_bot_update, get_send_reminders, get_settings
from api.errors import to_http_exception
from application.exceptions import AuthorizationError, FitStreakError
from application.use_cases import HandleBotUpdateUseCase, SendRemindersUseCase
from backend.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/telegram",
    tags=["Telegram"],
)


@router.post("/webhook")
def telegram_webhook(
    update: Dict[str, Any] = Body(...),
    handler: HandleBotUpdateUseCase = Depends(get_handle_bot_update),
):
    try:
        handler.execute(update)
    except FitStreakError as e:
        logger.error(f"Telegram update {update.get('update_id')} failed: {e.message}")
        return {"ok": False, "error": e.message}
    return {"ok": True}


def verify_remind_secret(
    secret: Optional[str] = Query(None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Reject the call unless ``?secret=`` equals REMIND_SECRET."""
    expected = settings.remind_secret
    if not expected or not secret or not hmac.compare_digest(secret, expected):
        logger.warning("Reminder run rejected: bad secret")
        raise to_http_exception(AuthorizationError("Unauthorized"))


@router.get("/remind", dependencies=[Depends(verify_remind_secret)])
def send_reminders(
    reminders: SendRemindersUseCase = Depends(get_send_reminders),
):
    """
    Remind every subscriber who has not closed a day today.

    Meant for a daily cron. The secret is checked before any store access.
    """
    return reminders.execute().to_dict()
