"""
SendReminders Use Case.

Nudges every subscriber who has not closed a day today. Recipients are
processed one by one; a failure for one user is recorded and the batch moves
on, so the report is ``ok`` even when some users could not be reached.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from application.exceptions import FitStreakError, NotificationError
from application.ports import HistoryRepository, Notifier, SubscriberRepository
from backend.core.dates import local_iso_date
from domain.models import Subscriber

logger = logging.getLogger(__name__)

REMINDER_TEXT = "You have not completed your workout today yet. Tap Open app."
REMINDER_BUTTON = "Open app"


@dataclass
class ReminderReport:
    """Outcome of one reminder run."""

    ok: bool
    total_users: int
    reminded: int
    today: str
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "totalUsers": self.total_users,
            "reminded": self.reminded,
            "today": self.today,
            "errors": list(self.errors),
        }


def distinct_recipients(subscribers: List[Subscriber]) -> List[Subscriber]:
    """Keep subscribers with both ids, first row per user wins."""
    seen = set()
    recipients = []
    for subscriber in subscribers:
        if not subscriber.user_id or not subscriber.chat_id:
            continue
        if subscriber.user_id in seen:
            continue
        seen.add(subscriber.user_id)
        recipients.append(subscriber)
    return recipients


class SendRemindersUseCase:
    """
    Use case for the daily reminder batch.

    ``notifier`` may be None when the bot is not configured; every outstanding
    user then gets a "telegram env missing" error instead of a message.

    Usage:
        >>> use_case = SendRemindersUseCase(subscriber_repo, history_repo, notifier,
        ...                                 webapp_url="https://app.example")
        >>> report = use_case.execute()
        >>> report.reminded
        1
    """

    def __init__(
        self,
        subscriber_repo: SubscriberRepository,
        history_repo: HistoryRepository,
        notifier: Optional[Notifier],
        *,
        webapp_url: Optional[str] = None,
        today: Callable[[], str] = local_iso_date,
    ) -> None:
        self._subscriber_repo = subscriber_repo
        self._history_repo = history_repo
        self._notifier = notifier
        self._webapp_url = webapp_url
        self._today = today

    def execute(self) -> ReminderReport:
        today = self._today()

        try:
            recipients = distinct_recipients(self._subscriber_repo.list_all())
        except FitStreakError as e:
            logger.error(f"Reminder run aborted: {e.message}")
            return ReminderReport(ok=False, total_users=0, reminded=0, today=today, errors=[e.message])

        errors: List[str] = []
        reminded = 0
        for recipient in recipients:
            error = self._remind(recipient, today)
            if error is None:
                continue
            if error:
                logger.warning(error)
                errors.append(error)
            else:
                reminded += 1

        logger.info(
            f"Reminder run for {today}: {reminded}/{len(recipients)} reminded, {len(errors)} errors"
        )
        return ReminderReport(
            ok=True,
            total_users=len(recipients),
            reminded=reminded,
            today=today,
            errors=errors,
        )

    def _remind(self, recipient: Subscriber, today: str) -> Optional[str]:
        """
        Remind one user.

        Returns None when the user already closed today, "" when a message was
        sent, and the diagnostic string otherwise.
        """
        user_id = recipient.user_id
        try:
            if self._history_repo.has_closed_day(user_id, today):
                return None
        except FitStreakError as e:
            return f"history check failed for {user_id}: {e.message}"

        if self._notifier is None or not self._webapp_url:
            return f"telegram env missing for {user_id}"

        try:
            self._notifier.send_message(
                recipient.chat_id,
                REMINDER_TEXT,
                button_text=REMINDER_BUTTON,
                button_url=self._webapp_url,
            )
        except NotificationError as e:
            if e.status_code is None:
                return f"telegram fetch failed for {user_id}: {e.message}"
            return f"telegram send failed for {user_id}: {e.message}"
        return ""
