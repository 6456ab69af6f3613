"""
User identity bootstrap for clients.

A client either runs inside a host platform that eventually supplies a user
id (the Telegram web app shell does this asynchronously), or standalone, in
which case a random identifier is generated once and persisted locally.
"""
import json
import logging
import os
import uuid
from pathlib import Path
from typing import Callable, Optional

from tenacity import (
    RetryError,
    Retrying,
    before_sleep_log,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

logger = logging.getLogger(__name__)

PLATFORM_USER_ENV = "FITSTREAK_PLATFORM_USER_ID"

IdentitySource = Callable[[], Optional[str]]


def platform_identity_from_env() -> Optional[str]:
    """Read the host-supplied user id, if the host has provided one yet."""
    value = os.environ.get(PLATFORM_USER_ENV, "").strip()
    return value or None


class LocalIdentityStore:
    """Persists a generated identifier as JSON, e.g. ``{"user_id": "..."}``."""

    def __init__(self, path: str):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[str]:
        if not self._path.exists():
            return None
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable identity file {self._path}: {e}")
            return None
        user_id = data.get("user_id") if isinstance(data, dict) else None
        return str(user_id) if user_id else None

    def save(self, user_id: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps({"user_id": user_id}), encoding="utf-8")

    def get_or_create(self) -> str:
        """Return the stored identifier, generating and saving one if absent."""
        user_id = self.load()
        if user_id:
            return user_id
        user_id = str(uuid.uuid4())
        self.save(user_id)
        logger.info(f"Generated local identity {user_id}")
        return user_id


class IdentityResolver:
    """
    Resolve the user id: poll the platform source, then fall back locally.

    The platform source is polled up to ``max_attempts`` times with a fixed
    wait between polls. Only when every poll returns nothing is the local
    store consulted, so a platform id always wins when one shows up in time.
    """

    def __init__(
        self,
        platform_source: IdentitySource,
        local_store: LocalIdentityStore,
        *,
        max_attempts: int = 20,
        wait_seconds: float = 0.15,
    ):
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self._platform_source = platform_source
        self._local_store = local_store
        self._max_attempts = max_attempts
        self._wait_seconds = wait_seconds

    def _poll_platform(self) -> Optional[str]:
        retrying = Retrying(
            retry=retry_if_result(lambda value: not value),
            stop=stop_after_attempt(self._max_attempts),
            wait=wait_fixed(self._wait_seconds),
            before_sleep=before_sleep_log(logger, logging.DEBUG),
        )
        try:
            value = retrying(self._platform_source)
        except RetryError:
            return None
        return str(value)

    def resolve(self) -> str:
        platform_id = self._poll_platform()
        if platform_id:
            logger.info(f"Using platform identity {platform_id}")
            return platform_id

        logger.info(
            f"No platform identity after {self._max_attempts} attempts, "
            f"using local identity from {self._local_store.path}"
        )
        return self._local_store.get_or_create()


def create_identity_resolver(settings) -> IdentityResolver:
    """Resolver wired from settings, polling the environment for a platform id."""
    return IdentityResolver(
        platform_identity_from_env,
        LocalIdentityStore(settings.identity_file),
        max_attempts=settings.identity_max_attempts,
        wait_seconds=settings.identity_retry_wait_seconds,
    )
