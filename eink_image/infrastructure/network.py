from __future__ import annotations

import logging
import time
from typing import Callable
from urllib.parse import urlsplit

import requests

from ..config import SETTINGS, ServiceSettings
from ..errors import SourceFetchError

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], requests.Session]

USER_AGENT = "eink-image/0.2"


def is_remote(source: str) -> bool:
    return urlsplit(str(source)).scheme in ("http", "https")


class SourceFetcher:
    def __init__(
        self,
        session_factory: SessionFactory | None = None,
        settings: ServiceSettings = SETTINGS,
        backoff: float = 0.4,
    ) -> None:
        self._session_factory = session_factory or requests.Session
        self._settings = settings
        self._backoff = backoff
        self._session = self._create_session()

    def _create_session(self) -> requests.Session:
        session = self._session_factory()
        session.headers.update({"User-Agent": USER_AGENT})
        return session

    def fetch(self, url: str) -> bytes:
        """Download ``url``, retrying ``settings.retries`` times with linear back-off."""
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise SourceFetchError(url, "only http and https URLs are supported")

        last_exception: Exception | None = None
        attempts = self._settings.retries + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self._session.get(url, timeout=self._settings.timeout)
                response.raise_for_status()
                return response.content
            except requests.RequestException as exc:
                last_exception = exc
                logger.warning("Fetch of %s failed (attempt %d/%d): %s", url, attempt, attempts, exc)
                if attempt < attempts:
                    time.sleep(self._backoff * attempt)
        raise SourceFetchError(url, str(last_exception))


FETCHER = SourceFetcher()
