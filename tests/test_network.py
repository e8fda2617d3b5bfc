"""Tests for the remote source fetcher."""

from dataclasses import replace

import pytest
import requests

from eink_image.config import SETTINGS
from eink_image.errors import SourceFetchError
from eink_image.infrastructure.network import SourceFetcher, is_remote


class FakeResponse:
    def __init__(self, status: int, content: bytes = b"") -> None:
        self.status_code = status
        self.content = content

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    def __init__(self, outcomes) -> None:
        self.headers = {}
        self.outcomes = list(outcomes)
        self.calls = []

    def get(self, url, timeout):
        self.calls.append((url, timeout))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_fetcher(outcomes, retries=2):
    session = FakeSession(outcomes)
    fetcher = SourceFetcher(
        session_factory=lambda: session,
        settings=replace(SETTINGS, retries=retries, timeout=3.0),
        backoff=0,
    )
    return fetcher, session


def test_fetch_returns_body_and_sets_user_agent():
    fetcher, session = make_fetcher([FakeResponse(200, b"png-bytes")])

    assert fetcher.fetch("http://example.com/a.png") == b"png-bytes"
    assert session.calls == [("http://example.com/a.png", 3.0)]
    assert session.headers["User-Agent"].startswith("eink-image/")


def test_fetch_retries_after_failures():
    fetcher, session = make_fetcher(
        [requests.ConnectionError("refused"), FakeResponse(503), FakeResponse(200, b"ok")]
    )

    assert fetcher.fetch("https://example.com/a.png") == b"ok"
    assert len(session.calls) == 3


def test_fetch_gives_up_after_retries():
    fetcher, session = make_fetcher([FakeResponse(500), FakeResponse(500)], retries=1)

    with pytest.raises(SourceFetchError) as excinfo:
        fetcher.fetch("http://example.com/a.png")

    assert len(session.calls) == 2
    assert excinfo.value.stage == "decode"
    assert excinfo.value.error_code == "SOURCE_FETCH_FAILED"


@pytest.mark.parametrize("url", ["ftp://example.com/a.png", "http://", "/tmp/a.png"])
def test_fetch_rejects_non_http_urls(url):
    fetcher, session = make_fetcher([])

    with pytest.raises(SourceFetchError):
        fetcher.fetch(url)

    assert session.calls == []


@pytest.mark.parametrize(
    "source, expected",
    [("http://x/a.png", True), ("https://x/a.png", True), ("a.png", False), ("C:/images/a.png", False)],
)
def test_is_remote(source, expected):
    assert is_remote(source) is expected
