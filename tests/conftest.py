"""Test configuration and fixtures."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from typing import Any
from unittest.mock import Mock

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from github_label_sync.logging import JsonFormatter


class FakeResponse(requests.Response):
    """A real `requests.Response` with a canned body that records `close()`."""

    def __init__(self, status_code: int, reason: str, payload: Any = None) -> None:
        super().__init__()
        self.status_code = status_code
        self.reason = reason
        self._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
        self._content_consumed = True
        self.closed = False

    def close(self) -> None:
        self.closed = True
        super().close()


@pytest.fixture
def make_response() -> Callable[..., FakeResponse]:
    return FakeResponse


@pytest.fixture
def route_session() -> Callable[[dict[tuple[str, str], Any]], Mock]:
    """Build a mocked `requests.Session` answering from a (method, url) routing table."""

    def _build(routes: dict[tuple[str, str], Any]) -> Mock:
        session = Mock(spec=requests.Session)
        session.headers = CaseInsensitiveDict()

        def _request(method: str, url: str, **kwargs: Any) -> FakeResponse:
            try:
                handler = routes[(method, url)]
            except KeyError:
                raise AssertionError(f"Unexpected request: {method} {url}") from None
            if isinstance(handler, BaseException):
                raise handler
            if isinstance(handler, FakeResponse):
                return handler
            return handler(**kwargs)

        session.request.side_effect = _request
        return session

    return _build


@pytest.fixture(autouse=True)
def _restore_root_logging() -> Iterator[None]:
    root = logging.getLogger()
    level = root.level
    yield
    for handler in list(root.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root.removeHandler(handler)
    root.setLevel(level)


@pytest.fixture
def clean_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Run from an empty directory with no label sync variables set."""

    for name in (
        "GITHUB_TOKEN",
        "GITHUB_BASE_URL",
        "LOG_LEVEL",
        "LABEL_SYNC_MAX_WORKERS",
        "LABEL_SYNC_REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
