"""Authenticated HTTP transport for the GitHub labels API.

This intentionally wraps a single `requests.Session` so the lister and updater never
build headers or URLs themselves and tests can inject a fake session.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import requests
from requests.adapters import DEFAULT_POOLSIZE, HTTPAdapter

from github_label_sync.errors import TransportError
from github_label_sync.labels import Label

logger = logging.getLogger(__name__)

# The symmetra preview media type is what makes GitHub accept and return label descriptions.
LABELS_ACCEPT = "application/vnd.github.symmetra-preview+json"

DEFAULT_BASE_URL = "https://api.github.com"


def status_text(response: requests.Response) -> str:
    """Return the HTTP status line text, e.g. ``"404 Not Found"``."""

    reason = response.reason or ""
    return f"{response.status_code} {reason}".strip()


class GitHubClient:
    """Issues single authenticated requests against the GitHub REST API.

    Non-2xx responses are returned to the caller untouched; only failures that never
    produced a response are raised, as `TransportError`.
    """

    def __init__(
        self,
        *,
        token: str = "",
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self._rest_base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session if session is not None else requests.Session()
        self._pool_size = DEFAULT_POOLSIZE

        headers = {
            "Accept": LABELS_ACCEPT,
            "User-Agent": "github-label-sync",
        }
        if token:
            headers["Authorization"] = f"Bearer {token}"
        else:
            logger.warning("No GitHub token configured; requests will be unauthenticated")
        self._session.headers.update(headers)

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def ensure_pool_size(self, size: int) -> None:
        """Keep at least `size` pooled connections per host for concurrent callers."""

        if size <= self._pool_size:
            return
        adapter = HTTPAdapter(pool_maxsize=size)
        self._session.mount("https://", adapter)
        self._session.mount("http://", adapter)
        self._pool_size = size
        logger.debug("Resized connection pool", extra={"pool_size": size})

    def labels_url(self, repository: str) -> str:
        """Return the label collection URL for "owner/repo"."""

        repo = repository.strip().strip("/")
        if not repo:
            raise ValueError("repository is required (format: 'owner/repo')")
        return f"{self._rest_base_url}/repos/{repo}/labels"

    def label_url(self, repository: str, name: str) -> str:
        """Return the per-label URL; the name is quoted into a single path segment."""

        return f"{self.labels_url(repository)}/{quote(name, safe='')}"

    def request(
        self,
        method: str,
        url: str,
        body: Label | str | bytes | None = None,
    ) -> requests.Response:
        """Send one request and return the raw response, whatever its status.

        Raises:
            TransportError: If no HTTP response was obtained.
        """

        data: str | bytes | None
        if isinstance(body, Label):
            data = body.to_json().encode("utf-8")
        elif isinstance(body, str):
            data = body.encode("utf-8")
        else:
            data = body

        headers: dict[str, Any] | None = None
        if data is not None:
            headers = {"Content-Type": "application/json"}

        logger.debug("GitHub request", extra={"method": method, "url": url})
        try:
            resp = self._session.request(
                method,
                url,
                data=data,
                headers=headers,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            # Some failures still carry a partially read response.
            partial = getattr(e, "response", None)
            if partial is not None:
                partial.close()
            logger.debug(
                "GitHub request failed", extra={"method": method, "url": url, "error": str(e)}
            )
            raise TransportError(str(e) or type(e).__name__) from e

        logger.debug(
            "GitHub response",
            extra={"method": method, "url": url, "status": resp.status_code},
        )
        return resp

    def close(self) -> None:
        self._session.close()
