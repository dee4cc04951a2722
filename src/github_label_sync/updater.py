"""Concurrent bulk update of repository labels.

Every label gets its own worker: PATCH the label, fall back to POST on 404 when
creation is allowed, then write a single ``[<name>]: <status>`` line. Workers share
nothing except the output sink, and a failing label never affects its siblings.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TextIO

from github_label_sync.errors import TransportError
from github_label_sync.github.client import GitHubClient, status_text
from github_label_sync.labels import Label

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Outcome:
    """Terminal status of one label's update."""

    name: str
    status: str

    @property
    def line(self) -> str:
        return f"[{self.name}]: {self.status}"


class OutcomeWriter:
    """Thread-safe sink: one whole line per outcome, recorded in write order."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._lock = threading.Lock()
        self._written: list[Outcome] = []

    def emit(self, outcome: Outcome) -> None:
        with self._lock:
            self._stream.write(outcome.line + "\n")
            self._stream.flush()
            self._written.append(outcome)

    @property
    def outcomes(self) -> list[Outcome]:
        with self._lock:
            return list(self._written)


class BulkUpdater:
    """Applies a list of labels to one repository in parallel."""

    def __init__(
        self,
        client: GitHubClient,
        out: TextIO,
        *,
        max_workers: int | None = None,
    ) -> None:
        if max_workers is not None and max_workers <= 0:
            raise ValueError("max_workers must be a positive integer")
        self._client = client
        self._out = out
        self._max_workers = max_workers

    def update(
        self,
        repository: str,
        labels: list[Label],
        *,
        allow_create: bool = False,
    ) -> list[Outcome]:
        """Update every label and block until all of them reported.

        Individual failures only show up in their status line; this method does not
        raise for them.

        Returns:
            Outcomes in the order their lines were written.
        """

        if not labels:
            return []

        collection_url = self._client.labels_url(repository)
        workers = len(labels)
        if self._max_workers is not None:
            workers = min(workers, self._max_workers)

        logger.info(
            "Updating labels",
            extra={
                "repo": repository,
                "count": len(labels),
                "workers": workers,
                "allow_create": allow_create,
            },
        )

        self._client.ensure_pool_size(workers)
        writer = OutcomeWriter(self._out)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="label") as executor:
            futures = [
                executor.submit(
                    self._run_one, writer, repository, collection_url, label, allow_create
                )
                for label in labels
            ]
            for future in as_completed(futures):
                future.result()

        return writer.outcomes

    def _run_one(
        self,
        writer: OutcomeWriter,
        repository: str,
        collection_url: str,
        label: Label,
        allow_create: bool,
    ) -> None:
        try:
            status = self._apply(repository, collection_url, label, allow_create)
        except Exception as e:
            logger.exception("Label update failed unexpectedly", extra={"label": label.name})
            status = f"error: {e}"

        writer.emit(Outcome(name=label.name, status=status))

    def _apply(
        self,
        repository: str,
        collection_url: str,
        label: Label,
        allow_create: bool,
    ) -> str:
        body = label.to_json()
        label_url = self._client.label_url(repository, label.name)

        try:
            resp = self._client.request("PATCH", label_url, body)
        except TransportError as e:
            return str(e)

        try:
            patch_status = status_text(resp)
            not_found = resp.status_code == 404
        finally:
            resp.close()

        if not (not_found and allow_create):
            return patch_status

        logger.debug("Label not found; creating it", extra={"label": label.name})
        try:
            created = self._client.request("POST", collection_url, body)
        except TransportError as e:
            return str(e)

        try:
            return status_text(created)
        finally:
            created.close()
