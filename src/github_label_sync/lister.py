"""Print the current label set of a repository."""

from __future__ import annotations

import logging
from typing import TextIO

from github_label_sync.errors import ListLabelsError
from github_label_sync.github.client import GitHubClient, status_text
from github_label_sync.labels import Label, dump_labels, parse_labels

logger = logging.getLogger(__name__)


def list_labels(client: GitHubClient, repository: str, out: TextIO) -> list[Label]:
    """Fetch every label of `repository` and write them to `out` as indented JSON.

    Only the first page returned by GitHub is read.

    Raises:
        TransportError: If the request itself failed.
        ListLabelsError: If GitHub answered with anything but 200.
        LabelFileError: If the response body is not a JSON array of labels.
    """

    url = client.labels_url(repository)
    resp = client.request("GET", url)
    try:
        if resp.status_code != 200:
            raise ListLabelsError(status_text(resp))
        labels = parse_labels(resp.content)
    finally:
        resp.close()

    logger.info("Listed labels", extra={"repo": repository, "count": len(labels)})
    out.write(dump_labels(labels) + "\n")
    return labels
