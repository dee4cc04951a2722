"""Exceptions raised by the label sync components."""

from __future__ import annotations


class LabelSyncError(Exception):
    """Base class for all label sync failures."""


class LabelFileError(LabelSyncError):
    """Raised when a label file or label payload cannot be read or decoded."""


class TransportError(LabelSyncError):
    """Raised when a request never produced an HTTP response (DNS, connection, TLS, timeout)."""


class ListLabelsError(LabelSyncError):
    """Raised when the label listing endpoint answers with anything but 200."""

    def __init__(self, status: str) -> None:
        super().__init__(status)
        self.status = status
