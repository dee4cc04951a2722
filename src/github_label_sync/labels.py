"""Label records and the JSON label file format.

The same shape is used for the label file, for request bodies sent to GitHub and
for the listing response. Optional fields are omitted from the JSON when empty, so
a PATCH never blanks out a color or description the file does not mention.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any, TextIO

from github_label_sync.errors import LabelFileError


@dataclass(frozen=True, slots=True)
class Label:
    name: str
    color: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Label:
        """Build a label from a decoded JSON object, ignoring unknown keys."""

        name = data.get("name")
        if not isinstance(name, str):
            raise LabelFileError(f"Label is missing a string 'name': {dict(data)!r}")
        return cls(
            name=name,
            color=_optional_str(data, "color"),
            description=_optional_str(data, "description"),
        )

    def to_dict(self) -> dict[str, str]:
        payload: dict[str, str] = {}
        if self.name:
            payload["name"] = self.name
        if self.color:
            payload["color"] = self.color
        if self.description:
            payload["description"] = self.description
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)


def _optional_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise LabelFileError(f"Label field {key!r} must be a string, got {value!r}")
    return value


def parse_labels(text: str | bytes) -> list[Label]:
    """Decode a JSON array of label objects.

    Raises:
        LabelFileError: If the payload is not valid JSON or not an array of objects.
    """

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as e:
        raise LabelFileError(f"Invalid label JSON: {e}") from e

    if not isinstance(raw, list):
        raise LabelFileError("Label JSON must be an array of label objects")

    labels: list[Label] = []
    for item in raw:
        if not isinstance(item, dict):
            raise LabelFileError(f"Label entries must be objects, got {item!r}")
        labels.append(Label.from_dict(item))
    return labels


def dump_labels(labels: list[Label]) -> str:
    """Render labels as tab-indented JSON."""

    return json.dumps([label.to_dict() for label in labels], indent="\t", ensure_ascii=False)


def read_labels(path: str | Path | None, stdin: TextIO) -> list[Label]:
    """Read labels from `path`, or from `stdin` when no path is given."""

    try:
        if path is None or str(path) == "":
            text = stdin.read()
        else:
            text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise LabelFileError(f"Unable to read labels: {e}") from e
    return parse_labels(text)
