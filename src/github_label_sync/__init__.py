"""GitHub label sync.

Keeps a repository's labels in line with a declarative JSON label file:
- `list` prints the current labels as indented JSON
- `update` patches every label in parallel, optionally creating missing ones
"""

__version__ = "0.1.0"

from github_label_sync.config import LabelSyncSettings
from github_label_sync.labels import Label

__all__ = ["__version__", "Label", "LabelSyncSettings"]
