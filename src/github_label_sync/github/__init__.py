"""GitHub REST transport."""

from github_label_sync.github.client import GitHubClient, status_text

__all__ = ["GitHubClient", "status_text"]
