"""GitHub integration module."""

from prlink.github.pr import GitHubManager, describe_error

__all__ = ["GitHubManager", "describe_error"]
