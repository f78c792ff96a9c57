"""Artifact lookup module."""

from prlink.artifacts.base import ArtifactLocator
from prlink.artifacts.github import GitHubArtifactLocator

__all__ = ["ArtifactLocator", "GitHubArtifactLocator"]
