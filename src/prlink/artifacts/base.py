"""Artifact locator protocol."""

from typing import Protocol

from prlink.types import Artifact, Scope


class ArtifactLocator(Protocol):
    """Protocol for resolving an artifact name to its id."""

    def locate(self, name: str, scope: Scope) -> Artifact | None:
        """Find the artifact called name in scope. Returns None if absent."""
        ...
