"""Artifact lookup through the GitHub Actions REST API."""

import logging

from github import Github
from github.GithubException import GithubException
from requests.exceptions import RequestException

from prlink.errors import TransportError
from prlink.github.pr import describe_error
from prlink.types import Artifact, Scope

logger = logging.getLogger(__name__)


class GitHubArtifactLocator:
    """Finds workflow artifacts by name.

    If the scope has a run id the search is limited to that run, otherwise
    the newest artifact with that name in the repository is used.
    """

    def __init__(self, gh: Github):
        self.gh = gh

    def locate(self, name: str, scope: Scope) -> Artifact | None:
        try:
            repository = self.gh.get_repo(scope.full_name)
            if scope.run_id is not None:
                candidates = repository.get_workflow_run(scope.run_id).get_artifacts()
            else:
                candidates = repository.get_artifacts(name=name)

            for artifact in candidates:
                if artifact.name != name:
                    continue
                if artifact.expired:
                    logger.debug(f"Skipping expired artifact {artifact.id}")
                    continue
                return Artifact(id=artifact.id, size_bytes=artifact.size_in_bytes, name=artifact.name)
        except GithubException as e:
            raise TransportError("download artifact(s)", describe_error(e)) from e
        except RequestException as e:
            raise TransportError("download artifact(s)", str(e)) from e

        return None
