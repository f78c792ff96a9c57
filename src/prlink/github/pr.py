"""Pull request description access."""

from github import Github
from github.GithubException import GithubException
from requests.exceptions import RequestException

from prlink.errors import TransportError, ValidationError


def describe_error(e: GithubException) -> str:
    """Short message for a GithubException."""
    data = e.data if isinstance(e.data, dict) else {}
    message = data.get("message")
    if message:
        return f"{message} ({e.status})"
    return str(e)


class GitHubManager:
    """GitHub API operations."""

    def __init__(self, token: str):
        if not token:
            raise ValidationError("GitHub token is required")
        self.token = token
        self.gh = Github(self.token)

    def get_pr_body(self, owner: str, repo: str, number: int) -> str:
        """Fetch the PR description. An empty description comes back as ''."""
        try:
            pr = self.gh.get_repo(f"{owner}/{repo}").get_pull(number)
        except GithubException as e:
            raise TransportError("read pull request", describe_error(e)) from e
        except RequestException as e:
            raise TransportError("read pull request", str(e)) from e
        return pr.body or ""

    def update_pr_body(self, owner: str, repo: str, number: int, body: str) -> None:
        """Replace the PR description."""
        try:
            pr = self.gh.get_repo(f"{owner}/{repo}").get_pull(number)
            pr.edit(body=body)
        except GithubException as e:
            raise TransportError("update pull request", describe_error(e)) from e
        except RequestException as e:
            raise TransportError("update pull request", str(e)) from e
