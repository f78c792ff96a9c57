"""GitHub Actions run context.

Everything the pipeline needs from the runner environment is read here,
once, into an immutable ActionContext. The rest of the code only ever sees
that object, so it can be built by hand in tests.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class ActionContext(BaseModel):
    """Snapshot of the workflow run that invoked prlink."""

    model_config = ConfigDict(frozen=True)

    workflow: str = ""
    run_id: int | None = None
    repository: str | None = None  # owner/repo
    event_name: str = ""
    event_payload: dict[str, Any] = {}
    token: str | None = None
    workspace: str | None = None

    @property
    def is_pull_request(self) -> bool:
        return isinstance(self.event_payload.get("pull_request"), dict)

    @property
    def pull_request_number(self) -> int | None:
        """PR number, looked up the same way the Actions toolkit does."""
        for key in ("pull_request", "issue"):
            obj = self.event_payload.get(key)
            if isinstance(obj, dict) and obj.get("number") is not None:
                return int(obj["number"])
        number = self.event_payload.get("number")
        return int(number) if number is not None else None

    @property
    def repo_owner(self) -> str:
        return self._split_repository()[0]

    @property
    def repo_name(self) -> str:
        return self._split_repository()[1]

    def _split_repository(self) -> tuple[str, str]:
        if not self.repository or "/" not in self.repository:
            return "", ""
        owner, _, name = self.repository.partition("/")
        return owner, name

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ActionContext":
        """Build the context from GITHUB_* environment variables."""
        env = os.environ if environ is None else environ

        run_id = parse_run_id(env.get("GITHUB_RUN_ID"))
        return cls(
            workflow=env.get("GITHUB_WORKFLOW", ""),
            run_id=run_id,
            repository=env.get("GITHUB_REPOSITORY") or None,
            event_name=env.get("GITHUB_EVENT_NAME", ""),
            event_payload=load_event_payload(env.get("GITHUB_EVENT_PATH")),
            token=env.get("GITHUB_TOKEN") or None,
            workspace=env.get("GITHUB_WORKSPACE") or None,
        )


def parse_run_id(value: str | None) -> int | None:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric GITHUB_RUN_ID {value!r}")
        return None


def load_event_payload(event_path: str | None) -> dict[str, Any]:
    """Read the webhook payload the runner stores at GITHUB_EVENT_PATH."""
    if not event_path:
        return {}

    path = Path(event_path)
    if not path.exists():
        logger.warning(f"GITHUB_EVENT_PATH {event_path} does not exist")
        return {}

    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Cannot read event payload {event_path}: {e}")
        return {}
    return data if isinstance(data, dict) else {}
