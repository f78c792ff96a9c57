"""Input models and resolution for prlink."""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from prlink.context import ActionContext
from prlink.errors import ValidationError
from prlink.types import Scope

logger = logging.getLogger(__name__)

INPUT_NAMES = ["name", "description", "path", "github-token", "repository", "run-id"]


class ActionInputs(BaseModel):
    """Resolved action inputs.

    Field aliases match the input names in action.yml, so a YAML config file
    or a dict of INPUT_* values can be passed straight in.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str = ""
    path: str = ""
    github_token: str = Field(default="", alias="github-token")
    repository: str = ""
    run_id: int | None = Field(default=None, alias="run-id")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Input required and not supplied: name")
        return v.strip()

    @field_validator("repository")
    @classmethod
    def validate_repository(cls, v: str) -> str:
        v = v.strip()
        if v:
            split_repository(v)
        return v

    @field_validator("run_id", mode="before")
    @classmethod
    def parse_run_id(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        try:
            return int(v)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid run-id: '{v}'. Must be an integer")

    @property
    def resolved_path(self) -> Path:
        return Path(self.path).resolve()


def split_repository(repository: str) -> tuple[str, str]:
    """Split owner/repo. Raises ValueError unless there are exactly two non-empty parts."""
    parts = repository.split("/")
    if len(parts) != 2 or not parts[0] or not parts[1]:
        raise ValueError(f"Invalid repository: '{repository}'. Must be in format owner/repo")
    return parts[0], parts[1]


def default_path(path: str, context: ActionContext) -> str:
    """Fill in the workspace root for an empty path and expand a leading ~."""
    if not path:
        path = context.workspace or os.getcwd()
    if path.startswith("~"):
        path = path.replace("~", os.path.expanduser("~"), 1)
    return path


def resolve_inputs(raw: dict[str, Any], context: ActionContext) -> ActionInputs:
    """Validate raw inputs into a fully populated ActionInputs.

    Keys may use either the action input names ("github-token") or the
    field names ("github_token"). None values are treated as unset.
    """
    data = {k: v for k, v in raw.items() if v is not None}
    data["path"] = default_path(str(data.get("path") or ""), context)

    try:
        inputs = ActionInputs(**data)
    except PydanticValidationError as e:
        raise ValidationError(_first_error_message(e)) from e

    logger.debug(f"Resolved path is {inputs.resolved_path}")
    return inputs


def _first_error_message(exc: PydanticValidationError) -> str:
    err = exc.errors()[0]
    if err["type"] == "missing":
        return f"Input required and not supplied: {err['loc'][0]}"
    cause = err.get("ctx", {}).get("error")
    if cause is not None:
        return str(cause)
    return err["msg"]


def resolve_token(inputs: ActionInputs, context: ActionContext) -> str:
    """Token from the environment wins over the github-token input."""
    token = context.token or inputs.github_token
    if not token:
        raise ValidationError("GitHub token is required")
    return token


def build_scope(inputs: ActionInputs, context: ActionContext) -> Scope:
    """Build the artifact lookup scope.

    With a token the explicit repository input (or the ambient one) is used
    together with the requested run id, or the ambient run when the repository
    is the ambient one. Without a token the lookup falls back
    to the ambient repository and run.
    """
    token = context.token or inputs.github_token or None

    if token:
        repository = inputs.repository or context.repository or ""
        try:
            owner, name = split_repository(repository)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        run_id = inputs.run_id
        if run_id is None and repository == context.repository:
            # The ambient run id only means something in its own repository
            run_id = context.run_id
        return Scope(repository_owner=owner, repository_name=name, run_id=run_id, token=token)

    return Scope(
        repository_owner=context.repo_owner,
        repository_name=context.repo_name,
        run_id=context.run_id,
    )


def load_config(path: Path) -> dict[str, Any]:
    """Load input defaults from a YAML file."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid config file {path}: {e}") from e
    except OSError as e:
        raise ValidationError(f"Cannot read config file {path}: {e.strerror}") from e
    if not isinstance(data, dict):
        raise ValidationError(f"Invalid config file {path}: expected a mapping")

    unknown = set(data) - set(INPUT_NAMES) - {"github_token", "run_id"}
    if unknown:
        raise ValidationError(f"Unknown config keys in {path}: {', '.join(sorted(unknown))}")
    return data


def get_config_template() -> str:
    """Get the default configuration template."""
    return """# prlink configuration
#
# Every key can also be given on the command line or through the
# INPUT_<NAME> environment variables set by the Actions runner.
# Command line and environment win over this file.

name: my-artifact  # Artifact to link (required)
description: Download my-artifact  # Link text shown in the PR description

# path: .  # Defaults to $GITHUB_WORKSPACE or the current directory

# Look up the artifact in another repository or run.
# Requires a token (GITHUB_TOKEN or github-token).
# repository: owner/repo
# run-id: 1234567890
"""
