"""Core type definitions for prlink."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Scope(BaseModel):
    """Bounds of an artifact search."""

    model_config = ConfigDict(frozen=True)

    repository_owner: str
    repository_name: str
    run_id: int | None = None
    token: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.repository_owner}/{self.repository_name}"


class Artifact(BaseModel):
    """A workflow artifact as returned by the locator."""

    id: int
    size_bytes: int
    name: str


class ResultStatus(str, Enum):
    """Outcome of a single invocation."""

    SUCCESS = "success"
    SKIPPED = "skipped"
    FAILED = "failed"


class ActionResult(BaseModel):
    """Result of run_action. The CLI turns this into an exit code."""

    status: ResultStatus
    message: str = ""
    body: str | None = None  # Description that was (or would be) written

    @classmethod
    def success(cls, body: str | None = None, message: str = "") -> "ActionResult":
        return cls(status=ResultStatus.SUCCESS, message=message, body=body)

    @classmethod
    def skipped(cls, message: str) -> "ActionResult":
        return cls(status=ResultStatus.SKIPPED, message=message)

    @classmethod
    def failed(cls, message: str) -> "ActionResult":
        return cls(status=ResultStatus.FAILED, message=message)

    @property
    def ok(self) -> bool:
        return self.status != ResultStatus.FAILED
