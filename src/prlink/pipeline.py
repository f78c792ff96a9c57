"""The prlink pipeline: find the artifact, link it from the PR description."""

import logging
from typing import Any, Callable

from github import Github

from prlink.artifacts import ArtifactLocator, GitHubArtifactLocator
from prlink.config import build_scope, resolve_inputs, resolve_token
from prlink.context import ActionContext
from prlink.errors import NotFoundError, PrLinkError, ValidationError
from prlink.github import GitHubManager
from prlink.section import render_section, upsert_section
from prlink.types import ActionResult, Scope

logger = logging.getLogger(__name__)

SKIP_MESSAGE = "Not a pull request. Skipping action."


def default_locator(scope: Scope) -> ArtifactLocator:
    """Locator backed by PyGithub. Anonymous when the scope has no token."""
    gh = Github(scope.token) if scope.token else Github()
    return GitHubArtifactLocator(gh)


def run_action(
    raw_inputs: dict[str, Any],
    context: ActionContext,
    locator_factory: Callable[[Scope], ArtifactLocator] = default_locator,
    manager_factory: Callable[[str], GitHubManager] = GitHubManager,
    dry_run: bool = False,
) -> ActionResult:
    """Run the whole pipeline once.

    Never raises for expected failures; they come back as a failed
    ActionResult carrying the message to report.
    """
    if not context.is_pull_request:
        logger.info(SKIP_MESSAGE)
        return ActionResult.skipped(SKIP_MESSAGE)

    try:
        body = _run(raw_inputs, context, locator_factory, manager_factory, dry_run)
    except PrLinkError as e:
        logger.debug(f"Action failed: {e}")
        return ActionResult.failed(str(e))

    return ActionResult.success(body=body)


def _run(
    raw_inputs: dict[str, Any],
    context: ActionContext,
    locator_factory: Callable[[Scope], ArtifactLocator],
    manager_factory: Callable[[str], GitHubManager],
    dry_run: bool,
) -> str:
    inputs = resolve_inputs(raw_inputs, context)
    token = resolve_token(inputs, context)

    number = context.pull_request_number
    if number is None:
        raise ValidationError("Pull request number not found in event payload")

    scope = build_scope(inputs, context)

    logger.info(
        f"Owner: {scope.repository_owner}, Repo: {scope.repository_name}, Run ID: {scope.run_id}"
    )

    artifact = locator_factory(scope).locate(inputs.name, scope)
    if artifact is None:
        raise NotFoundError(f"Artifact '{inputs.name}' not found")

    logger.debug(
        f"Found named artifact '{inputs.name}' (ID: {artifact.id}, Size: {artifact.size_bytes})"
    )

    section_body = render_section(
        artifact.id, scope.repository_owner, scope.repository_name, inputs.description
    )

    manager = manager_factory(token)
    # The PR lives in the triggering repository, which may differ from the
    # repository the artifact was looked up in.
    pr_owner = context.repo_owner or scope.repository_owner
    pr_repo = context.repo_name or scope.repository_name
    old_body = manager.get_pr_body(pr_owner, pr_repo, number)
    new_body = upsert_section(old_body, context.workflow, inputs.name, section_body)

    if dry_run:
        logger.info(f"Dry run: not updating pull request #{number}")
    elif new_body == old_body:
        logger.info(f"Pull request #{number} already links artifact {artifact.id}")
    else:
        manager.update_pr_body(pr_owner, pr_repo, number, new_body)
        logger.info(f"Updated pull request #{number} with a link to '{inputs.name}'")

    return new_body
