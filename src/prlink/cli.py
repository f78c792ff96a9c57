"""prlink CLI."""

import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from prlink.config import get_config_template, load_config, split_repository
from prlink.context import ActionContext
from prlink.errors import PrLinkError
from prlink.github import GitHubManager
from prlink.pipeline import run_action
from prlink.section import find_section
from prlink.types import ResultStatus

app = typer.Typer(help="prlink - link workflow artifacts from pull request descriptions")
console = Console()

CONFIG_FILE = "prlink.yaml"


def setup_logging(verbose: bool = False):
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )
    logging.getLogger("github").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def fail(message: str):
    """Report a failure to the Actions runner and exit non-zero."""
    typer.echo(f"::error::{message}")
    raise typer.Exit(1)


@app.command()
def init():
    """Write a prlink.yaml template to the current directory."""
    config_file = Path(CONFIG_FILE)

    if config_file.exists():
        console.print(f"[yellow]Warning:[/yellow] {CONFIG_FILE} already exists.")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit(0)

    config_file.write_text(get_config_template())
    console.print(f"[green]Wrote {CONFIG_FILE}.[/green]")


@app.command()
def run(
    name: str | None = typer.Option(None, envvar="INPUT_NAME", help="Artifact name"),
    description: str | None = typer.Option(
        None, envvar="INPUT_DESCRIPTION", help="Link text shown in the PR description"
    ),
    path: str | None = typer.Option(None, envvar="INPUT_PATH", help="Working directory"),
    github_token: str | None = typer.Option(
        None, "--github-token", envvar="INPUT_GITHUB-TOKEN", help="Token for lookup and PR update"
    ),
    repository: str | None = typer.Option(
        None, envvar="INPUT_REPOSITORY", help="owner/repo to look the artifact up in"
    ),
    run_id: str | None = typer.Option(
        None, "--run-id", envvar="INPUT_RUN-ID", help="Workflow run that produced the artifact"
    ),
    config: Path | None = typer.Option(None, "--config", "-c", help="YAML file with input defaults"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Print the new description, do not update"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    """Link an artifact from the current pull request's description."""
    setup_logging(verbose or os.environ.get("RUNNER_DEBUG") == "1")

    raw: dict = {}
    if config is not None:
        if not config.exists():
            fail(f"Config file {config} not found")
        try:
            raw.update(load_config(config))
        except PrLinkError as e:
            fail(str(e))

    overrides = {
        "name": name,
        "description": description,
        "path": path,
        "github-token": github_token,
        "repository": repository,
        "run-id": run_id,
    }
    raw.update({k: v for k, v in overrides.items() if v is not None})

    result = run_action(raw, ActionContext.from_env(), dry_run=dry_run)

    if result.status == ResultStatus.FAILED:
        fail(result.message)
    if result.status == ResultStatus.SKIPPED:
        console.print(result.message)
        return
    if dry_run and result.body is not None:
        typer.echo(result.body)


@app.command()
def show(
    pr: int = typer.Argument(..., help="Pull request number"),
    name: str = typer.Option(..., envvar="INPUT_NAME", help="Artifact name"),
    workflow: str = typer.Option(..., envvar="GITHUB_WORKFLOW", help="Workflow name"),
    repository: str = typer.Option(..., envvar="GITHUB_REPOSITORY", help="owner/repo"),
    github_token: str = typer.Option("", "--github-token", envvar="GITHUB_TOKEN"),
):
    """Print the managed download section of a pull request."""
    try:
        owner, repo = split_repository(repository)
    except ValueError as e:
        fail(str(e))

    try:
        body = GitHubManager(github_token).get_pr_body(owner, repo, pr)
    except PrLinkError as e:
        fail(str(e))

    section = find_section(body, workflow, name)
    if section is None:
        console.print(f"No download section for {workflow} {name} in #{pr}.")
        raise typer.Exit(1)
    typer.echo(section, nl=False)


if __name__ == "__main__":
    app()
