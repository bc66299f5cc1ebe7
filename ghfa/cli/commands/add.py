"""CLI: add files to many repositories of an org, one pull request each."""

from __future__ import annotations

from pathlib import Path
from typing import List

import typer

from ...config.settings import get_settings
from ...core.constants import DEFAULT_REPO_PATTERN
from ...core.errors import ConfigurationError, GitHubError, NotFoundError
from ...core.github_client import GitHubClient
from ...core.selector import RepositorySelector
from ...core.staging import stage_files
from ...core.types import FileAdditionRequest, RunStatus, TransactionOutcome
from ...services.add_files import add_files_batch, summary_line


def _echo_outcome(outcome: TransactionOutcome) -> None:
    if outcome.dry_run:
        typer.echo(f"[dry-run] {outcome.repo}")
    elif outcome.ok:
        typer.echo(f"[ok] {outcome.repo} -> {outcome.proposal.url}")
    else:
        typer.secho(f"[fail] {outcome.repo} ({outcome.failed_step.value}): {outcome.cause}", err=True)
        if outcome.rollback_error is not None:
            typer.secho(f"[fail] {outcome.repo} (rollback): {outcome.rollback_error}", err=True)


def add(
    files: List[Path] = typer.Argument(
        ..., exists=True, dir_okay=False, readable=True, help="The files to add"
    ),
    org: str = typer.Option(..., "--org", "--organization", "-o", help="GitHub organisation login"),
    repo_regex: str = typer.Option(
        DEFAULT_REPO_PATTERN, "--repo-regex", "-r", help="Regular expression the whole repo name must match"
    ),
    repo_list: str | None = typer.Option(None, "--repo-list", "-l", help="Comma-separated repo names"),
    base_branch: str | None = typer.Option(
        None, "--base-branch", "-b", help="Target branch for the PR (default: each repo's default branch)"
    ),
    topic_branch: str | None = typer.Option(
        None, "--topic-branch", "-t", help="Name of the topic branch to create and add files to"
    ),
    message: str | None = typer.Option(None, "--pr-message", "-m", help="Title of the PR"),
    path: str = typer.Option("", "--path", "-p", help="Directory within each repository for the files"),
    update_existing: bool = typer.Option(
        False, "--update-existing", "-u", help="Update files that already exist instead of failing"
    ),
    jobs: int = typer.Option(1, "--jobs", "-j", min=1, help="Repositories processed in parallel"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Resolve base branches and print the plan only"),
    token: str | None = typer.Option(None, "--token", help="GitHub PAT"),
):
    """Create a PR adding one or more files to each matching repository.

    Examples:
      ghfa add LICENSE -o my-org
      ghfa add README.md LICENSE -o my-org -p docs -l repo-a,repo-b
      ghfa add .editorconfig -o my-org -r 'service-.*' --update-existing
    """
    s = get_settings()
    selector = RepositorySelector(
        names=tuple(n.strip() for n in repo_list.split(",") if n.strip()) if repo_list else (),
        pattern=repo_regex,
    )
    try:
        selector.validate()
        content = stage_files(files, path)
    except ConfigurationError as e:
        raise typer.BadParameter(str(e)) from e

    request = FileAdditionRequest(
        topic_branch=topic_branch or s.default_topic_branch,
        selector=selector,
        path=path,
        base_branch=base_branch or None,
        message=message or None,
        update_existing=update_existing,
        local_names=tuple(f.name for f in files),
    )

    _token = token if token is not None else s.github_token
    with GitHubClient(_token, api_base=s.github_api_base) as client:
        try:
            result = add_files_batch(
                client=client,
                org=org,
                request=request,
                content=content,
                jobs=jobs,
                dry_run=dry_run,
                report=_echo_outcome,
            )
        except NotFoundError:
            typer.secho(f"Organization not found: {org}", err=True)
            raise typer.Exit(code=1)
        except GitHubError as e:
            typer.secho(f"Error: {e}", err=True)
            raise typer.Exit(code=1)

    line = summary_line(org, result)
    if result.status is RunStatus.success:
        typer.echo(line)
        return
    typer.secho(line, err=True)
    raise typer.Exit(code=1)
