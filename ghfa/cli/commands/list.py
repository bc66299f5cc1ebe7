"""CLI: list the unarchived repositories of one or more orgs."""

from __future__ import annotations

import typer

from ...config.settings import get_settings
from ...core.github_client import GitHubClient
from ...services.list_repos import list_repository_urls


def list_repos(
    orgs: str = typer.Argument(..., help="Comma-separated organisation logins"),
    output_file: str = typer.Option("repositories.txt", "--output-file", "-o", help="File to write URLs to"),
    token: str | None = typer.Option(None, "--token", help="GitHub PAT"),
):
    s = get_settings()
    _token = token if token is not None else s.github_token
    with GitHubClient(_token, api_base=s.github_api_base) as client:
        count = list_repository_urls(client, [o.strip() for o in orgs.split(",") if o.strip()], output_file)
    typer.echo(f"Done. {count} repository URLs written to '{output_file}'.")
