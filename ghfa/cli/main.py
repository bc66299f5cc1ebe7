"""CLI entrypoint that wires subcommands into a Typer app."""

import logging

import typer

from ..config.settings import get_settings
from ..core.logging import configure_logging
from .commands.add import add
from .commands.list import list_repos

app = typer.Typer(add_completion=False, help="Add files to an org's GitHub repos through pull requests.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every API step"),
):
    s = get_settings()
    configure_logging(level=logging.DEBUG if verbose else s.log_level, force=True)


app.command("add", help="Open a PR adding files to each matching repository")(add)
app.command("list", help="Write the URLs of all unarchived repositories to a file")(list_repos)
