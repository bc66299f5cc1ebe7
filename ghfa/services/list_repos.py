"""Service: write the URLs of all unarchived repositories of some orgs to a file."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..core.errors import NotFoundError
from ..core.github_client import GitHubClient
from ..core.selector import RepositorySelector

log = logging.getLogger(__name__)


def list_repository_urls(client: GitHubClient, orgs: Sequence[str], output_file: str | Path) -> int:
    """Returns the number of URLs written. Unknown organisations are logged and skipped."""
    selector = RepositorySelector()
    written = 0
    with open(output_file, "w", encoding="utf-8") as out:
        for org in orgs:
            try:
                candidates = client.list_org_repos(org)
            except NotFoundError:
                log.error("Organization not found: %s", org)
                continue
            log.info("Found %d candidate repositories in %s", len(candidates), org)
            selected = selector.select(candidates)
            for repo in selected:
                out.write(f"{repo.html_url}\n")
            written += len(selected)
            log.info("Recorded %d matching repositories", len(selected))
    log.info("Repository list written to %s", output_file)
    return written
