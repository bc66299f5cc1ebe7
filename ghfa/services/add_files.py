"""Service: open a pull request adding the same files to many repositories of an org."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import reduce

from ..core.github_client import GitHubClient
from ..core.transaction import BranchTransaction
from ..core.types import (
    BatchResult,
    ContentItem,
    FileAdditionRequest,
    RepositoryTarget,
    TransactionOutcome,
)

log = logging.getLogger(__name__)

OutcomeReporter = Callable[[TransactionOutcome], None]


def fold_outcome(result: BatchResult, outcome: TransactionOutcome) -> BatchResult:
    if outcome.ok:
        return BatchResult(
            total=result.total,
            succeeded=result.succeeded + 1,
            failed=result.failed,
            failures=result.failures,
            outcomes=(*result.outcomes, outcome),
        )
    return BatchResult(
        total=result.total,
        succeeded=result.succeeded,
        failed=result.failed + 1,
        failures=(*result.failures, (outcome.repo, outcome.reason)),
        outcomes=(*result.outcomes, outcome),
    )


def tally(total: int, outcomes: Iterable[TransactionOutcome]) -> BatchResult:
    return reduce(fold_outcome, outcomes, BatchResult(total=total))


def select_repositories(client: GitHubClient, org: str, request: FileAdditionRequest) -> list[RepositoryTarget]:
    """Raises NotFoundError when the organisation does not exist; that ends the run."""
    login = client.get_organization(org).get("login", org)
    log.info("Preparing to add files to organization %s", login)
    log.info("Fetching repositories matching %s", request.selector.describe())

    candidates = client.list_org_repos(org)
    log.info("Found %d candidate repositories", len(candidates))
    for name in request.selector.missing(candidates):
        log.warning("Repository %s is not in organization %s", name, org)

    selected = request.selector.select(candidates)
    log.info("Found %d matching repositories", len(selected))
    return selected


def add_files_batch(
    *,
    client: GitHubClient,
    org: str,
    request: FileAdditionRequest,
    content: Sequence[ContentItem],
    jobs: int = 1,
    dry_run: bool = False,
    report: OutcomeReporter | None = None,
) -> BatchResult:
    request.selector.validate()
    repos = select_repositories(client, org, request)

    def run_one(repo: RepositoryTarget) -> TransactionOutcome:
        outcome = BranchTransaction(client, repo, request, content).run(dry_run=dry_run)
        if report is not None:
            report(outcome)
        return outcome

    if jobs <= 1 or len(repos) <= 1:
        outcomes: Iterable[TransactionOutcome] = map(run_one, repos)
        return tally(len(repos), outcomes)

    # each transaction only touches its own repository; results come back in selection order
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return tally(len(repos), list(pool.map(run_one, repos)))


def summary_line(org: str, result: BatchResult) -> str:
    if result.total == 0:
        return f"No repositories in {org} matched; nothing to do"
    if result.succeeded == result.total:
        return f"{result.succeeded} PRs adding files were submitted for {org}"
    if result.succeeded == 0:
        return f"Failed to add files to any of {result.total} repositories in {org}"
    return (
        f"{result.succeeded} PRs adding files were submitted for {org}; "
        f"submitting PRs to {result.failed} repositories failed"
    )
