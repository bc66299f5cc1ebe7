"""Per-repository transaction: topic branch, file writes, pull request, rollback."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .constants import PR_BODY
from .errors import (
    BaseResolutionFailure,
    BranchCreationFailure,
    BranchExistsError,
    ConflictError,
    ContentConflict,
    GitHubError,
    NotFoundError,
    ProposalFailure,
    RollbackFailure,
    TransactionError,
    WriteFailure,
)
from .staging import derive_message
from .types import (
    ContentItem,
    FileAdditionRequest,
    ItemOutcome,
    ProposalHandle,
    RefHandle,
    RepositoryTarget,
    Step,
    TransactionOutcome,
    TxState,
)

if TYPE_CHECKING:
    from .github_client import GitHubClient

log = logging.getLogger(__name__)


class BranchTransaction:
    """Adds the staged content to one repository through a topic branch and a pull request.

    idle -> branch-created -> committing -> proposal-opened on success. Any failure
    after the branch exists goes through rolling-back (the branch is deleted) to
    failed; failures before that go straight to failed. One instance per repository
    per run; call run() once.
    """

    def __init__(
        self,
        client: GitHubClient,
        repo: RepositoryTarget,
        request: FileAdditionRequest,
        content: Sequence[ContentItem],
    ) -> None:
        self.client = client
        self.repo = repo
        self.request = request
        self.content = tuple(content)
        self.state = TxState.idle
        self.step = Step.resolve_base
        self.ref: RefHandle | None = None
        self.base_branch: str | None = None
        self.base_sha: str | None = None
        self.items: list[ItemOutcome] = []
        self.proposal: ProposalHandle | None = None

    @property
    def name(self) -> str:
        return self.repo.name

    @property
    def topic_branch(self) -> str:
        return self.request.topic_branch

    @property
    def title(self) -> str:
        return self.request.message or derive_message(self.request.local_names, self.request.path)

    def run(self, *, dry_run: bool = False) -> TransactionOutcome:
        log.info("Adding files for %s", self.name)
        try:
            self._resolve_base()
            if dry_run:
                return self._plan()
            self._create_branch()
            self._commit_content()
            self._open_proposal()
        except TransactionError as e:
            return self._fail(e)
        except KeyboardInterrupt:
            # leave no orphaned topic branch behind
            if self.ref is not None:
                self._rollback()
            raise
        except Exception as e:  # unexpected payloads etc.; still one repository's failure
            log.debug("Unexpected error in %s", self.name, exc_info=True)
            return self._fail(e)

        self.state = TxState.proposal_opened
        log.info("Created pull request for %s at %s", self.name, self.proposal.url)
        return TransactionOutcome(
            repo=self.name,
            ok=True,
            state=self.state,
            proposal=self.proposal,
            items=list(self.items),
        )

    # ---------- steps ----------
    def _resolve_base(self) -> None:
        self.step = Step.resolve_base
        try:
            branch = self.request.base_branch or self.repo.default_branch
            if not branch:
                branch = self.client.get_default_branch(self.repo)
            self.base_branch = branch
            self.base_sha = self.client.get_branch_head_sha(self.repo, branch)
        except NotFoundError as e:
            raise BaseResolutionFailure(
                self.name, f"Base branch {self.base_branch or '<default>'} not found in {self.name}"
            ) from e
        except GitHubError as e:
            raise BaseResolutionFailure(self.name, f"Cannot resolve base branch: {e}") from e
        log.debug("%s: base %s at %s", self.name, self.base_branch, self.base_sha)

    def _create_branch(self) -> None:
        self.step = Step.create_branch
        try:
            self.ref = self.client.create_ref(self.repo, f"refs/heads/{self.topic_branch}", self.base_sha)
        except ConflictError as e:
            raise BranchExistsError(
                self.name,
                f"Branch {self.topic_branch} already exists in {self.name}; "
                "delete it or choose another --topic-branch",
            ) from e
        except GitHubError as e:
            raise BranchCreationFailure(self.name, f"Cannot create branch {self.topic_branch}: {e}") from e
        self.state = TxState.branch_created
        log.debug("%s: created %s", self.name, self.ref.ref)

    def _commit_content(self) -> None:
        self.step = Step.commit_content
        for index, item in enumerate(self.content):
            self.state = TxState.committing
            log.debug("%s: writing %s (%d/%d)", self.name, item.path, index + 1, len(self.content))
            self._commit_item(item)

    def _commit_item(self, item: ContentItem) -> None:
        existing: str | None = None
        if self.request.update_existing:
            try:
                existing = self.client.get_file_blob_id(self.repo, item.path, self.ref.ref)
            except GitHubError as e:
                raise WriteFailure(self.name, item.path, f"Cannot look up {item.path}: {e}") from e

        message = f"{'Update' if existing else 'Add'} {item.path}"
        try:
            commit = self.client.write_file(
                self.repo, item.path, self.topic_branch, item.content, message, existing
            )
        except ConflictError as e:
            if not self.request.update_existing and self._has_content(item.path):
                raise ContentConflict(self.name, item.path, self.topic_branch) from e
            raise WriteFailure(self.name, item.path, f"Failed writing {item.path}: {e}") from e
        except GitHubError as e:
            raise WriteFailure(self.name, item.path, f"Failed writing {item.path}: {e}") from e
        self.items.append(ItemOutcome(path=item.path, updated=existing is not None, commit=commit))

    def _has_content(self, path: str) -> bool:
        """Only used to turn a rejected create into an actionable message."""
        try:
            return self.client.get_file_blob_id(self.repo, path, self.ref.ref) is not None
        except GitHubError as e:
            log.debug("%s: lookup of %s failed: %s", self.name, path, e)
            return False

    def _open_proposal(self) -> None:
        self.step = Step.open_proposal
        try:
            self.proposal = self.client.create_pull_request(
                self.repo, self.topic_branch, self.base_branch, self.title, PR_BODY
            )
        except GitHubError as e:
            raise ProposalFailure(self.name, f"Cannot open pull request: {e}") from e

    # ---------- failure ----------
    def _fail(self, cause: BaseException) -> TransactionOutcome:
        step = cause.step if isinstance(cause, TransactionError) else self.step
        log.error("Failed adding to repo %s at %s: %s", self.name, step.value, cause)
        rollback_error = self._rollback() if self.ref is not None else None
        self.state = TxState.failed
        return TransactionOutcome(
            repo=self.name,
            ok=False,
            state=self.state,
            failed_step=step,
            cause=cause,
            items=list(self.items),
            rollback_error=rollback_error,
        )

    def _rollback(self) -> RollbackFailure | None:
        self.state = TxState.rolling_back
        try:
            ok, err = self.client.delete_ref(self.ref)
        except Exception as e:
            ok, err = False, f"{e}"
        if ok:
            log.info("Cleaned up by deleting topic branch %s from repo %s", self.topic_branch, self.name)
            return None
        log.error(
            "Failed to clean up repo %s by deleting branch %s due to %s", self.name, self.topic_branch, err
        )
        return RollbackFailure(self.name, f"Cannot delete branch {self.topic_branch}: {err}")

    # ---------- dry run ----------
    def _plan(self) -> TransactionOutcome:
        log.info("[dry-run] %s: would create refs/heads/%s at %s", self.name, self.topic_branch, self.base_sha)
        for item in self.content:
            log.info("[dry-run] %s: would write %s", self.name, item.path)
        log.info(
            "[dry-run] %s: would open pull request %r %s -> %s",
            self.name,
            self.title,
            self.topic_branch,
            self.base_branch,
        )
        return TransactionOutcome(repo=self.name, ok=True, state=self.state, dry_run=True)
