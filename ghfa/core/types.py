"""Small types and Enums used by ghfa."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .selector import RepositorySelector


class Step(str, Enum):
    """The steps of a per-repository branch transaction."""

    resolve_base = "resolve-base"
    create_branch = "create-branch"
    commit_content = "commit-content"
    open_proposal = "open-proposal"
    rollback = "rollback"


class TxState(str, Enum):
    idle = "idle"
    branch_created = "branch-created"
    committing = "committing"
    proposal_opened = "proposal-opened"
    rolling_back = "rolling-back"
    failed = "failed"


class RunStatus(str, Enum):
    """How a whole batch ended."""

    success = "success"
    partial = "partial"
    failure = "failure"


@dataclass(frozen=True)
class RepositoryTarget:
    """Read-only snapshot of a repository as listed by the API."""

    name: str
    full_name: str
    default_branch: str | None = None
    archived: bool = False
    html_url: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> RepositoryTarget:
        return cls(
            name=data["name"],
            full_name=data["full_name"],
            default_branch=data.get("default_branch"),
            archived=bool(data.get("archived")),
            html_url=data.get("html_url") or "",
        )


@dataclass(frozen=True)
class FileAdditionRequest:
    """What to add and where; fixed for the whole run."""

    topic_branch: str
    selector: RepositorySelector
    path: str = ""
    base_branch: str | None = None  # None: each repository's default branch
    message: str | None = None  # None: derived from local_names and path
    update_existing: bool = False
    local_names: tuple[str, ...] = ()


@dataclass(frozen=True)
class ContentItem:
    path: str
    content: bytes
    source_name: str = ""


@dataclass(frozen=True)
class RefHandle:
    repo: str  # "owner/name"
    ref: str  # "refs/heads/<branch>"

    @property
    def branch(self) -> str:
        return self.ref.removeprefix("refs/heads/")


@dataclass(frozen=True)
class CommitHandle:
    commit_sha: str
    blob_id: str | None = None


@dataclass(frozen=True)
class ProposalHandle:
    number: int
    url: str


@dataclass(frozen=True)
class ItemOutcome:
    path: str
    updated: bool  # True when an existing blob was replaced
    commit: CommitHandle


@dataclass
class TransactionOutcome:
    repo: str
    ok: bool
    state: TxState
    failed_step: Step | None = None
    cause: BaseException | None = None
    proposal: ProposalHandle | None = None
    items: list[ItemOutcome] = field(default_factory=list)
    rollback_error: BaseException | None = None
    dry_run: bool = False

    @property
    def reason(self) -> str:
        if self.ok:
            return ""
        step = self.failed_step.value if self.failed_step else "unknown"
        return f"{step}: {self.cause}"


@dataclass(frozen=True)
class BatchResult:
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    failures: tuple[tuple[str, str], ...] = ()
    outcomes: tuple[TransactionOutcome, ...] = ()

    @property
    def status(self) -> RunStatus:
        if self.succeeded == self.total:
            return RunStatus.success
        if self.succeeded == 0:
            return RunStatus.failure
        return RunStatus.partial
