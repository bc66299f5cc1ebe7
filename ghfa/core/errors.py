"""Error kinds raised by the GitHub client and by file-addition runs."""

from __future__ import annotations

from .types import Step


# ---------- hosting-service client ----------
class GitHubError(RuntimeError):
    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class NotFoundError(GitHubError):
    """404: organisation, repository, branch or content path is absent."""


class ConflictError(GitHubError):
    """409/422: the ref or content already exists (or the write lost a race)."""


class TransportError(GitHubError):
    """Connection refused, DNS failure, timeout: no HTTP status was received."""


# ---------- file-addition runs ----------
class FileAdderError(RuntimeError):
    pass


class ConfigurationError(FileAdderError):
    """Invalid options; reported before any network call is made."""


class StagingError(ConfigurationError):
    pass


class TransactionError(FileAdderError):
    """A per-repository failure. Carries the repository name and the failing step."""

    step: Step = Step.resolve_base

    def __init__(self, repo: str, message: str) -> None:
        super().__init__(message)
        self.repo = repo


class BaseResolutionFailure(TransactionError):
    step = Step.resolve_base


class BranchCreationFailure(TransactionError):
    step = Step.create_branch


class BranchExistsError(BranchCreationFailure):
    pass


class ContentConflict(TransactionError):
    step = Step.commit_content

    def __init__(self, repo: str, path: str, branch: str) -> None:
        super().__init__(
            repo,
            f"Repository {repo} already has content with path {path} in branch {branch}; "
            "the --update-existing option must be used to update content",
        )
        self.path = path
        self.branch = branch


class WriteFailure(TransactionError):
    step = Step.commit_content

    def __init__(self, repo: str, path: str, message: str) -> None:
        super().__init__(repo, message)
        self.path = path


class ProposalFailure(TransactionError):
    step = Step.open_proposal


class RollbackFailure(TransactionError):
    """Recorded on the outcome when the topic branch could not be deleted. Never raised."""

    step = Step.rollback
