"""Pick the repositories of an organisation that a run should touch."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from .constants import DEFAULT_REPO_PATTERN
from .errors import ConfigurationError
from .types import RepositoryTarget


@dataclass(frozen=True)
class RepositorySelector:
    """Either an explicit set of names or a whole-name regular expression, never both.

    Archived repositories are never selected.
    """

    names: tuple[str, ...] = ()
    pattern: str = DEFAULT_REPO_PATTERN

    @property
    def list_based(self) -> bool:
        return bool(self.names)

    def validate(self) -> None:
        if self.list_based and self.pattern != DEFAULT_REPO_PATTERN:
            raise ConfigurationError(
                "Both --repo-regex and --repo-list were configured. Choose one or the other."
            )
        try:
            re.compile(self.pattern)
        except re.error as e:
            raise ConfigurationError(f"Invalid --repo-regex {self.pattern!r}: {e}") from e

    def matches(self, repo: RepositoryTarget) -> bool:
        if repo.archived:
            return False
        if self.list_based:
            return repo.name in self.names
        return re.fullmatch(self.pattern, repo.name) is not None

    def select(self, repos: Iterable[RepositoryTarget]) -> list[RepositoryTarget]:
        return [r for r in repos if self.matches(r)]

    def missing(self, repos: Iterable[RepositoryTarget]) -> list[str]:
        """Listed names with no repository of that name among repos."""
        if not self.list_based:
            return []
        present = {r.name for r in repos}
        return [n for n in self.names if n not in present]

    def describe(self) -> str:
        if self.list_based:
            return f"list: {', '.join(self.names)}"
        return f"pattern: {self.pattern}"
