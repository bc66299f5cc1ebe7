from __future__ import annotations

import pytest

from ghfa.core.errors import ConfigurationError
from ghfa.core.selector import RepositorySelector
from ghfa.core.types import RepositoryTarget


def _repo(name: str, *, archived: bool = False) -> RepositoryTarget:
    return RepositoryTarget(name=name, full_name=f"acme/{name}", default_branch="main", archived=archived)


REPOS = [_repo("repo-a"), _repo("repo-b", archived=True), _repo("service-x"), _repo("my-service-y")]


def test_list_mode_excludes_archived() -> None:
    selector = RepositorySelector(names=("repo-a", "repo-b"))

    selected = selector.select(REPOS)

    assert [r.name for r in selected] == ["repo-a"]


def test_pattern_must_match_whole_name() -> None:
    selector = RepositorySelector(pattern="service-.*")

    selected = selector.select(REPOS)

    assert [r.name for r in selected] == ["service-x"]


def test_default_pattern_selects_every_unarchived_repo_in_order() -> None:
    selected = RepositorySelector().select(REPOS)

    assert [r.name for r in selected] == ["repo-a", "service-x", "my-service-y"]


def test_list_and_custom_pattern_together_is_a_configuration_error() -> None:
    selector = RepositorySelector(names=("repo-a",), pattern="repo-.*")

    with pytest.raises(ConfigurationError, match="Choose one or the other"):
        selector.validate()


def test_list_with_default_pattern_is_valid() -> None:
    RepositorySelector(names=("repo-a",)).validate()


def test_invalid_pattern_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="Invalid --repo-regex"):
        RepositorySelector(pattern="repo-(").validate()


def test_missing_reports_names_not_in_org() -> None:
    selector = RepositorySelector(names=("repo-a", "typo-repo"))

    assert selector.missing(REPOS) == ["typo-repo"]
    assert RepositorySelector().missing(REPOS) == []


def test_list_with_empty_pattern_is_a_configuration_error() -> None:
    with pytest.raises(ConfigurationError, match="Choose one or the other"):
        RepositorySelector(names=("repo-a",), pattern="").validate()


def test_empty_pattern_matches_no_repository() -> None:
    selector = RepositorySelector(pattern="")

    selector.validate()

    assert selector.select(REPOS) == []
