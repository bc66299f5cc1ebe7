from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from ghfa.core.selector import RepositorySelector
from ghfa.core.types import ContentItem, FileAdditionRequest
from tests.support.fake_github import FakeGitHub

if TYPE_CHECKING:
    from collections.abc import Callable


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub(org="acme")


@pytest.fixture
def make_request() -> Callable[..., FileAdditionRequest]:
    def factory(**overrides: object) -> FileAdditionRequest:
        values: dict[str, object] = {
            "topic_branch": "git-file-adder",
            "selector": RepositorySelector(),
            "path": "",
            "local_names": ("README.md", "LICENSE"),
        }
        values.update(overrides)
        return FileAdditionRequest(**values)

    return factory


@pytest.fixture
def content() -> tuple[ContentItem, ...]:
    return (
        ContentItem(path="README.md", content=b"# hello\n", source_name="README.md"),
        ContentItem(path="LICENSE", content=b"MIT\n", source_name="LICENSE"),
    )
