from __future__ import annotations

import logging

import pytest

from ghfa.config.settings import get_settings
from ghfa.core.logging import configure_logging


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_test")
    monkeypatch.setenv("GITHUB_API_BASE", "https://ghe.example.test/api/v3")
    monkeypatch.setenv("DEFAULT_TOPIC_BRANCH", "standard-files")

    s = get_settings()

    assert s.github_token == "ghp_test"
    assert s.github_api_base == "https://ghe.example.test/api/v3"
    assert s.default_topic_branch == "standard-files"


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("GITHUB_TOKEN", "GITHUB_API_BASE", "DEFAULT_TOPIC_BRANCH", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    s = get_settings()

    assert s.github_token is None
    assert s.github_api_base == "https://api.github.com"
    assert s.default_topic_branch == "git-file-adder"
    assert s.log_level == "INFO"


def test_configure_logging_accepts_level_names() -> None:
    configure_logging(level="debug", force=True)
    assert logging.getLogger().level == logging.DEBUG

    configure_logging(level="not-a-level", force=True)
    assert logging.getLogger().level == logging.INFO
