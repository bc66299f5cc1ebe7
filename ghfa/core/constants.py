"""Module holding constants used across ghfa."""

API_BASE = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"
USER_AGENT = "ghfa/0.1"
HTTP_TIMEOUT_SEC = 30
PER_PAGE = 100

DEFAULT_TOPIC_BRANCH = "git-file-adder"
DEFAULT_REPO_PATTERN = ".*"
PR_BODY = "Created by ghfa"
