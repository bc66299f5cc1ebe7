"""GitHub REST API operations used to add files via pull requests."""

from __future__ import annotations

import base64
import http.client
import json
import logging
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import quote

from .constants import (
    API_BASE,
    GITHUB_API_ACCEPT,
    GITHUB_API_VERSION,
    HTTP_TIMEOUT_SEC,
    PER_PAGE,
    USER_AGENT,
)
from .errors import ConflictError, GitHubError, NotFoundError, TransportError
from .types import CommitHandle, ProposalHandle, RefHandle, RepositoryTarget

log = logging.getLogger(__name__)


def _repo_name(repo: RepositoryTarget | str) -> str:
    return repo.full_name if isinstance(repo, RepositoryTarget) else repo


class GitHubClient:
    """Thin client over the GitHub v3 API.

    One instance is created per run and passed to whatever needs it; use it as a
    context manager so the underlying opener is closed at the end of the run.
    """

    def __init__(
        self,
        token: str | None = None,
        *,
        api_base: str = API_BASE,
        opener: urllib.request.OpenerDirector | None = None,
    ) -> None:
        self.token = token
        self.api_base = api_base.rstrip("/")
        self._opener = opener or urllib.request.build_opener()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._opener.close()

    # ---------- low-level HTTP ----------
    def _request_json(self, method: str, path: str, body: dict[str, Any] | None = None) -> Any:
        url = path if path.startswith("http") else f"{self.api_base}{path}"
        data = json.dumps(body).encode("utf-8") if body is not None else None
        req = urllib.request.Request(url, data=data, method=method)
        req.add_header("Accept", GITHUB_API_ACCEPT)
        req.add_header("X-GitHub-Api-Version", GITHUB_API_VERSION)
        req.add_header("User-Agent", USER_AGENT)
        if data is not None:
            req.add_header("Content-Type", "application/json")
        if self.token:
            req.add_header("Authorization", f"Bearer {self.token}")

        log.debug("%s %s", method, url)
        try:
            with self._opener.open(req, timeout=HTTP_TIMEOUT_SEC) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as e:
            raise self._error_for(method, url, e) from e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        return json.loads(raw.decode("utf-8")) if raw else None

    @staticmethod
    def _error_for(method: str, url: str, e: urllib.error.HTTPError) -> GitHubError:
        detail = e.reason
        try:
            payload = json.loads(e.read().decode("utf-8"))
            detail = payload.get("message", detail)
        except (ValueError, AttributeError, OSError):
            pass
        message = f"{method} {url} -> {e.code}: {detail}"
        if e.code == 404:
            return NotFoundError(message, status=e.code)
        if e.code in (409, 422):
            return ConflictError(message, status=e.code)
        return GitHubError(message, status=e.code)

    # ---------- organisation ----------
    def get_organization(self, org: str) -> dict[str, Any]:
        return self._request_json("GET", f"/orgs/{quote(org)}")

    def list_org_repos(self, org: str, visibility: str = "all") -> list[RepositoryTarget]:
        """Every repository of the org, archived ones included, sorted by full name."""
        repos: list[RepositoryTarget] = []
        page = 1
        while True:
            data = self._request_json(
                "GET",
                f"/orgs/{quote(org)}/repos"
                f"?per_page={PER_PAGE}&page={page}&type=all&sort=full_name&direction=asc&visibility={visibility}",
            )
            if not data:
                break
            repos.extend(RepositoryTarget.from_api(r) for r in data)
            if len(data) < PER_PAGE:
                break
            page += 1
        return repos

    # ---------- branches & refs ----------
    def get_default_branch(self, repo: RepositoryTarget | str) -> str:
        return self._request_json("GET", f"/repos/{_repo_name(repo)}")["default_branch"]

    def get_branch_head_sha(self, repo: RepositoryTarget | str, branch: str) -> str:
        data = self._request_json("GET", f"/repos/{_repo_name(repo)}/branches/{quote(branch, safe='')}")
        return data["commit"]["sha"]

    def create_ref(self, repo: RepositoryTarget | str, ref: str, sha: str) -> RefHandle:
        full = _repo_name(repo)
        data = self._request_json("POST", f"/repos/{full}/git/refs", {"ref": ref, "sha": sha})
        return RefHandle(repo=full, ref=data.get("ref", ref) if data else ref)

    def delete_ref(self, ref: RefHandle) -> tuple[bool, str | None]:
        """Best effort: returns (ok, error) rather than raising."""
        try:
            self._request_json("DELETE", f"/repos/{ref.repo}/git/{quote(ref.ref)}")
            return True, None
        except Exception as e:  # rollback must never abort the batch
            return False, f"{e}"

    # ---------- contents ----------
    def get_file_blob_id(self, repo: RepositoryTarget | str, path: str, ref: str) -> str | None:
        """Blob sha of the file at path on ref, or None when there is no file there."""
        try:
            data = self._request_json(
                "GET", f"/repos/{_repo_name(repo)}/contents/{quote(path)}?ref={quote(ref, safe='')}"
            )
        except NotFoundError:
            return None
        # a directory listing is not a file
        if not isinstance(data, dict):
            return None
        return data.get("sha")

    def write_file(
        self,
        repo: RepositoryTarget | str,
        path: str,
        branch: str,
        content: bytes,
        message: str,
        existing_blob_id: str | None = None,
    ) -> CommitHandle:
        body: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
            "branch": branch,
        }
        if existing_blob_id:
            body["sha"] = existing_blob_id
        data = self._request_json("PUT", f"/repos/{_repo_name(repo)}/contents/{quote(path)}", body)
        return CommitHandle(
            commit_sha=data["commit"]["sha"],
            blob_id=(data.get("content") or {}).get("sha"),
        )

    # ---------- pull requests ----------
    def create_pull_request(
        self,
        repo: RepositoryTarget | str,
        head: str,
        base: str,
        title: str,
        body: str,
    ) -> ProposalHandle:
        data = self._request_json(
            "POST",
            f"/repos/{_repo_name(repo)}/pulls",
            {"title": title, "head": head, "base": base, "body": body},
        )
        return ProposalHandle(number=data["number"], url=data["html_url"])
