"""Scripted stand-in for a urllib opener, for driving the real GitHubClient."""

from __future__ import annotations

import io
import json
import urllib.error
from typing import Any


class _Response(io.BytesIO):
    def __enter__(self) -> _Response:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class FakeOpener:
    """Records requests and replays queued (status, payload) answers."""

    def __init__(self, *answers: tuple[int, Any] | BaseException) -> None:
        self.answers = list(answers)
        self.requests: list[Any] = []
        self.closed = False

    def open(self, req, timeout: float | None = None):
        self.requests.append(req)
        answer = self.answers.pop(0)
        if isinstance(answer, BaseException):
            raise answer
        status, payload = answer
        raw = json.dumps(payload).encode("utf-8") if payload is not None else b""
        if status >= 400:
            raise urllib.error.HTTPError(req.full_url, status, "error", {}, io.BytesIO(raw))
        return _Response(raw)

    def close(self) -> None:
        self.closed = True

    @property
    def last_body(self) -> dict[str, Any]:
        return json.loads(self.requests[-1].data.decode("utf-8"))

    @property
    def methods(self) -> list[str]:
        return [r.get_method() for r in self.requests]
