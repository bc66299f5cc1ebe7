"""Turn local files into the ordered set of blobs written to each repository."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from .errors import StagingError
from .types import ContentItem


def normalize_prefix(path: str | None) -> str:
    """'' stays '', anything else ends with exactly one '/'."""
    if not path:
        return ""
    return path if path.endswith("/") else path + "/"


def stage_files(files: Sequence[Path | str], path: str | None = "") -> tuple[ContentItem, ...]:
    """Read files in order and place each one under the destination prefix.

    Two inputs with the same file name would land on the same destination path and
    the second write would silently replace the first, so that is rejected here.
    """
    prefix = normalize_prefix(path)
    staged: dict[str, ContentItem] = {}
    for f in files:
        f = Path(f)
        target = prefix + f.name
        if target in staged:
            raise StagingError(
                f"{f} and {staged[target].source_name} would both be written to {target}"
            )
        try:
            content = f.read_bytes()
        except OSError as e:
            raise StagingError(f"Cannot read {f}: {e}") from e
        staged[target] = ContentItem(path=target, content=content, source_name=str(f))
    return tuple(staged.values())


def derive_message(names: Sequence[str], path: str | None = "") -> str:
    """Pull request title used when none was given, e.g. 'Add README.md, LICENSE to docs'."""
    message = "Add " + ", ".join(names)
    if path:
        message += f" to {path}"
    return message
