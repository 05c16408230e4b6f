"""Deterministic SHA-256 hashing for fingerprint generation."""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from stackprint.constants import (
    HASH_SEPARATOR,
    IGNORED_DIRECTORIES,
    MAX_WALK_DEPTH,
)

logger = logging.getLogger(__name__)


def hash_content(data: bytes | str) -> str:
    """SHA-256 hex digest of ``data`` (strings are UTF-8 encoded)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def hash_multiple(values: Sequence[str]) -> str:
    """Hash an ordered sequence of strings.

    Order matters: ``["a", "b"]`` and ``["b", "a"]`` hash differently.
    Callers must pass a fixed, pre-determined order.
    """
    return hash_content(HASH_SEPARATOR.join(values))


def hash_file(path: Path) -> str | None:
    """Hash a file's bytes. Returns None when the file cannot be read."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        logger.warning(
            "event=hash_file_skipped path=%s error=%s", path, exc
        )
        return None
    return hash_content(data)


def hash_directory_tree(
    root: Path,
    ignored: Iterable[str] = IGNORED_DIRECTORIES,
    max_depth: int = MAX_WALK_DEPTH,
) -> str:
    """Structural hash over relative paths and entry kinds.

    File contents are never read, so this only changes when entries
    are added, removed, renamed, or change kind.
    """
    records = sorted(
        _collect_entries(Path(root), Path(root), frozenset(ignored), max_depth, 0)
    )
    return hash_content("\n".join(records))


def _collect_entries(
    current: Path,
    root: Path,
    ignored: frozenset[str],
    max_depth: int,
    depth: int,
) -> list[str]:
    """Recursive walk helper producing ``"<kind>:<relpath>"`` records."""
    if depth >= max_depth:
        return []
    try:
        children = list(current.iterdir())
    except OSError as exc:
        logger.warning(
            "event=directory_unreadable path=%s error=%s", current, exc
        )
        return []

    records: list[str] = []
    for item in children:
        if item.name in ignored:
            continue
        rel = item.relative_to(root).as_posix()
        if item.is_dir() and not item.is_symlink():
            records.append(f"d:{rel}")
            records.extend(
                _collect_entries(item, root, ignored, max_depth, depth + 1)
            )
        else:
            records.append(f"f:{rel}")
    return records
