"""Generate a content fingerprint for a project tree.

The fingerprint combines four component hashes:

* VCS head: ``git rev-parse HEAD`` when the project is a git repo
* structure: relative paths of every non-ignored directory and file
* dependencies: contents of known lockfiles
* configs: contents of known configuration files

Identical inputs always give an identical hash, and bumping the schema
version invalidates every previous fingerprint.
"""

from __future__ import annotations

import asyncio
import logging
import re
import time
from collections.abc import Sequence
from pathlib import Path

from stackprint.config import Settings
from stackprint.constants import (
    CONFIG_FILE_NAMES,
    LOCKFILE_NAMES,
    NO_CONFIGS_SENTINEL,
    NO_LOCKFILES_SENTINEL,
)
from stackprint.fingerprint.hashing import (
    hash_content,
    hash_directory_tree,
    hash_file,
    hash_multiple,
)
from stackprint.fingerprint.schemas import (
    FingerprintComponents,
    FingerprintResult,
)
from stackprint.resilience.errors import classify_error, describe_error

logger = logging.getLogger(__name__)

_GIT_SHA_RE = re.compile(r"[0-9a-f]{40}")


class FingerprintGenerator:
    """Computes :class:`FingerprintResult` values for project roots."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        lockfile_names: Sequence[str] = LOCKFILE_NAMES,
        config_file_names: Sequence[str] = CONFIG_FILE_NAMES,
    ) -> None:
        self._settings = settings or Settings()
        self._lockfile_names = tuple(lockfile_names)
        self._config_file_names = tuple(config_file_names)

    @property
    def schema_version(self) -> str:
        return self._settings.fingerprint_schema_version

    async def generate(self, project_path: Path | str) -> FingerprintResult:
        """Fingerprint ``project_path``. Never raises.

        A missing path or any unexpected failure yields a result with
        ``valid=False`` and an ``invalid_reason``.
        """
        root = Path(project_path)
        try:
            if not root.exists():
                return _invalid(f"Project path does not exist: {root}")
            if not root.is_dir():
                return _invalid(f"Project path is not a directory: {root}")
        except OSError as exc:
            return _invalid(describe_error(exc))

        try:
            vcs_head, structure, dependencies, configs = await asyncio.gather(
                get_vcs_head(root, self._settings.git_revparse_timeout),
                asyncio.to_thread(
                    hash_directory_tree,
                    root,
                    self._settings.skip_directories,
                    self._settings.max_walk_depth,
                ),
                asyncio.to_thread(
                    hash_named_files,
                    root,
                    self._lockfile_names,
                    NO_LOCKFILES_SENTINEL,
                ),
                asyncio.to_thread(
                    hash_named_files,
                    root,
                    self._config_file_names,
                    NO_CONFIGS_SENTINEL,
                ),
            )
            components = FingerprintComponents(
                vcs_head=vcs_head,
                structure=structure,
                dependencies=dependencies,
                configs=configs,
            )
            combined = combine_hashes(components, self.schema_version)
        except Exception as exc:  # noqa: BLE001
            logger.warning(
                "event=fingerprint_failed path=%s class=%s",
                root,
                classify_error(exc).value,
                exc_info=True,
            )
            return _invalid(describe_error(exc))

        logger.debug(
            "event=fingerprint_generated path=%s hash=%s vcs=%s",
            root,
            combined,
            vcs_head or "none",
        )
        return FingerprintResult(
            hash=combined,
            components=components,
            timestamp_ms=_now_ms(),
            valid=True,
        )


async def generate_fingerprint(
    project_path: Path | str,
    settings: Settings | None = None,
) -> FingerprintResult:
    """Fingerprint a project with default file tables."""
    return await FingerprintGenerator(settings).generate(project_path)


def combine_hashes(
    components: FingerprintComponents, schema_version: str
) -> str:
    """Combine component hashes into the final fingerprint."""
    parts = [
        f"schema:{schema_version}",
        f"vcs:{components.vcs_head or 'none'}",
        f"structure:{components.structure}",
        f"dependencies:{components.dependencies}",
        f"configs:{components.configs}",
    ]
    return hash_content("|".join(parts))


def hash_named_files(
    root: Path, names: Sequence[str], sentinel: str
) -> str:
    """Hash the files in ``names`` that exist under ``root``.

    Files are visited in the order given. Unreadable files are left
    out of the hash. When nothing is hashed, the result is the hash
    of ``sentinel`` so an empty set is still a stable, distinct value.
    """
    entries: list[str] = []
    for name in names:
        path = root / name
        if not path.is_file():
            continue
        digest = hash_file(path)
        if digest is None:
            continue
        entries.append(f"{name}:{digest}")

    if not entries:
        return hash_content(sentinel)
    return hash_multiple(entries)


async def get_vcs_head(root: Path, timeout: float) -> str | None:
    """Return the git HEAD commit, or None if there isn't one.

    No repository, no commits, a missing git binary, and a hung git
    process all count as "no head".
    """
    if not (root / ".git").exists():
        return None
    try:
        proc = await asyncio.create_subprocess_exec(
            "git",
            "-C",
            str(root),
            "rev-parse",
            "HEAD",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        logger.debug("event=git_unavailable error=%s", exc)
        return None

    try:
        stdout, _ = await asyncio.wait_for(
            proc.communicate(), timeout=timeout
        )
    except TimeoutError:
        proc.kill()
        logger.warning("event=git_revparse_timeout path=%s", root)
        return None
    if proc.returncode != 0:
        return None

    head = stdout.decode(errors="replace").strip()
    if not _GIT_SHA_RE.fullmatch(head):
        return None
    return head


def _invalid(reason: str) -> FingerprintResult:
    logger.warning("event=fingerprint_invalid reason=%s", reason)
    return FingerprintResult(
        hash="",
        components=FingerprintComponents(),
        timestamp_ms=_now_ms(),
        valid=False,
        invalid_reason=reason,
    )


def _now_ms() -> int:
    return int(time.time() * 1000)
