"""Shared test fixtures: temporary project trees and isolated settings."""

from __future__ import annotations

import os

# Keep a developer's STACKPRINT_* environment out of every Settings()
# built during the test run.
for _key in [k for k in os.environ if k.startswith("STACKPRINT_")]:
    del os.environ[_key]

from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from stackprint.cache.fingerprint_cache import FingerprintCache
from stackprint.config import Settings

TreeWriter = Callable[[Mapping[str, str | bytes]], Path]


def write_tree(root: Path, files: Mapping[str, str | bytes]) -> Path:
    """Create ``files`` (relative path → content) under ``root``.

    A path ending in ``/`` creates an empty directory.
    """
    for rel, content in files.items():
        path = root / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An empty project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def make_project(project: Path) -> TreeWriter:
    """Populate the ``project`` directory from a mapping."""

    def _make(files: Mapping[str, str | bytes]) -> Path:
        return write_tree(project, files)

    return _make


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings with the cache rooted in the test's temp directory."""
    return Settings(cache_dir=tmp_path / "cache", _env_file=None)  # type: ignore[call-arg]


@pytest.fixture
def cache(settings: Settings) -> FingerprintCache:
    return FingerprintCache.from_settings(settings)
