"""Read-only filesystem helpers shared by the detectors.

Every helper treats a missing or malformed file as "no evidence" and
returns an empty value instead of raising.
"""

from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import yaml

from stackprint.config import Settings

logger = logging.getLogger(__name__)


def resolve_settings(settings: Settings | None) -> Settings:
    """Use the given Settings, or defaults when none are passed."""
    return settings if settings is not None else Settings()


def walk_files(
    root: Path,
    skip_dirs: Iterable[str],
    max_depth: int,
) -> Iterator[Path]:
    """Yield regular files under ``root``.

    Skips directories named in ``skip_dirs``, stops descending at
    ``max_depth``, and ignores symlinks that resolve outside the root.
    """
    resolved_root = root.resolve()
    yield from _walk(root, frozenset(skip_dirs), max_depth, 0, resolved_root)


def _walk(
    current: Path,
    skip_dirs: frozenset[str],
    max_depth: int,
    depth: int,
    resolved_root: Path,
) -> Iterator[Path]:
    if depth > max_depth:
        return
    try:
        children = sorted(current.iterdir())
    except OSError:
        return
    for item in children:
        if item.name in skip_dirs:
            continue
        if item.is_symlink():
            try:
                if not item.resolve().is_relative_to(resolved_root):
                    continue
            except OSError:
                continue
        if item.is_dir():
            yield from _walk(item, skip_dirs, max_depth, depth + 1, resolved_root)
        elif item.is_file():
            yield item


def read_json(path: Path) -> dict[str, Any] | None:
    """Parse a JSON object file. Returns None if absent or malformed."""
    if not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.debug("event=manifest_unparseable path=%s error=%s", path, exc)
        return None
    return data if isinstance(data, dict) else None


def read_toml(path: Path) -> dict[str, Any] | None:
    """Parse a TOML file. Returns None if absent or malformed."""
    if not path.is_file():
        return None
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.debug("event=manifest_unparseable path=%s error=%s", path, exc)
        return None


def read_yaml(path: Path) -> dict[str, Any] | None:
    """Parse a YAML mapping file. Returns None if absent or malformed."""
    if not path.is_file():
        return None
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
        logger.debug("event=manifest_unparseable path=%s error=%s", path, exc)
        return None
    return data if isinstance(data, dict) else None


def read_lines(path: Path) -> list[str]:
    """Read a text file as lines. Returns [] if absent or unreadable."""
    if not path.is_file():
        return []
    try:
        with open(path, encoding="utf-8", errors="replace") as f:
            return f.read().splitlines()
    except OSError:
        return []


def string_map(value: Any) -> dict[str, str]:
    """Coerce a manifest dependency table into ``{name: version}``.

    Non-string specs (tables such as ``{version = "1", features = [...]}``)
    keep their ``version`` key when present, else become ``"*"``.
    """
    if not isinstance(value, dict):
        return {}
    result: dict[str, str] = {}
    for name, spec in value.items():
        if isinstance(spec, str):
            result[str(name)] = spec
        elif isinstance(spec, dict) and isinstance(spec.get("version"), str):
            result[str(name)] = spec["version"]
        else:
            result[str(name)] = "*"
    return result


def package_json_dependencies(root: Path) -> tuple[dict[str, str], dict[str, str]]:
    """``(dependencies, devDependencies)`` from ``package.json``."""
    data = read_json(root / "package.json")
    if data is None:
        return {}, {}
    return (
        string_map(data.get("dependencies")),
        string_map(data.get("devDependencies")),
    )
