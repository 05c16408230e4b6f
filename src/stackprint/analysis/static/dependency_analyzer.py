"""Analyze project dependencies from manifest files.

Supported ecosystems:

* Node.js: package.json (npm, yarn, pnpm, bun lockfiles)
* Python: requirements.txt, Pipfile, pyproject.toml (PEP 621 and Poetry)
* Go: go.mod / go.sum
* Rust: Cargo.toml / Cargo.lock
* Ruby: Gemfile / Gemfile.lock
* PHP: composer.json / composer.lock
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from stackprint.analysis.static._files import (
    package_json_dependencies,
    read_json,
    read_lines,
    read_toml,
    string_map,
)
from stackprint.analysis.static.schemas import DependencyAnalysisResult
from stackprint.constants import PackageManager

# Checked in order of specificity; first present lockfile wins.
_LOCKFILE_PRECEDENCE: tuple[tuple[str, PackageManager], ...] = (
    ("bun.lockb", PackageManager.BUN),
    ("pnpm-lock.yaml", PackageManager.PNPM),
    ("yarn.lock", PackageManager.YARN),
    ("package-lock.json", PackageManager.NPM),
    ("Cargo.lock", PackageManager.CARGO),
    ("go.sum", PackageManager.GO_MOD),
    ("poetry.lock", PackageManager.POETRY),
    ("Pipfile.lock", PackageManager.PIP),
    ("Gemfile.lock", PackageManager.GEM),
    ("composer.lock", PackageManager.COMPOSER),
)

# Used when no lockfile is present.
_MANIFEST_PRECEDENCE: tuple[tuple[str, PackageManager], ...] = (
    ("package.json", PackageManager.NPM),
    ("Cargo.toml", PackageManager.CARGO),
    ("go.mod", PackageManager.GO_MOD),
    ("pyproject.toml", PackageManager.PIP),
    ("requirements.txt", PackageManager.PIP),
    ("Pipfile", PackageManager.PIP),
    ("Gemfile", PackageManager.GEM),
    ("composer.json", PackageManager.COMPOSER),
)

_LOCKFILE_FOR: dict[PackageManager, str] = {
    manager: name for name, manager in _LOCKFILE_PRECEDENCE
}

_REQUIREMENT_RE = re.compile(
    r"^([A-Za-z0-9][A-Za-z0-9._-]*)\s*(?:\[[^\]]*\])?\s*([^;#]*)"
)
_GO_REQUIRE_BLOCK_RE = re.compile(r"require\s*\(([\s\S]*?)\)")
_GO_REQUIRE_LINE_RE = re.compile(
    r"^require[ \t]+([^\s(]\S*)[ \t]+v?(\S+)", re.MULTILINE
)
_GEM_RE = re.compile(
    r"""^\s*gem\s+['"]([^'"]+)['"](?:\s*,\s*['"]([^'"]+)['"])?"""
)
_DEV_REQUIREMENTS_FILES = ("requirements-dev.txt", "dev-requirements.txt")


def analyze_dependencies(project_path: Path) -> DependencyAnalysisResult:
    """Detect the package manager and read direct + dev dependencies."""
    root = Path(project_path)
    manager = detect_package_manager(root)
    if manager is None:
        return DependencyAnalysisResult()

    match manager:
        case (
            PackageManager.NPM
            | PackageManager.YARN
            | PackageManager.PNPM
            | PackageManager.BUN
        ):
            deps, dev_deps = package_json_dependencies(root)
            manifest = root / "package.json"
        case PackageManager.PIP | PackageManager.POETRY:
            deps, dev_deps, manifest = _python_dependencies(root)
        case PackageManager.GO_MOD:
            deps, dev_deps = _go_dependencies(root), {}
            manifest = root / "go.mod"
        case PackageManager.CARGO:
            deps, dev_deps = _cargo_dependencies(root)
            manifest = root / "Cargo.toml"
        case PackageManager.GEM:
            deps, dev_deps = _gem_dependencies(root), {}
            manifest = root / "Gemfile"
        case PackageManager.COMPOSER:
            deps, dev_deps = _composer_dependencies(root)
            manifest = root / "composer.json"

    lockfile = root / _LOCKFILE_FOR[manager]
    lockfile_present = lockfile.is_file()
    return DependencyAnalysisResult(
        dependencies=deps,
        dev_dependencies=dev_deps,
        package_manager=manager,
        lockfile_present=lockfile_present,
        manifest_path=str(manifest) if manifest.is_file() else None,
        lockfile_path=str(lockfile) if lockfile_present else None,
    )


def detect_package_manager(root: Path) -> PackageManager | None:
    """Pick a package manager from lockfiles, then manifests."""
    for name, manager in _LOCKFILE_PRECEDENCE:
        if (root / name).is_file():
            return manager
    for name, manager in _MANIFEST_PRECEDENCE:
        if (root / name).is_file():
            if manager is PackageManager.PIP and _is_poetry_project(root):
                return PackageManager.POETRY
            return manager
    return None


def all_dependency_names(root: Path) -> set[str]:
    """Lower-cased dependency names across every supported ecosystem.

    Unlike :func:`analyze_dependencies`, this does not pick one package
    manager; polyglot projects contribute names from each manifest.
    """
    names: set[str] = set()
    node_deps, node_dev = package_json_dependencies(root)
    py_deps, py_dev, _ = _python_dependencies(root)
    cargo_deps, cargo_dev = _cargo_dependencies(root)
    php_deps, php_dev = _composer_dependencies(root)
    for table in (
        node_deps,
        node_dev,
        py_deps,
        py_dev,
        _go_dependencies(root),
        cargo_deps,
        cargo_dev,
        _gem_dependencies(root),
        php_deps,
        php_dev,
    ):
        names.update(name.lower() for name in table)
    return names


def parse_requirement(line: str) -> tuple[str, str] | None:
    """Parse one requirements/PEP 508 line into ``(name, specifier)``."""
    stripped = line.strip()
    if not stripped or stripped.startswith(("#", "-")):
        return None
    match = _REQUIREMENT_RE.match(stripped)
    if match is None:
        return None
    name, spec = match.group(1), match.group(2).strip()
    return name, spec or "*"


def _requirements_file(path: Path) -> dict[str, str]:
    deps: dict[str, str] = {}
    for line in read_lines(path):
        parsed = parse_requirement(line)
        if parsed is not None:
            deps[parsed[0]] = parsed[1]
    return deps


def _requirement_list(values: object) -> dict[str, str]:
    deps: dict[str, str] = {}
    if not isinstance(values, list):
        return deps
    for item in values:
        if isinstance(item, str):
            parsed = parse_requirement(item)
            if parsed is not None:
                deps[parsed[0]] = parsed[1]
    return deps


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    """``data[key]`` when it is a table, else an empty one."""
    value = data.get(key)
    return value if isinstance(value, dict) else {}


def _is_poetry_project(root: Path) -> bool:
    data = read_toml(root / "pyproject.toml") or {}
    return "poetry" in _table(data, "tool")


def _python_dependencies(
    root: Path,
) -> tuple[dict[str, str], dict[str, str], Path]:
    """requirements.txt first, then Pipfile, then pyproject.toml."""
    requirements = root / "requirements.txt"
    dev_deps: dict[str, str] = {}
    for name in _DEV_REQUIREMENTS_FILES:
        dev_deps.update(_requirements_file(root / name))

    if requirements.is_file():
        return _requirements_file(requirements), dev_deps, requirements

    pipfile = root / "Pipfile"
    if pipfile.is_file() and not (root / "pyproject.toml").is_file():
        data = read_toml(pipfile) or {}
        dev_deps.update(string_map(data.get("dev-packages")))
        return string_map(data.get("packages")), dev_deps, pipfile

    pyproject = root / "pyproject.toml"
    data = read_toml(pyproject) or {}

    project = _table(data, "project")
    deps = _requirement_list(project.get("dependencies"))
    for group in _table(project, "optional-dependencies").values():
        dev_deps.update(_requirement_list(group))
    for group in _table(data, "dependency-groups").values():
        dev_deps.update(_requirement_list(group))

    poetry = _table(_table(data, "tool"), "poetry")
    poetry_deps = string_map(poetry.get("dependencies"))
    poetry_deps.pop("python", None)
    deps.update(poetry_deps)
    dev_deps.update(string_map(poetry.get("dev-dependencies")))
    for group in _table(poetry, "group").values():
        if isinstance(group, dict):
            dev_deps.update(string_map(group.get("dependencies")))

    return deps, dev_deps, pyproject


def _go_dependencies(root: Path) -> dict[str, str]:
    content = "\n".join(read_lines(root / "go.mod"))
    deps: dict[str, str] = {}
    for block in _GO_REQUIRE_BLOCK_RE.findall(content):
        for line in block.splitlines():
            parts = line.split("//", 1)[0].split()
            if len(parts) >= 2:
                deps[parts[0]] = parts[1].removeprefix("v")
    for pkg, version in _GO_REQUIRE_LINE_RE.findall(content):
        deps[pkg] = version
    return deps


def _cargo_dependencies(root: Path) -> tuple[dict[str, str], dict[str, str]]:
    data = read_toml(root / "Cargo.toml") or {}
    return (
        string_map(data.get("dependencies")),
        string_map(data.get("dev-dependencies")),
    )


def _gem_dependencies(root: Path) -> dict[str, str]:
    deps: dict[str, str] = {}
    for line in read_lines(root / "Gemfile"):
        match = _GEM_RE.match(line)
        if match:
            deps[match.group(1)] = match.group(2) or "*"
    return deps


def _composer_dependencies(
    root: Path,
) -> tuple[dict[str, str], dict[str, str]]:
    data = read_json(root / "composer.json") or {}
    return (
        string_map(data.get("require")),
        string_map(data.get("require-dev")),
    )
