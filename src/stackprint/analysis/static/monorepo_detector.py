"""Detect multi-package workspaces and the tool that manages them."""

from __future__ import annotations

from pathlib import Path

from stackprint.analysis.static._files import (
    read_json,
    read_lines,
    read_toml,
    read_yaml,
)
from stackprint.analysis.static.schemas import MonorepoResult
from stackprint.constants import MonorepoLayout

# Checked in order; first present file names the tool.
_TOOL_MARKERS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("nx", ("nx.json", "workspace.json")),
    ("turbo", ("turbo.json",)),
    ("lerna", ("lerna.json",)),
    ("rush", ("rush.json",)),
)

_PACKAGE_DIRS = ("apps", "packages", "libs")
_PACKAGE_MANIFESTS = ("package.json", "pyproject.toml", "Cargo.toml", "go.mod")


def detect_monorepo(project_path: Path) -> MonorepoResult:
    """Tool config first, then workspace declarations, then layout."""
    root = Path(project_path)

    tool = detect_monorepo_tool(root)
    if tool is not None:
        return _result(root, tool, _tool_packages(root, tool))

    workspace_tool, packages = _workspace_declaration(root)
    if workspace_tool is not None:
        return _result(root, workspace_tool, packages)

    if _has_package_directories(root):
        return _result(root, None, _package_directories(root))

    return MonorepoResult()


def detect_monorepo_tool(root: Path) -> str | None:
    for tool, markers in _TOOL_MARKERS:
        if any((root / marker).is_file() for marker in markers):
            return tool
    return None


def detect_layout(root: Path) -> MonorepoLayout:
    has_apps = (root / "apps").is_dir()
    has_packages = (root / "packages").is_dir()
    has_libs = (root / "libs").is_dir()

    if has_apps and (has_packages or has_libs):
        return MonorepoLayout.APPS_PACKAGES
    if has_packages and not has_apps:
        return MonorepoLayout.PACKAGES_ONLY
    if has_libs and not has_apps and not has_packages:
        return MonorepoLayout.LIBS_ONLY
    return MonorepoLayout.CUSTOM


def _result(root: Path, tool: str | None, packages: list[str]) -> MonorepoResult:
    return MonorepoResult(
        is_monorepo=True,
        tool=tool,
        packages=packages,
        structure=detect_layout(root),
        package_count=len(packages),
    )


def _tool_packages(root: Path, tool: str) -> list[str]:
    if tool == "nx":
        return _package_directories(root)
    if tool == "rush":
        return _rush_projects(root)
    # turbo and lerna delegate to the package manager's workspaces
    packages = _node_workspaces(root) or _pnpm_workspaces(root)
    if not packages and tool == "lerna":
        lerna = read_json(root / "lerna.json") or {}
        packages = _string_list(lerna.get("packages"))
    return packages


def _workspace_declaration(root: Path) -> tuple[str | None, list[str]]:
    """Workspace tool and declared package globs, if any."""
    pnpm = _pnpm_workspaces(root)
    if pnpm or (root / "pnpm-workspace.yaml").is_file():
        return "pnpm-workspaces", pnpm

    package_json = read_json(root / "package.json") or {}
    if package_json.get("workspaces"):
        if (root / "pnpm-lock.yaml").is_file():
            tool = "pnpm-workspaces"
        elif (root / "yarn.lock").is_file():
            tool = "yarn-workspaces"
        else:
            tool = "npm-workspaces"
        return tool, _node_workspaces(root)

    cargo = read_toml(root / "Cargo.toml") or {}
    workspace = cargo.get("workspace")
    if isinstance(workspace, dict):
        return "cargo-workspaces", _string_list(workspace.get("members"))

    if (root / "go.work").is_file():
        return "go-workspaces", _go_work_modules(root)

    return None, []


def _node_workspaces(root: Path) -> list[str]:
    data = read_json(root / "package.json") or {}
    workspaces = data.get("workspaces")
    if isinstance(workspaces, dict):
        workspaces = workspaces.get("packages")
    return _string_list(workspaces)


def _pnpm_workspaces(root: Path) -> list[str]:
    data = read_yaml(root / "pnpm-workspace.yaml") or {}
    return _string_list(data.get("packages"))


def _rush_projects(root: Path) -> list[str]:
    data = read_json(root / "rush.json") or {}
    projects = data.get("projects")
    if not isinstance(projects, list):
        return []
    return [
        p["projectFolder"]
        for p in projects
        if isinstance(p, dict) and isinstance(p.get("projectFolder"), str)
    ]


def _go_work_modules(root: Path) -> list[str]:
    modules: list[str] = []
    in_block = False
    for raw in read_lines(root / "go.work"):
        line = raw.split("//", 1)[0].strip()
        if line.startswith("use ("):
            in_block = True
        elif in_block and line == ")":
            in_block = False
        elif in_block and line:
            modules.append(line)
        elif line.startswith("use "):
            modules.append(line.removeprefix("use ").strip())
    return modules


def _has_package_directories(root: Path) -> bool:
    """True if apps/, packages/ or libs/ holds a sub-project manifest."""
    for name in _PACKAGE_DIRS:
        for child in _subdirectories(root / name):
            if any((child / m).is_file() for m in _PACKAGE_MANIFESTS):
                return True
    return False


def _package_directories(root: Path) -> list[str]:
    return [
        f"{name}/{child.name}"
        for name in _PACKAGE_DIRS
        for child in _subdirectories(root / name)
    ]


def _subdirectories(path: Path) -> list[Path]:
    if not path.is_dir():
        return []
    try:
        return sorted(child for child in path.iterdir() if child.is_dir())
    except OSError:
        return []


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]
