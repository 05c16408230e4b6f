"""Detect build tools, task runners, containers and CI from marker files."""

from __future__ import annotations

from pathlib import Path

from stackprint.analysis.static.schemas import BuildToolResult

# category → tool → marker paths relative to the project root
BUILD_TOOL_PATTERNS: dict[str, dict[str, tuple[str, ...]]] = {
    "bundlers": {
        "vite": ("vite.config.ts", "vite.config.js", "vite.config.mjs"),
        "webpack": ("webpack.config.js", "webpack.config.ts"),
        "rollup": ("rollup.config.js", "rollup.config.ts", "rollup.config.mjs"),
        "parcel": (".parcelrc", "parcel.config.js"),
        "esbuild": ("esbuild.config.js", "esbuild.config.mjs"),
        "turbopack": ("turbo.json",),
    },
    "monorepo_tools": {
        "nx": ("nx.json", "workspace.json"),
        "turbo": ("turbo.json",),
        "lerna": ("lerna.json",),
        "rush": ("rush.json",),
    },
    "task_runners": {
        "make": ("Makefile", "makefile", "GNUmakefile"),
        "task": ("Taskfile.yml", "Taskfile.yaml"),
        "just": ("justfile", "Justfile"),
        "nox": ("noxfile.py",),
        "tox": ("tox.ini",),
    },
    "containerization": {
        "docker": ("Dockerfile", "dockerfile", ".dockerignore"),
        "docker-compose": (
            "docker-compose.yml",
            "docker-compose.yaml",
            "compose.yml",
            "compose.yaml",
        ),
        "podman": ("Containerfile",),
    },
    "ci": {
        "github-actions": (".github/workflows",),
        "gitlab-ci": (".gitlab-ci.yml",),
        "circle-ci": (".circleci/config.yml",),
        "travis-ci": (".travis.yml",),
        "jenkins": ("Jenkinsfile",),
        "azure-pipelines": ("azure-pipelines.yml",),
    },
}


def detect_build_tools(project_path: Path) -> BuildToolResult:
    """Single-valued categories take the first match in table order;
    containerization and CI report every match.
    """
    root = Path(project_path)
    return BuildToolResult(
        bundler=first_match(root, BUILD_TOOL_PATTERNS["bundlers"]),
        monorepo_tool=first_match(root, BUILD_TOOL_PATTERNS["monorepo_tools"]),
        task_runner=first_match(root, BUILD_TOOL_PATTERNS["task_runners"]),
        containerization=all_matches(
            root, BUILD_TOOL_PATTERNS["containerization"]
        ),
        ci=all_matches(root, BUILD_TOOL_PATTERNS["ci"]),
    )


def first_match(
    root: Path, patterns: dict[str, tuple[str, ...]]
) -> str | None:
    for tool, markers in patterns.items():
        if _any_exists(root, markers):
            return tool
    return None


def all_matches(root: Path, patterns: dict[str, tuple[str, ...]]) -> list[str]:
    return [
        tool
        for tool, markers in patterns.items()
        if _any_exists(root, markers)
    ]


def _any_exists(root: Path, markers: tuple[str, ...]) -> bool:
    return any((root / marker).exists() for marker in markers)
