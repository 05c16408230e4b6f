"""Detect configuration files: compilers, linters, containers, CI, hooks."""

from __future__ import annotations

import logging
from pathlib import Path

import pathspec

from stackprint.analysis.static.schemas import (
    ConfigAnalysisResult,
    DetectedConfig,
)

logger = logging.getLogger(__name__)

# (category, display name, literal paths or glob patterns), in report order
CONFIG_PATTERNS: tuple[tuple[str, str, tuple[str, ...]], ...] = (
    ("typescript", "TypeScript", ("tsconfig.json", "tsconfig.*.json")),
    (
        "linting",
        "ESLint",
        (
            ".eslintrc",
            ".eslintrc.json",
            ".eslintrc.js",
            ".eslintrc.cjs",
            "eslint.config.js",
            "eslint.config.mjs",
        ),
    ),
    (
        "linting",
        "Prettier",
        (
            ".prettierrc",
            ".prettierrc.json",
            ".prettierrc.js",
            "prettier.config.js",
            ".prettierrc.yaml",
        ),
    ),
    ("linting", "Ruff", ("ruff.toml", ".ruff.toml")),
    (
        "docker",
        "Docker",
        ("Dockerfile", "Dockerfile.*", "docker-compose.yml", "docker-compose.yaml"),
    ),
    ("ci", "GitHub Actions", (".github/workflows",)),
    ("ci", "GitLab CI", (".gitlab-ci.yml",)),
    ("ci", "CircleCI", (".circleci/config.yml",)),
    ("ci", "Travis CI", (".travis.yml",)),
    ("ci", "Jenkins", ("Jenkinsfile",)),
    ("ci", "Azure Pipelines", ("azure-pipelines.yml",)),
    (
        "environment",
        "Environment Variables",
        (".env", ".env.local", ".env.development", ".env.production", ".env.example"),
    ),
    ("git-hooks", "Husky", (".husky",)),
    ("git-hooks", "pre-commit", (".pre-commit-config.yaml",)),
    ("git-hooks", "Git Hooks", (".git/hooks/pre-commit", ".git/hooks/commit-msg")),
    ("editor", "EditorConfig", (".editorconfig",)),
    ("testing", "Jest", ("jest.config.js", "jest.config.ts", "jest.config.json")),
    ("testing", "Vitest", ("vitest.config.ts", "vitest.config.js")),
    ("build", "Vite", ("vite.config.ts", "vite.config.js")),
    ("build", "Webpack", ("webpack.config.js", "webpack.config.ts")),
    ("build", "Rollup", ("rollup.config.js", "rollup.config.ts")),
    ("package-manager", "npm", (".npmrc",)),
    ("package-manager", "Yarn", (".yarnrc", ".yarnrc.yml")),
    ("package-manager", "pnpm", (".pnpmfile.cjs", "pnpm-workspace.yaml")),
)

_GLOB_CHARS = frozenset("*?[")


def analyze_configs(project_path: Path) -> ConfigAnalysisResult:
    """Walk the pattern table and collect every config that is present."""
    root = Path(project_path)
    detected: list[DetectedConfig] = []

    for category, name, patterns in CONFIG_PATTERNS:
        found: list[str] = []
        for pattern in patterns:
            found.extend(find_config_files(root, pattern))
        if found:
            detected.append(
                DetectedConfig(category=category, name=name, matched_files=found)
            )

    categories = {config.category for config in detected}
    return ConfigAnalysisResult(
        configs=detected,
        has_typescript="typescript" in categories,
        has_linting="linting" in categories,
        has_docker="docker" in categories,
        has_ci="ci" in categories,
        has_environment_files="environment" in categories,
    )


def find_config_files(root: Path, pattern: str) -> list[str]:
    """Relative paths under ``root`` matched by one table entry.

    Literal files match when they exist. Literal directories match only
    when they have at least one entry. Glob patterns are matched
    against the entries of their parent directory, sorted by name.
    """
    if not any(ch in _GLOB_CHARS for ch in pattern):
        return [pattern] if _literal_present(root / pattern) else []

    parent, _, leaf = pattern.rpartition("/")
    search_dir = root / parent if parent else root
    spec = pathspec.PathSpec.from_lines("gitignore", [leaf])
    try:
        entries = sorted(
            entry.name for entry in search_dir.iterdir() if entry.is_file()
        )
    except OSError:
        return []
    return [
        f"{parent}/{entry}" if parent else entry
        for entry in entries
        if spec.match_file(entry)
    ]


def _literal_present(path: Path) -> bool:
    if path.is_dir():
        try:
            return any(path.iterdir())
        except OSError as exc:
            logger.debug("event=config_dir_unreadable path=%s error=%s", path, exc)
            return False
    return path.is_file()
