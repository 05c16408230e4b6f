"""Shared constants: single source of truth for cross-module values.

The lockfile and config-file tables are ordered tuples: the
fingerprint component hashes iterate them in declaration order, so the
order is part of the hash contract.
"""

from __future__ import annotations

from enum import StrEnum

# ── Schema Versions ──────────────────────────────────────

FINGERPRINT_SCHEMA_VERSION = "1.0.0"
ANALYSIS_SCHEMA_VERSION = "1.0.0"
ACCEPTED_SCHEMA_PREFIX = "1."

# ── String Enums ─────────────────────────────────────────


class PackageManager(StrEnum):
    """Package managers recognised by the dependency analyzer."""

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"
    BUN = "bun"
    PIP = "pip"
    POETRY = "poetry"
    GO_MOD = "go-mod"
    CARGO = "cargo"
    GEM = "gem"
    COMPOSER = "composer"


class MonorepoLayout(StrEnum):
    """Top-level directory layout of a monorepo."""

    APPS_PACKAGES = "apps-packages"
    PACKAGES_ONLY = "packages-only"
    LIBS_ONLY = "libs-only"
    CUSTOM = "custom"


class AnalysisSource(StrEnum):
    """Where an AnalysisResult came from."""

    STATIC_ONLY = "static-only"


# ── Fingerprint Inputs ───────────────────────────────────

LOCKFILE_NAMES: tuple[str, ...] = (
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "bun.lockb",
    "Pipfile.lock",
    "poetry.lock",
    "requirements.txt",
    "go.sum",
    "Cargo.lock",
    "Gemfile.lock",
    "composer.lock",
    "packages.lock.json",  # .NET
)

CONFIG_FILE_NAMES: tuple[str, ...] = (
    "package.json",
    "tsconfig.json",
    "next.config.js",
    "next.config.mjs",
    "vite.config.ts",
    "vite.config.js",
    "webpack.config.js",
    "nx.json",
    "turbo.json",
    "lerna.json",
    "pyproject.toml",
    "setup.py",
    "go.mod",
    "Cargo.toml",
    ".eslintrc.json",
    ".eslintrc.js",
    "prettier.config.js",
    ".prettierrc",
)

NO_LOCKFILES_SENTINEL = "no-lockfiles"
NO_CONFIGS_SENTINEL = "no-configs"
HASH_SEPARATOR = "::"

# Directories never descended into (VCS metadata, build output,
# dependency caches, vendored code).
IGNORED_DIRECTORIES: tuple[str, ...] = (
    "node_modules",
    ".git",
    ".svn",
    ".hg",
    "dist",
    "build",
    "out",
    "coverage",
    ".next",
    ".cache",
    ".nuxt",
    ".output",
    "tmp",
    "temp",
    "vendor",
    "target",
    "bin",
    "obj",
    "__pycache__",
    ".venv",
    ".DS_Store",
    "Thumbs.db",
)

MAX_WALK_DEPTH = 10

# ── Language Detection ───────────────────────────────────

LANGUAGE_EXTENSIONS: dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".py": "python",
    ".pyi": "python",
    ".go": "go",
    ".rs": "rust",
    ".java": "java",
    ".kt": "kotlin",
    ".cs": "csharp",
    ".rb": "ruby",
    ".php": "php",
    ".swift": "swift",
}

AVG_LINES_PER_FILE: dict[str, int] = {
    "typescript": 150,
    "javascript": 120,
    "python": 100,
    "go": 130,
    "rust": 150,
    "java": 180,
    "kotlin": 140,
    "csharp": 170,
    "ruby": 100,
    "php": 120,
    "swift": 140,
}
DEFAULT_LINES_PER_FILE = 100

# (manifest file, language, weight)
MANIFEST_INDICATORS: tuple[tuple[str, str, float], ...] = (
    ("package.json", "javascript", 1.0),
    ("tsconfig.json", "typescript", 2.0),
    ("requirements.txt", "python", 1.0),
    ("pyproject.toml", "python", 1.5),
    ("go.mod", "go", 2.0),
    ("Cargo.toml", "rust", 2.0),
    ("pom.xml", "java", 1.5),
    ("build.gradle", "java", 1.5),
    ("Gemfile", "ruby", 1.5),
)
TYPESCRIPT_DEPENDENCY_BONUS = 1.5
MANIFEST_BONUS_MULTIPLIER = 10
LINE_SCORE_DIVISOR = 100

# ── Confidence ───────────────────────────────────────────


class Confidence:
    """Per-signal increments for the aggregate confidence score."""

    LOCKFILE_PRESENT = 0.9
    DEPENDENCIES_ONLY = 0.6
    FRAMEWORKS = 0.8
    BUILD_TOOLS = 0.7
    MONOREPO_TOOL = 0.9
    STRUCTURE_PATTERN_DIVISOR = 5
    STRUCTURE_CAP = 1.0
    CONFIG_DIVISOR = 5
    CONFIG_CAP = 0.8
    MANY_LANGUAGES_PENALTY = 0.8  # more than 3 languages
    FEW_LANGUAGES_PENALTY = 0.9  # 2-3 languages


# ── Misc ─────────────────────────────────────────────────

GIT_REVPARSE_TIMEOUT = 10
CACHE_FILE_SUFFIX = ".json"
DEFAULT_CACHE_TTL_DAYS = 30
MS_PER_DAY = 24 * 60 * 60 * 1000
