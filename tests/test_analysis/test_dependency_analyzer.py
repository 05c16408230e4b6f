"""Tests for dependency and package-manager detection."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from stackprint.analysis.static.dependency_analyzer import (
    all_dependency_names,
    analyze_dependencies,
    detect_package_manager,
    parse_requirement,
)
from stackprint.constants import PackageManager

PACKAGE_JSON = json.dumps(
    {
        "dependencies": {"react": "^18.2.0", "zustand": "^4.5.0"},
        "devDependencies": {"vitest": "^1.6.0"},
    }
)


def test_no_evidence(project: Path) -> None:
    result = analyze_dependencies(project)
    assert result.package_manager is None
    assert result.dependencies == {}
    assert result.dev_dependencies == {}
    assert result.lockfile_present is False


def test_manifest_only_npm(make_project) -> None:
    root = make_project({"package.json": PACKAGE_JSON})
    result = analyze_dependencies(root)
    assert result.package_manager == PackageManager.NPM
    assert result.lockfile_present is False
    assert result.lockfile_path is None
    assert result.dependencies == {"react": "^18.2.0", "zustand": "^4.5.0"}
    assert result.dev_dependencies == {"vitest": "^1.6.0"}
    assert result.manifest_path == str(root / "package.json")


@pytest.mark.parametrize(
    ("lockfile", "manager"),
    [
        ("bun.lockb", PackageManager.BUN),
        ("pnpm-lock.yaml", PackageManager.PNPM),
        ("yarn.lock", PackageManager.YARN),
        ("package-lock.json", PackageManager.NPM),
    ],
)
def test_node_lockfiles(make_project, lockfile: str, manager: PackageManager) -> None:
    root = make_project({"package.json": PACKAGE_JSON, lockfile: ""})
    result = analyze_dependencies(root)
    assert result.package_manager == manager
    assert result.lockfile_present is True
    assert result.lockfile_path == str(root / lockfile)


def test_lockfile_precedence(make_project) -> None:
    root = make_project({"yarn.lock": "", "pnpm-lock.yaml": "", "package.json": "{}"})
    assert detect_package_manager(root) == PackageManager.PNPM


def test_malformed_package_json_counts_as_absent(make_project) -> None:
    root = make_project({"package.json": "{ nope"})
    result = analyze_dependencies(root)
    assert result.package_manager == PackageManager.NPM
    assert result.dependencies == {}


class TestPython:
    def test_requirements_txt(self, make_project) -> None:
        root = make_project(
            {
                "requirements.txt": (
                    "# pinned\nfastapi==0.110.0\nuvicorn[standard]>=0.29\n"
                    "-r other.txt\nrequests\n"
                ),
                "requirements-dev.txt": "pytest>=8\n",
            }
        )
        result = analyze_dependencies(root)
        assert result.package_manager == PackageManager.PIP
        assert result.dependencies == {
            "fastapi": "==0.110.0",
            "uvicorn": ">=0.29",
            "requests": "*",
        }
        assert result.dev_dependencies == {"pytest": ">=8"}

    def test_pep621_pyproject(self, make_project) -> None:
        root = make_project(
            {
                "pyproject.toml": (
                    "[project]\n"
                    'name = "x"\n'
                    'dependencies = ["pydantic>=2", "httpx"]\n'
                    "[project.optional-dependencies]\n"
                    'test = ["pytest"]\n'
                    "[dependency-groups]\n"
                    'lint = ["ruff>=0.4"]\n'
                )
            }
        )
        result = analyze_dependencies(root)
        assert result.package_manager == PackageManager.PIP
        assert result.dependencies == {"pydantic": ">=2", "httpx": "*"}
        assert result.dev_dependencies == {"pytest": "*", "ruff": ">=0.4"}
        assert result.manifest_path == str(root / "pyproject.toml")

    def test_poetry_project(self, make_project) -> None:
        root = make_project(
            {
                "pyproject.toml": (
                    "[tool.poetry.dependencies]\n"
                    'python = "^3.12"\n'
                    'django = "^5.0"\n'
                    'celery = { version = "^5.3", extras = ["redis"] }\n'
                    "[tool.poetry.group.dev.dependencies]\n"
                    'pytest = "^8.0"\n'
                ),
                "poetry.lock": "",
            }
        )
        result = analyze_dependencies(root)
        assert result.package_manager == PackageManager.POETRY
        assert result.lockfile_present is True
        assert result.dependencies == {"django": "^5.0", "celery": "^5.3"}
        assert result.dev_dependencies == {"pytest": "^8.0"}

    def test_poetry_without_lockfile(self, make_project) -> None:
        root = make_project(
            {"pyproject.toml": '[tool.poetry.dependencies]\npython = "^3.12"\n'}
        )
        assert detect_package_manager(root) == PackageManager.POETRY

    def test_malformed_pyproject(self, make_project) -> None:
        root = make_project({"pyproject.toml": "[project\n"})
        result = analyze_dependencies(root)
        assert result.package_manager == PackageManager.PIP
        assert result.dependencies == {}

    def test_non_utf8_pyproject_counts_as_absent(self, make_project) -> None:
        root = make_project({"pyproject.toml": b'[project]\nname = "\xff\xfe"\n'})
        result = analyze_dependencies(root)
        assert result.package_manager == PackageManager.PIP
        assert result.dependencies == {}
        assert all_dependency_names(root) == set()

    @pytest.mark.parametrize(
        ("content", "manager"),
        [
            ('project = "x"\n', PackageManager.PIP),
            ("tool = 1\n", PackageManager.PIP),
            ('[project]\noptional-dependencies = ["a"]\n', PackageManager.PIP),
            ('dependency-groups = "dev"\n', PackageManager.PIP),
            ('tool = { poetry = "x" }\n', PackageManager.POETRY),
            ('[tool.poetry]\ngroup = "dev"\n', PackageManager.POETRY),
        ],
    )
    def test_misshapen_pyproject_tables_are_ignored(
        self, make_project, content: str, manager: PackageManager
    ) -> None:
        root = make_project({"pyproject.toml": content})
        result = analyze_dependencies(root)
        assert result.package_manager == manager
        assert result.dependencies == {}
        assert result.dev_dependencies == {}
        assert all_dependency_names(root) == set()


def test_go_mod(make_project) -> None:
    root = make_project(
        {
            "go.mod": (
                "module example.com/svc\n\n"
                "go 1.22\n\n"
                "require github.com/google/uuid v1.6.0\n\n"
                "require (\n"
                "\tgithub.com/gin-gonic/gin v1.9.1\n"
                "\tgorm.io/gorm v1.25.7 // indirect\n"
                ")\n"
            ),
            "go.sum": "",
        }
    )
    result = analyze_dependencies(root)
    assert result.package_manager == PackageManager.GO_MOD
    assert result.lockfile_present is True
    assert result.dependencies == {
        "github.com/google/uuid": "1.6.0",
        "github.com/gin-gonic/gin": "1.9.1",
        "gorm.io/gorm": "1.25.7",
    }


def test_cargo(make_project) -> None:
    root = make_project(
        {
            "Cargo.toml": (
                '[package]\nname = "x"\n'
                "[dependencies]\n"
                'axum = "0.7"\n'
                'tokio = { version = "1", features = ["full"] }\n'
                'local = { path = "../local" }\n'
                "[dev-dependencies]\n"
                'insta = "1.38"\n'
            )
        }
    )
    result = analyze_dependencies(root)
    assert result.package_manager == PackageManager.CARGO
    assert result.dependencies == {"axum": "0.7", "tokio": "1", "local": "*"}
    assert result.dev_dependencies == {"insta": "1.38"}


def test_gemfile(make_project) -> None:
    root = make_project(
        {
            "Gemfile": (
                "source 'https://rubygems.org'\n"
                "gem 'rails', '~> 7.1'\n"
                'gem "puma"\n'
            ),
            "Gemfile.lock": "",
        }
    )
    result = analyze_dependencies(root)
    assert result.package_manager == PackageManager.GEM
    assert result.dependencies == {"rails": "~> 7.1", "puma": "*"}


def test_composer(make_project) -> None:
    root = make_project(
        {
            "composer.json": json.dumps(
                {
                    "require": {"laravel/framework": "^11.0"},
                    "require-dev": {"phpunit/phpunit": "^11.0"},
                }
            )
        }
    )
    result = analyze_dependencies(root)
    assert result.package_manager == PackageManager.COMPOSER
    assert result.dependencies == {"laravel/framework": "^11.0"}
    assert result.dev_dependencies == {"phpunit/phpunit": "^11.0"}


def test_all_dependency_names_spans_ecosystems(make_project) -> None:
    root = make_project(
        {
            "package.json": PACKAGE_JSON,
            "requirements.txt": "Django>=5\n",
        }
    )
    names = all_dependency_names(root)
    assert {"react", "zustand", "vitest", "django"} <= names


class TestParseRequirement:
    def test_comment_and_option_lines(self) -> None:
        assert parse_requirement("# comment") is None
        assert parse_requirement("--index-url https://x") is None
        assert parse_requirement("   ") is None

    def test_environment_marker_dropped(self) -> None:
        assert parse_requirement('tomli>=2; python_version < "3.11"') == (
            "tomli",
            ">=2",
        )

    def test_extras_dropped(self) -> None:
        assert parse_requirement("uvicorn[standard]==0.29") == (
            "uvicorn",
            "==0.29",
        )
