"""Tests for build tool detection."""

from __future__ import annotations

from pathlib import Path

from stackprint.analysis.static.build_tool_detector import (
    BUILD_TOOL_PATTERNS,
    all_matches,
    detect_build_tools,
    first_match,
)


def test_nothing_detected(project: Path) -> None:
    result = detect_build_tools(project)
    assert result.has_any() is False
    assert result.bundler is None
    assert result.containerization == []
    assert result.ci == []


def test_single_valued_categories(make_project) -> None:
    root = make_project(
        {"vite.config.ts": "", "nx.json": "{}", "Makefile": "all:\n"}
    )
    result = detect_build_tools(root)
    assert result.bundler == "vite"
    assert result.monorepo_tool == "nx"
    assert result.task_runner == "make"
    assert result.has_any()


def test_first_match_follows_table_order(make_project) -> None:
    root = make_project({"webpack.config.js": "", "vite.config.js": ""})
    assert first_match(root, BUILD_TOOL_PATTERNS["bundlers"]) == "vite"


def test_multi_valued_categories(make_project) -> None:
    root = make_project(
        {
            "Dockerfile": "FROM python:3.12",
            "compose.yaml": "",
            ".github/workflows/ci.yml": "",
            ".gitlab-ci.yml": "",
        }
    )
    result = detect_build_tools(root)
    assert result.containerization == ["docker", "docker-compose"]
    assert result.ci == ["github-actions", "gitlab-ci"]


def test_nested_marker(make_project) -> None:
    root = make_project({".circleci/config.yml": ""})
    assert all_matches(root, BUILD_TOOL_PATTERNS["ci"]) == ["circle-ci"]
