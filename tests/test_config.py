"""Tests for Settings parsing and validators."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from stackprint.config import Settings
from stackprint.constants import (
    ACCEPTED_SCHEMA_PREFIX,
    FINGERPRINT_SCHEMA_VERSION,
    IGNORED_DIRECTORIES,
    MAX_WALK_DEPTH,
)


class TestDefaults:
    def test_defaults_match_constants(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.cache_ttl_days == 30
        assert s.accepted_schema_prefix == ACCEPTED_SCHEMA_PREFIX
        assert s.fingerprint_schema_version == FINGERPRINT_SCHEMA_VERSION
        assert s.max_walk_depth == MAX_WALK_DEPTH
        assert s.skip_directories == list(IGNORED_DIRECTORIES)

    def test_default_cache_dir_is_under_home(self) -> None:
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.resolved_cache_dir == (
            Path.home() / ".stackprint" / "cache" / "analysis"
        )


class TestSkipDirectoriesParsing:
    def test_comma_separated_string_parsed_to_list(self) -> None:
        s = Settings(skip_directories="node_modules,dist")  # type: ignore[arg-type]
        assert s.skip_directories == ["node_modules", "dist"]

    def test_comma_separated_with_spaces(self) -> None:
        s = Settings(skip_directories=" node_modules , dist ,")  # type: ignore[arg-type]
        assert s.skip_directories == ["node_modules", "dist"]

    def test_list_passthrough(self) -> None:
        s = Settings(skip_directories=["a", "b"])
        assert s.skip_directories == ["a", "b"]

    def test_env_var_csv(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACKPRINT_SKIP_DIRECTORIES", "vendor,target")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.skip_directories == ["vendor", "target"]


class TestValidation:
    def test_zero_ttl_raises(self) -> None:
        with pytest.raises(ValueError, match="cache_ttl_days must be positive"):
            Settings(cache_ttl_days=0)

    def test_negative_ttl_raises(self) -> None:
        with pytest.raises(ValueError, match="cache_ttl_days must be positive"):
            Settings(cache_ttl_days=-1)

    def test_fractional_ttl_allowed(self) -> None:
        assert Settings(cache_ttl_days=0.5).cache_ttl_days == 0.5

    def test_zero_depth_raises(self) -> None:
        with pytest.raises(ValueError, match="max_walk_depth"):
            Settings(max_walk_depth=0)

    def test_empty_prefix_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="stackprint.config"):
            Settings(accepted_schema_prefix="")
        assert "ACCEPTED_SCHEMA_PREFIX" in caplog.text


class TestEnvironment:
    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STACKPRINT_CACHE_TTL_DAYS", "7")
        monkeypatch.setenv("STACKPRINT_FINGERPRINT_SCHEMA_VERSION", "2.0.0")
        s = Settings(_env_file=None)  # type: ignore[call-arg]
        assert s.cache_ttl_days == 7
        assert s.fingerprint_schema_version == "2.0.0"

    def test_tilde_cache_dir_expands(self) -> None:
        s = Settings(cache_dir=Path("~/somewhere"))
        assert s.resolved_cache_dir == Path.home() / "somewhere"
