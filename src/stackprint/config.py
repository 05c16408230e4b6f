"""Environment-based configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from stackprint.constants import (
    ACCEPTED_SCHEMA_PREFIX,
    DEFAULT_CACHE_TTL_DAYS,
    FINGERPRINT_SCHEMA_VERSION,
    GIT_REVPARSE_TIMEOUT,
    IGNORED_DIRECTORIES,
    MAX_WALK_DEPTH,
)

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Reads from .env file and STACKPRINT_* environment variables."""

    # Cache
    cache_dir: Path = Path("~/.stackprint/cache/analysis")
    cache_ttl_days: float = DEFAULT_CACHE_TTL_DAYS
    accepted_schema_prefix: str = ACCEPTED_SCHEMA_PREFIX

    # Fingerprinting
    fingerprint_schema_version: str = FINGERPRINT_SCHEMA_VERSION
    git_revparse_timeout: float = GIT_REVPARSE_TIMEOUT

    # Tree walking
    max_walk_depth: int = MAX_WALK_DEPTH
    skip_directories: Annotated[list[str], NoDecode] = list(
        IGNORED_DIRECTORIES
    )

    # Logging
    log_level: str = "INFO"

    @field_validator("skip_directories", mode="before")
    @classmethod
    def _parse_skip_directories(cls, v: Any) -> Any:
        """Accept comma-separated string or JSON array."""
        if isinstance(v, str):
            return [s.strip() for s in v.split(",") if s.strip()]
        return v

    @field_validator("cache_ttl_days")
    @classmethod
    def _validate_ttl(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("cache_ttl_days must be positive")
        return v

    @field_validator("max_walk_depth")
    @classmethod
    def _validate_depth(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_walk_depth must be at least 1")
        return v

    @field_validator("accepted_schema_prefix")
    @classmethod
    def _warn_on_empty_prefix(cls, v: str) -> str:
        if not v:
            logger.warning(
                "Empty STACKPRINT_ACCEPTED_SCHEMA_PREFIX accepts every "
                "cached schema version"
            )
        return v

    @property
    def resolved_cache_dir(self) -> Path:
        """Cache directory with ``~`` expanded to the home directory."""
        return self.cache_dir.expanduser()

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "STACKPRINT_",
        "extra": "ignore",
    }
