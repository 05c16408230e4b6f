"""JSON file cache of analysis results, keyed by project fingerprint.

One pretty-printed JSON document per fingerprint lives under the cache
root. Entries are validated on every read; an entry that is corrupt,
older than the TTL, or written under an unaccepted schema version is
deleted and reported as a miss.
"""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path

from stackprint.cache.schemas import AnalysisResult, CacheStats
from stackprint.config import Settings
from stackprint.constants import (
    ACCEPTED_SCHEMA_PREFIX,
    CACHE_FILE_SUFFIX,
    DEFAULT_CACHE_TTL_DAYS,
    MS_PER_DAY,
)
from stackprint.resilience.errors import (
    StaleCacheEntryError,
    classify_error,
    is_self_healing,
)

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path("~/.stackprint/cache/analysis")


class FingerprintCache:
    """File-based cache of AnalysisResult documents.

    Not synchronized across processes: concurrent writers to the same
    fingerprint race and the last one wins. A torn write shows up as a
    corrupt entry on the next read and is evicted.
    """

    def __init__(
        self,
        cache_dir: Path | str | None = None,
        ttl_days: float = DEFAULT_CACHE_TTL_DAYS,
        accepted_schema_prefix: str = ACCEPTED_SCHEMA_PREFIX,
    ) -> None:
        self._root = Path(cache_dir or DEFAULT_CACHE_DIR).expanduser()
        self._ttl_ms = ttl_days * MS_PER_DAY
        self._accepted_prefix = accepted_schema_prefix

    @classmethod
    def from_settings(cls, settings: Settings) -> FingerprintCache:
        return cls(
            cache_dir=settings.resolved_cache_dir,
            ttl_days=settings.cache_ttl_days,
            accepted_schema_prefix=settings.accepted_schema_prefix,
        )

    @property
    def root(self) -> Path:
        return self._root

    async def get(self, fingerprint: str) -> AnalysisResult | None:
        """Return the cached result, or None on a miss.

        Invalid entries are evicted as a side effect.
        """
        path = self._entry_path(fingerprint)
        if not path.is_file():
            return None
        try:
            return self._load(path)
        except Exception as exc:  # noqa: BLE001
            healing = is_self_healing(exc)
            logger.warning(
                "event=%s key=%s reason=%s error=%s",
                "cache_entry_evicted" if healing else "cache_read_failed",
                fingerprint,
                classify_error(exc).value,
                exc,
            )
            if healing:
                self._evict(path)
            return None

    async def set(self, fingerprint: str, result: AnalysisResult) -> None:
        """Write ``result`` under ``fingerprint``, replacing any entry."""
        self._root.mkdir(parents=True, exist_ok=True)
        path = self._entry_path(fingerprint)
        path.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        logger.debug("event=cache_entry_written key=%s", fingerprint)

    async def has(self, fingerprint: str) -> bool:
        return await self.get(fingerprint) is not None

    async def delete(self, fingerprint: str) -> bool:
        """Remove one entry. Returns True if a file was removed."""
        path = self._entry_path(fingerprint)
        if not path.is_file():
            return False
        return self._evict(path)

    async def clear(self) -> None:
        """Delete every entry. The cache root itself is kept."""
        for path in self._entries():
            path.unlink(missing_ok=True)

    async def clear_expired(self) -> int:
        """Delete every entry a ``get`` would evict. Returns the count."""
        removed = 0
        for path in self._entries():
            try:
                self._load(path)
            except Exception as exc:  # noqa: BLE001
                if not is_self_healing(exc):
                    logger.warning(
                        "event=cache_read_failed path=%s error=%s", path, exc
                    )
                elif self._evict(path):
                    removed += 1
        if removed:
            logger.info("event=cache_expired_cleared count=%d", removed)
        return removed

    async def get_stats(self) -> CacheStats:
        """Count entries and bytes, and find the timestamp range.

        Every entry file counts toward ``entry_count`` and
        ``total_bytes``; entries that fail to parse are left in place and
        contribute no timestamp.
        """
        stats = CacheStats()
        timestamps: list[int] = []
        for path in self._entries():
            try:
                size = path.stat().st_size
            except OSError:
                continue
            stats.entry_count += 1
            stats.total_bytes += size
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                continue
            if isinstance(data, dict) and isinstance(
                data.get("timestamp_ms"), int
            ):
                timestamps.append(data["timestamp_ms"])

        if timestamps:
            stats.oldest_timestamp = min(timestamps)
            stats.newest_timestamp = max(timestamps)
        return stats

    def _load(self, path: Path) -> AnalysisResult:
        """Read and validate one entry.

        Raises:
            ValidationError: entry is not valid JSON or not a valid payload.
            StaleCacheEntryError: entry is expired or has an old schema.
            OSError: entry could not be read.
        """
        result = AnalysisResult.model_validate_json(path.read_bytes())
        age_ms = _now_ms() - result.timestamp_ms
        if age_ms > self._ttl_ms:
            raise StaleCacheEntryError(
                f"entry expired {age_ms - self._ttl_ms:.0f}ms ago"
            )
        if not result.schema_version.startswith(self._accepted_prefix):
            raise StaleCacheEntryError(
                f"schema {result.schema_version!r} not accepted "
                f"(want {self._accepted_prefix!r}*)"
            )
        return result

    def _evict(self, path: Path) -> bool:
        """Delete an entry file. Failures are logged, never raised."""
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as exc:
            logger.warning(
                "event=cache_evict_failed path=%s error=%s", path, exc
            )
            return False
        return True

    def _entries(self) -> list[Path]:
        if not self._root.is_dir():
            return []
        return sorted(
            path
            for path in self._root.glob(f"*{CACHE_FILE_SUFFIX}")
            if path.is_file()
        )

    def _entry_path(self, fingerprint: str) -> Path:
        """File path for a key; separators are replaced so it stays in root."""
        safe_key = fingerprint.replace("/", "_").replace("\\", "_")
        if safe_key in ("", ".", ".."):
            safe_key = f"_{safe_key}"
        return self._root / f"{safe_key}{CACHE_FILE_SUFFIX}"


def _now_ms() -> int:
    return int(time.time() * 1000)
