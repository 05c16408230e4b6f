"""Error classification for fingerprinting and cache failures.

Neither the fingerprint generator nor the cache raises past its public
contract; they classify what went wrong so the failure can be logged
and folded into the returned value:

- PATH_NOT_FOUND: the project root is missing (fingerprint is invalid)
- UNREADABLE_FILE: one input file could not be read (skipped)
- CORRUPT_CACHE_ENTRY: a cache document failed to parse (evicted)
- STALE_CACHE_ENTRY: a cache document is expired or has an old schema (evicted)
- UNEXPECTED: anything else (fingerprint is invalid)
"""

from __future__ import annotations

import json
from enum import Enum

from pydantic import ValidationError


class ErrorClass(Enum):
    PATH_NOT_FOUND = "path_not_found"
    UNREADABLE_FILE = "unreadable_file"
    CORRUPT_CACHE_ENTRY = "corrupt_cache_entry"
    STALE_CACHE_ENTRY = "stale_cache_entry"
    UNEXPECTED = "unexpected"


class StaleCacheEntryError(Exception):
    """A cache entry outlived its TTL or carries an unaccepted schema."""


def classify_error(error: BaseException) -> ErrorClass:
    """Map an exception onto the error taxonomy.

    Parse failures are checked before OSError because
    UnicodeDecodeError is a ValueError, not an OSError.
    """
    if isinstance(error, StaleCacheEntryError):
        return ErrorClass.STALE_CACHE_ENTRY
    if isinstance(
        error, (json.JSONDecodeError, UnicodeDecodeError, ValidationError)
    ):
        return ErrorClass.CORRUPT_CACHE_ENTRY
    if isinstance(error, (FileNotFoundError, NotADirectoryError)):
        return ErrorClass.PATH_NOT_FOUND
    if isinstance(error, OSError):
        return ErrorClass.UNREADABLE_FILE
    return ErrorClass.UNEXPECTED


def describe_error(error: BaseException) -> str:
    """Human-readable reason for an invalid result.

    Falls back to the exception type name when the message is empty.
    """
    message = str(error).strip()
    if not message:
        return type(error).__name__
    return message


_SELF_HEALING = frozenset({
    ErrorClass.CORRUPT_CACHE_ENTRY,
    ErrorClass.STALE_CACHE_ENTRY,
})


def is_self_healing(error: BaseException) -> bool:
    """Return True if the failure is repaired by evicting the entry."""
    return classify_error(error) in _SELF_HEALING
