"""Singleton logging configuration.

setup_logging() configures the root logger once per process; later
calls are no-ops so library callers and embedding applications can
both invoke it safely.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Library loggers that only matter when debugging stackprint itself
_QUIET_LOGGERS = (
    "asyncio",
)

_configured = False


def setup_logging(level: str = "INFO") -> None:
    """Configure root logger. Idempotent; a second call is a no-op."""
    global _configured  # noqa: PLW0603
    if _configured:
        return
    _configured = True

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
