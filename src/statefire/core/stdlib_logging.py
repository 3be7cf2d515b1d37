from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from statefire.core.config import StatefireConfig

_CONFIGURED_LOG_PATH: str | None = None
_STATEFIRE_FILE_HANDLER: logging.Handler | None = None

LOGGER_NAME = "statefire"


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, log_path: Path, level: str = "INFO") -> logging.Handler:
    """Send ``statefire`` log records to ``log_path``.

    Idempotent per-process: if already configured for the same file, no-op.
    Only the ``statefire`` logger is touched; the root logger is left to the
    host application.
    """
    global _CONFIGURED_LOG_PATH, _STATEFIRE_FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(_level_from_name(level))

    if _CONFIGURED_LOG_PATH == resolved and _STATEFIRE_FILE_HANDLER is not None:
        _STATEFIRE_FILE_HANDLER.setLevel(_level_from_name(level))
        return _STATEFIRE_FILE_HANDLER

    Path(resolved).parent.mkdir(parents=True, exist_ok=True)

    # Replace the handler we installed earlier when switching paths.
    if _STATEFIRE_FILE_HANDLER is not None:
        logger.removeHandler(_STATEFIRE_FILE_HANDLER)
        _STATEFIRE_FILE_HANDLER.close()
        _STATEFIRE_FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(fh)

    _STATEFIRE_FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved
    return fh


def configure_from_config(config: StatefireConfig) -> Optional[logging.Handler]:
    """Apply the logging section of a loaded config.

    Without a ``log_path`` only the level is set and records propagate to
    whatever handlers the application installed.
    """
    if config.log_path:
        return configure_stdlib_logging(log_path=Path(config.log_path), level=config.log_level)
    logging.getLogger(LOGGER_NAME).setLevel(_level_from_name(config.log_level))
    return None


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: remove the installed handler and reset the level."""
    global _CONFIGURED_LOG_PATH, _STATEFIRE_FILE_HANDLER
    logger = logging.getLogger(LOGGER_NAME)
    if _STATEFIRE_FILE_HANDLER is not None:
        logger.removeHandler(_STATEFIRE_FILE_HANDLER)
        _STATEFIRE_FILE_HANDLER.close()
    logger.setLevel(logging.NOTSET)
    _CONFIGURED_LOG_PATH = None
    _STATEFIRE_FILE_HANDLER = None


__all__ = [
    "LOGGER_NAME",
    "configure_stdlib_logging",
    "configure_from_config",
    "reset_stdlib_logging_for_tests",
]
