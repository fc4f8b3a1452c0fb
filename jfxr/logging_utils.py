"""Process-wide logging for jfxr.

Everything logs under the ``jfxr`` logger. Two environment variables control
it: ``JFXR_LOG_DIR`` moves the log file (default ``~/.cache/jfxr/logs``) and
``JFXR_DEBUG`` turns on DEBUG console output and CLI tracebacks.
"""

from __future__ import annotations

import logging
import os
import sys
import traceback
from dataclasses import dataclass
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

_LOGGER = logging.getLogger("jfxr.logging")
_ROOT_LOGGER = "jfxr"
_LOG_DIR_ENV = "JFXR_LOG_DIR"
_DEBUG_ENV = "JFXR_DEBUG"
_LOG_FILE = "jfxr.log"
_MAX_LOG_BYTES = 1_000_000
_LOG_BACKUPS = 3
_CONSOLE_FORMAT = "%(emoji)s %(short_name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_EMOJI = {
    logging.DEBUG: "🔧",
    logging.INFO: "🔊",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💥",
}

_configured = False


@dataclass(frozen=True, slots=True)
class LogSettings:
    log_dir: Path
    debug: bool

    @classmethod
    def from_env(cls) -> LogSettings:
        configured = os.environ.get(_LOG_DIR_ENV)
        log_dir = (
            Path(configured).expanduser()
            if configured
            else Path.home() / ".cache" / "jfxr" / "logs"
        )
        return cls(log_dir=log_dir, debug=bool(os.environ.get(_DEBUG_ENV)))

    @property
    def log_path(self) -> Path:
        return self.log_dir / _LOG_FILE


class _EmojiFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.emoji = _EMOJI.get(record.levelno, "")
        record.short_name = record.name.removeprefix(f"{_ROOT_LOGGER}.")
        return super().format(record)


def debug_enabled() -> bool:
    return LogSettings.from_env().debug


def get_log_dir() -> Path:
    return LogSettings.from_env().log_dir


def get_log_path() -> Path:
    return LogSettings.from_env().log_path


def _file_handler(settings: LogSettings) -> logging.Handler | None:
    try:
        settings.log_dir.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            settings.log_path,
            maxBytes=_MAX_LOG_BYTES,
            backupCount=_LOG_BACKUPS,
            encoding="utf-8",
        )
    except OSError as exc:
        _LOGGER.warning("File logging disabled (%s): %s", settings.log_dir, exc)
        return None
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def configure_logging(*, force: bool = False) -> None:
    """Attach console and file handlers to the ``jfxr`` logger once per process.

    The console handler is skipped when the application already configured the
    root logger, unless ``force`` is set. ``force`` also drops handlers from a
    previous call, e.g. after ``JFXR_LOG_DIR`` changed.
    """
    global _configured
    if _configured and not force:
        return

    settings = LogSettings.from_env()
    logger = logging.getLogger(_ROOT_LOGGER)
    logger.setLevel(logging.DEBUG)
    for stale in list(logger.handlers) if force else []:
        logger.removeHandler(stale)
        stale.close()

    if force or not logging.getLogger().handlers:
        console = logging.StreamHandler(stream=sys.__stderr__)
        console.setLevel(logging.DEBUG if settings.debug else logging.INFO)
        console.setFormatter(_EmojiFormatter(_CONSOLE_FORMAT))
        logger.addHandler(console)

    file_handler = _file_handler(settings)
    if file_handler is not None:
        logger.addHandler(file_handler)

    # Keep propagating so pytest's caplog and host apps see our records.
    logger.propagate = True
    _configured = True


def log_exception(context: str, exc: BaseException) -> Path | None:
    """Append ``exc`` with its traceback to the log file; returns the file or None."""
    path = get_log_path()
    stamp = datetime.now().isoformat(timespec="seconds")
    lines = [f"[{stamp}] {context} failed: {type(exc).__name__}: {exc}\n"]
    lines.extend(traceback.format_exception(type(exc), exc, exc.__traceback__))
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.writelines(lines)
            handle.write("\n")
    except OSError as log_exc:
        _LOGGER.warning("Could not write crash log %s: %s", path, log_exc)
        return None
    return path
