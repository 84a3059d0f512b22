from __future__ import annotations

import json
import logging
import sys
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .settings import get_settings

LOGGER_NAME = "heic_converter"
LOG_FORMAT = "[%(asctime)s] %(levelname)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


class StderrHandler(logging.StreamHandler):
    """Stream handler that always writes to the current ``sys.stderr``."""

    def __init__(self) -> None:
        logging.Handler.__init__(self)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr


def setup_logger(level: int | str = logging.INFO) -> logging.Logger:
    """Configure the package logger with exactly one stderr handler.

    ``HEIC_CONVERTER_LOG_LEVEL`` overrides *level* on every call.
    """
    logger = logging.getLogger(LOGGER_NAME)
    env_level = get_settings().log_level
    logger.setLevel(env_level or level)

    stream_handler: StderrHandler | None = None
    for handler in logger.handlers:
        if isinstance(handler, StderrHandler):
            stream_handler = handler
            break
    if stream_handler is None:
        stream_handler = StderrHandler()
        logger.addHandler(stream_handler)
    stream_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger(LOGGER_NAME)
    return base if not name else base.getChild(name)


@dataclass(slots=True)
class RunLogEntry:
    batch_id: str
    source: str
    status: str
    error_code: str | None
    convert_ms: float
    output_name: str | None
    size_bytes: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class RunLogger:
    """Append one JSON line per converted item; a ``None`` path disables it."""

    def __init__(self, log_file: Path | None) -> None:
        self._log_file = log_file

    def append(self, entry: RunLogEntry) -> None:
        if self._log_file is None:
            return
        self._log_file.parent.mkdir(parents=True, exist_ok=True)
        line = json.dumps(entry.to_dict(), ensure_ascii=False)
        with self._log_file.open("a", encoding="utf-8") as handle:
            handle.write(line + "\n")


@dataclass(slots=True)
class BatchSummary:
    timestamp: float = field(default_factory=time.time)
    total: int = 0
    successes: int = 0
    failures: int = 0
    output_bytes: int = 0


__all__ = [
    "BatchSummary",
    "LOGGER_NAME",
    "RunLogEntry",
    "RunLogger",
    "get_logger",
    "setup_logger",
]
