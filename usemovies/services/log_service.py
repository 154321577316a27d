"""Log channels for the movie session

``error`` and ``info`` carry plain messages. ``fetch`` is the trail of every
OMDb request and of what happened to each fetch attempt, written as
``event key=value ...`` lines so one query can be followed by grepping for it.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List

from ..config import settings

CHANNELS = ("error", "info", "fetch")

# What became of a fetch attempt
APPLIED = "applied"
FAILED = "failed"
DROPPED = "dropped"
CANCELLED = "cancelled"


class LogService:
    """One rotating file per channel"""

    def __init__(self, log_dir: Path = None):
        self.log_dir = log_dir or settings.LOGS_DIR
        self.log_dir.mkdir(exist_ok=True, parents=True)
        self.loggers: Dict[str, logging.Logger] = {
            name: self._channel(name) for name in CHANNELS
        }

    def _channel(self, name: str) -> logging.Logger:
        logger = logging.getLogger(f"usemovies.{name}")
        logger.setLevel(logging.DEBUG if name == "fetch" else logging.INFO)

        # Loggers are process-wide; attach the file only once
        if not logger.handlers:
            handler = RotatingFileHandler(
                self._path(name),
                maxBytes=5 * 1024 * 1024,
                backupCount=2,
            )
            handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s %(levelname)s %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            logger.addHandler(handler)
        return logger

    def _path(self, channel: str) -> Path:
        return self.log_dir / f"{channel}.log"

    def error(self, message: str, exc_info=None):
        self.loggers["error"].error(message, exc_info=exc_info)

    def info(self, message: str):
        self.loggers["info"].info(message)

    def fetch(self, event: str, **fields):
        """Record one step of a fetch

        ``fields`` with a value of ``None`` are left out of the line. The
        full mapping is kept on the record as ``fetch_fields``.
        """
        fields = {key: value for key, value in fields.items() if value is not None}
        line = " ".join([event] + [f"{key}={value!r}" for key, value in fields.items()])
        self.loggers["fetch"].debug(line, extra={"fetch_fields": fields})

    def outcome(self, label: str, key: str, outcome: str, reason: str = None):
        """Record how the attempt ``label`` for ``key`` ended"""
        self.fetch("settled", token=label, key=key, outcome=outcome, reason=reason)

    def get_logs(self, log_type: str = "error", limit: int = 100) -> List[str]:
        """Last ``limit`` lines of a channel"""
        log_file = self._path(log_type)
        if not log_file.exists():
            return []

        try:
            with open(log_file, "r") as f:
                lines = [line.rstrip("\n") for line in f]
        except OSError as e:
            self.error(f"Failed to read {log_type} log: {e}")
            return []
        return lines[-limit:]


log_service = LogService()
