"""Logging setup writing JSON lines to stdout and the configured log directory."""
from __future__ import annotations

import json
import logging
from logging.config import dictConfig
from pathlib import Path
from typing import Any, Dict

from .config import Settings, load_settings

APP_LOG_NAME = "application.log"
INGESTION_LOG_NAME = "ingestion.log"


class _JsonFormatter(logging.Formatter):
    """Render each record as a single JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = record.stack_info
        return json.dumps(payload)


def build_logging_config(settings: Settings | None = None) -> Dict[str, Any]:
    """Build the dictConfig mapping; ingestion loggers also write to their own file."""

    settings = settings or load_settings()
    log_dir = Path(settings.logging.directory)
    level = settings.logging.level.upper()
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "json": {
                "()": f"{__name__}._JsonFormatter",
                "fmt": "%(asctime)s %(levelname)s %(name)s %(message)s",
            },
            "console": {
                "format": "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
            },
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "json",
                "level": level,
            },
            "app_file": {
                "class": "logging.FileHandler",
                "formatter": "json",
                "level": level,
                "filename": str(log_dir / APP_LOG_NAME),
                "encoding": "utf-8",
                "mode": "a",
            },
            "ingestion_file": {
                "class": "logging.FileHandler",
                "formatter": "json",
                "level": "DEBUG",
                "filename": str(log_dir / INGESTION_LOG_NAME),
                "encoding": "utf-8",
                "mode": "a",
            },
            "uvicorn": {
                "class": "logging.StreamHandler",
                "formatter": "console",
            },
        },
        "loggers": {
            "": {"handlers": ["default", "app_file"], "level": level},
            "uvicorn": {"handlers": ["uvicorn"], "level": "INFO", "propagate": False},
            "uvicorn.error": {"handlers": ["default"], "level": "INFO", "propagate": False},
            "uvicorn.access": {"handlers": ["default"], "level": "INFO", "propagate": False},
            "vectorrag.ingestion": {
                "handlers": ["default", "ingestion_file", "app_file"],
                "level": "DEBUG",
                "propagate": False,
            },
        },
    }


def setup_logging(settings: Settings | None = None) -> None:
    """Create the log directory and install the configuration."""

    settings = settings or load_settings()
    Path(settings.logging.directory).mkdir(parents=True, exist_ok=True)
    dictConfig(build_logging_config(settings))


__all__ = ["setup_logging", "build_logging_config"]
