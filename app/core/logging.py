# app/core/logging.py - Process-wide logging setup (console + rotating files)
import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from app.core.config import Settings, settings as default_settings

FORMATS = {
    "simple": "%(levelname)s - %(message)s",
    "detailed": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}


class JsonFormatter(logging.Formatter):
    """One JSON object per line; structured fields travel in ``extra={"context": {...}}``"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["stack"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class ContextFormatter(logging.Formatter):
    """Plain-text formatter that appends the structured context, if any"""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = getattr(record, "context", None)
        if context:
            message = f"{message} {json.dumps(context, default=str)}"
        return message


def build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "json":
        return JsonFormatter()
    return ContextFormatter(FORMATS.get(log_format, FORMATS["detailed"]))


def _file_handler(path: str, config: Settings) -> logging.Handler:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    return logging.handlers.RotatingFileHandler(
        path,
        maxBytes=config.LOG_MAX_SIZE,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """
    Configure the root logger.

    Console output always uses the configured text format. The combined and
    error-only files (when configured) are written as JSON lines so they can
    be shipped to a log collector.

    Returns:
        The application logger (``app``)
    """
    config = config or default_settings

    root = logging.getLogger()
    root.setLevel(config.LOG_LEVEL)

    # Re-running setup (tests, reloads) must not stack handlers
    for handler in list(root.handlers):
        if getattr(handler, "_app_handler", False):
            root.removeHandler(handler)
            handler.close()

    console = logging.StreamHandler()
    console.setFormatter(build_formatter(config.LOG_FORMAT))
    handlers = [console]

    if config.LOG_FILE_PATH:
        combined = _file_handler(config.LOG_FILE_PATH, config)
        combined.setFormatter(JsonFormatter())
        handlers.append(combined)

    if config.ERROR_LOG_FILE_PATH:
        errors = _file_handler(config.ERROR_LOG_FILE_PATH, config)
        errors.setLevel(logging.ERROR)
        errors.setFormatter(JsonFormatter())
        handlers.append(errors)

    for handler in handlers:
        handler._app_handler = True
        root.addHandler(handler)

    return logging.getLogger("app")
