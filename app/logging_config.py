import json
import logging
import os
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

from config import Settings

TEXT_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class ContextFormatter(logging.Formatter):
    """Text format with the record's structured context appended as key=value pairs"""

    def format(self, record):
        base = super().format(record)
        context = getattr(record, "context", None)
        if context:
            pairs = " ".join(f"{key}={value!r}" for key, value in context.items())
            return f"{base} | {pairs}"
        return base


class JSONFormatter(logging.Formatter):
    """One JSON document per line, for the log files"""

    def format(self, record):
        log_record = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": record.name,
            "level": record.levelname,
            "message": record.getMessage(),
            "context": {
                "module": record.module,
                "line": record.lineno,
                **(getattr(record, "context", None) or {}),
            },
        }
        if record.exc_info:
            log_record["stack"] = self.formatException(record.exc_info)
        return json.dumps(log_record, default=str)


def setup_logging(settings: Settings) -> None:
    """Configure the root logger: console always, error.log/combined.log when LOG_DIR is set"""
    handlers = []

    console = logging.StreamHandler()
    console.setFormatter(ContextFormatter(TEXT_FORMAT))
    handlers.append(console)

    if settings.LOG_DIR:
        os.makedirs(settings.LOG_DIR, exist_ok=True)
        json_formatter = JSONFormatter()

        combined = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, "combined.log"),
            maxBytes=10 * 1024 * 1024,  # 10MB
            backupCount=5,
        )
        combined.setFormatter(json_formatter)
        handlers.append(combined)

        errors = RotatingFileHandler(
            os.path.join(settings.LOG_DIR, "error.log"),
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
        )
        errors.setLevel(logging.ERROR)
        errors.setFormatter(json_formatter)
        handlers.append(errors)

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        handlers=handlers,
        force=True,
    )
