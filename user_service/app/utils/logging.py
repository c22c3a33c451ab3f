"""
User Service Independent Logging Module
====================================
Self-contained logging setup for User Service.
"""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_BUILTIN_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "taskName"}


class UserJSONFormatter(logging.Formatter):
    """Custom JSON formatter for User Service structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "service": "user_service",
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key, value in vars(record).items():
            if key not in _BUILTIN_FIELDS:
                log_entry[key] = value
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str)


def setup_user_logging(
    service_name: str = "user_service",
    log_level: str = "INFO",
    enable_file_logging: bool = False,
    log_dir: Optional[str] = None,
) -> logging.Logger:
    logger = logging.getLogger(service_name)
    logger.setLevel(log_level.upper())
    logger.handlers.clear()
    logger.propagate = False

    handler: logging.Handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(UserJSONFormatter())
    logger.addHandler(handler)

    if enable_file_logging:
        log_path = Path(log_dir) if log_dir else Path(__file__).parent.parent / "logs"
        log_path.mkdir(exist_ok=True)
        handler = RotatingFileHandler(
            log_path / f"{service_name}.log", maxBytes=100 * 1024 * 1024, backupCount=5
        )
        handler.setFormatter(UserJSONFormatter())
        logger.addHandler(handler)

    return logger
