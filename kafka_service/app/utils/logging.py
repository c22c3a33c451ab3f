"""
Kafka Service Independent Logging Module
========================================
Structured JSON logging to stdout, plus rotating files outside development.
"""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

_STANDARD_ATTRIBUTES = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


class KafkaServiceJSONFormatter(logging.Formatter):
    """Render each record as one JSON object, merging ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "service": "kafka_service",
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(
            {
                key: value
                for key, value in record.__dict__.items()
                if key not in _STANDARD_ATTRIBUTES
            }
        )
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str, ensure_ascii=False)


def setup_kafka_logging(
    service_name: str = "kafka_service",
    log_level: str = "INFO",
    enable_file_logging: bool = False,
    log_dir: Optional[str] = None,
    max_file_size: int = 50 * 1024 * 1024,
    backup_count: int = 5,
) -> logging.Logger:
    logger = logging.getLogger(service_name)
    level = getattr(logging, log_level.upper())
    logger.setLevel(level)
    logger.handlers.clear()
    logger.propagate = False

    formatter = KafkaServiceJSONFormatter()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if enable_file_logging:
        log_dir_path = Path(log_dir) if log_dir else Path(__file__).parent.parent / "logs"
        log_dir_path.mkdir(exist_ok=True)
        file_handler = RotatingFileHandler(
            log_dir_path / f"{service_name}.log",
            maxBytes=max_file_size,
            backupCount=backup_count,
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
