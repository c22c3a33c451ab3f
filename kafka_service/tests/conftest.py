"""
Pytest configuration and fixtures for kafka service tests.
"""

import os
from typing import Any, Optional

import pytest

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("KAFKA_ENABLED", "false")
os.environ.setdefault("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092")

from aiokafka.structs import ConsumerRecord  # noqa: E402


def make_record(
    value: Optional[bytes],
    key: Optional[str] = "1",
    topic: str = "product-events",
    partition: int = 0,
    offset: int = 0,
    headers: Any = (),
) -> ConsumerRecord:
    return ConsumerRecord(
        topic=topic,
        partition=partition,
        offset=offset,
        timestamp=0,
        timestamp_type=0,
        key=key,
        value=value,
        checksum=None,
        serialized_key_size=len(key or ""),
        serialized_value_size=len(value or b""),
        headers=tuple(headers),
    )


@pytest.fixture
def record_factory():
    return make_record
