"""Event records pushed to dashboard clients."""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class EventType(str, Enum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"


def parse_event_type(value: str) -> EventType:
    """Map a raw ``eventType`` value to EventType; unknown values read as CREATED."""
    try:
        return EventType(value)
    except ValueError:
        return EventType.CREATED


class KafkaEvent(BaseModel):
    """One consumed Kafka record as shown on the dashboard"""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    topic: str
    partition: int
    offset: int
    key: Optional[str] = None
    value: str
    timestamp: datetime = Field(default_factory=datetime.now)
    type: EventType
