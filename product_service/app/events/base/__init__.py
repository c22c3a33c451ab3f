"""
Product Service event publishing base classes and interfaces.
"""

from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class EventPublisher(ABC):
    """Abstract base class for event publishers"""

    @abstractmethod
    async def publish(
        self, event: BaseModel, topic: str, key: Optional[str] = None
    ) -> bool:
        """Publish an event; False when it was only logged"""
        pass
