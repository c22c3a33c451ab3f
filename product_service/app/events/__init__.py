"""
Events module for the Product Service.

Producers:
    - ProductEventProducer: Publishes product lifecycle events
      (CREATED, UPDATED, DELETED) to the product topic

In-process fan-out:
    - MulticastSink: feeds the productCreated / productUpdated
      GraphQL subscriptions
"""

from .event_producers import ProductEventProducer
from .multicast import MulticastSink

__all__ = [
    "ProductEventProducer",
    "MulticastSink",
]
