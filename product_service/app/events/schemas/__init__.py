"""
Product Service Event Schemas
=============================

Wire schemas for events published on the product topic.
"""

from .event_schemas import (
    PRODUCT_CREATED,
    PRODUCT_DELETED,
    PRODUCT_UPDATED,
    ProductEvent,
)

__all__ = [
    "ProductEvent",
    "PRODUCT_CREATED",
    "PRODUCT_UPDATED",
    "PRODUCT_DELETED",
]
