from .error_handler import (
    DeadLetterPublishingRecoverer,
    DefaultErrorHandler,
    ExponentialBackOff,
    NonRetryableError,
)
from .product_event_listener import ProductEventListener

__all__ = [
    "DeadLetterPublishingRecoverer",
    "DefaultErrorHandler",
    "ExponentialBackOff",
    "NonRetryableError",
    "ProductEventListener",
]
