"""Domain exceptions raised by the Product Service layer."""


class ResourceNotFoundError(Exception):
    """Raised when a requested catalog record does not exist."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
