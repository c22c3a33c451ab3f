"""
Maps exceptions raised by resolvers to typed GraphQL errors.

Every error leaving the API carries ``extensions.classification``; unknown
exceptions are reported with a generic message so internals do not leak.
"""

from typing import Iterator, List

from graphql import GraphQLError
from pydantic import ValidationError
from strawberry.extensions import SchemaExtension

from ..core.exceptions import ResourceNotFoundError
from ..core.setting import get_settings
from ..utils.logging import setup_product_logging as setup_logging

logger = setup_logging("product_service.graphql.errors", get_settings().LOG_LEVEL)

NOT_FOUND = "NOT_FOUND"
FORBIDDEN = "FORBIDDEN"
BAD_REQUEST = "BAD_REQUEST"
INTERNAL_ERROR = "INTERNAL_ERROR"


def _validation_message(exc: ValidationError) -> str:
    return "; ".join(
        f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}"
        for error in exc.errors()
    )


def classify_error(error: GraphQLError) -> GraphQLError:
    """Return a copy of error whose extensions name its classification."""
    if error.extensions and "classification" in error.extensions:
        return error

    original = error.original_error
    if original is None:
        # Parse and schema validation errors raised by graphql-core itself
        classification, message = BAD_REQUEST, error.message
    elif isinstance(original, ResourceNotFoundError):
        classification, message = NOT_FOUND, original.message
    elif isinstance(original, ValidationError):
        classification, message = BAD_REQUEST, _validation_message(original)
    elif isinstance(original, ValueError):
        classification, message = BAD_REQUEST, str(original)
    elif isinstance(original, PermissionError):
        classification, message = FORBIDDEN, str(original) or "Access denied"
    else:
        logger.error(
            "Unhandled error while resolving GraphQL field",
            extra={
                "path": error.path,
                "exception_type": type(original).__name__,
            },
            exc_info=original,
        )
        classification, message = INTERNAL_ERROR, "Internal server error"

    return GraphQLError(
        message,
        nodes=error.nodes,
        source=error.source,
        positions=error.positions,
        path=error.path,
        original_error=original,
        extensions={**(error.extensions or {}), "classification": classification},
    )


class ErrorClassificationExtension(SchemaExtension):
    def on_operation(self) -> Iterator[None]:
        yield
        result = self.execution_context.result
        if result and result.errors:
            errors: List[GraphQLError] = [classify_error(e) for e in result.errors]
            result.errors = errors
