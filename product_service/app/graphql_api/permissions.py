from typing import Any

from strawberry.permission import BasePermission
from strawberry.types import Info


class IsAdmin(BasePermission):
    """Mutations are reserved to callers holding the admin role"""

    message = "Access denied: ADMIN role required"
    error_extensions = {"classification": "FORBIDDEN"}

    def has_permission(self, source: Any, info: Info, **kwargs: Any) -> bool:
        return info.context.is_admin
