from .base import UserServiceBase, UserServiceBaseModel
from .user import ERole, Role, User, user_roles

__all__ = [
    "ERole",
    "Role",
    "User",
    "UserServiceBase",
    "UserServiceBaseModel",
    "user_roles",
]
