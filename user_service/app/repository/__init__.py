from .role_repository import RoleRepository
from .user_repository import UserRepository

__all__ = ["RoleRepository", "UserRepository"]
