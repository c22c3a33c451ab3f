import enum
from typing import List, Optional

from sqlalchemy import Boolean, Column, Enum, ForeignKey, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import UserServiceBase, UserServiceBaseModel


class ERole(str, enum.Enum):
    ROLE_USER = "ROLE_USER"
    ROLE_MODERATOR = "ROLE_MODERATOR"
    ROLE_ADMIN = "ROLE_ADMIN"


user_roles = Table(
    "user_roles",
    UserServiceBase.metadata,
    Column("user_id", ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)


class Role(UserServiceBaseModel):
    __tablename__ = "roles"

    name: Mapped[ERole] = mapped_column(
        Enum(ERole, native_enum=False, length=20), unique=True, nullable=False
    )


class User(UserServiceBaseModel):
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    roles: Mapped[List[Role]] = relationship(
        Role, secondary=user_roles, lazy="selectin"
    )

    @property
    def role_names(self) -> List[str]:
        return [role.name.value for role in self.roles]
