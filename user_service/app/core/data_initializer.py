"""
Role and sample-user seeding, run at startup.
"""

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from ..models.user import ERole, Role, User
from ..repository.role_repository import RoleRepository
from ..repository.user_repository import UserRepository
from ..utils.logging import setup_user_logging
from .password_security import PasswordEncoder
from .settings import get_settings

logger = setup_user_logging("user_service.data_initializer", get_settings().LOG_LEVEL)


async def initialize_roles_and_users(
    session: AsyncSession, password_encoder: PasswordEncoder
) -> bool:
    """
    Create the three roles and, when no user exists yet, the sample ``user``
    and ``admin`` accounts. Returns False when roles were already present.
    """
    role_repository = RoleRepository(session)
    user_repository = UserRepository(session)

    if await role_repository.count() > 0:
        logger.info("Roles already initialized, skipping initialization")
        return False

    logger.info("Initializing roles data")
    for name in (ERole.ROLE_USER, ERole.ROLE_MODERATOR, ERole.ROLE_ADMIN):
        await role_repository.save(Role(name=name))
    logger.info("Created roles: USER, MODERATOR, ADMIN")

    if await user_repository.count() == 0:
        logger.info("Creating sample users")

        async def roles(*names: ERole) -> List[Role]:
            found = [await role_repository.find_by_name(name) for name in names]
            return [role for role in found if role is not None]

        await user_repository.save(
            User(
                username="user",
                email="user@example.com",
                password_hash=password_encoder.encode("password"),
                first_name="Regular",
                last_name="User",
                enabled=True,
                roles=await roles(ERole.ROLE_USER),
            )
        )
        await user_repository.save(
            User(
                username="admin",
                email="admin@example.com",
                password_hash=password_encoder.encode("admin"),
                first_name="Admin",
                last_name="User",
                enabled=True,
                roles=await roles(
                    ERole.ROLE_USER, ERole.ROLE_MODERATOR, ERole.ROLE_ADMIN
                ),
            )
        )
        logger.info("Created sample users: 'user' and 'admin'")

    return True
