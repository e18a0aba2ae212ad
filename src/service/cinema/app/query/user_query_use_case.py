"""
User Management Use Cases (Use Case Layer)
"""

from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, ForbiddenError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_password_hasher import IPasswordHasher
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole


class UserUseCase:
    def __init__(
        self,
        *,
        user_command_repo: IUserCommandRepo,
        user_query_repo: IUserQueryRepo,
        password_hasher: IPasswordHasher,
    ) -> None:
        self.user_command_repo = user_command_repo
        self.user_query_repo = user_query_repo
        self.password_hasher = password_hasher

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
        user_query_repo: IUserQueryRepo = Depends(Provide[Container.user_query_repo]),
        password_hasher: IPasswordHasher = Depends(Provide[Container.password_hasher]),
    ) -> Self:
        return cls(
            user_command_repo=user_command_repo,
            user_query_repo=user_query_repo,
            password_hasher=password_hasher,
        )

    async def create_user(
        self,
        *,
        email: str,
        password: str,
        name: str,
        role: UserRole = UserRole.USER,
        created_by: Optional[UserEntity] = None,
    ) -> UserEntity:
        """Public sign-up creates plain users; only an admin may create another admin."""
        UserEntity.validate_role(role)
        if UserRole(role) == UserRole.ADMIN and not (created_by and created_by.is_admin):
            raise ForbiddenError('Only admins can create admin accounts')

        return await self._create(email=email, password=password, name=name, role=UserRole(role))

    @Logger.io
    async def ensure_seed_admin(self, *, email: str, password: str, name: str) -> UserEntity:
        """Bootstrap the first admin from configuration; a no-op once the email exists."""
        existing = await self.user_query_repo.get_by_email(email)
        if existing is not None:
            return existing

        Logger.base.info(f'👑 [USER] Creating seed admin {email}')
        return await self._create(email=email, password=password, name=name, role=UserRole.ADMIN)

    async def _create(self, *, email: str, password: str, name: str, role: UserRole) -> UserEntity:
        if await self.user_query_repo.exists_by_email(email):
            raise ConflictError(f'User with email {email} already exists')

        user_entity = UserEntity(email=email, name=name, role=UserRole(role), is_active=True)
        user_entity.set_password(password, self.password_hasher)
        return await self.user_command_repo.create(user_entity)

    async def get_user_by_id(self, user_id: int) -> UserEntity | None:
        return await self.user_query_repo.get_by_id(user_id)
