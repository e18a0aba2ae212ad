from typing import AsyncContextManager, Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_errors import raise_storage_error
from src.platform.exception.exceptions import ConflictError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl
from src.service.cinema.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            user_model = UserModel(
                email=user_entity.email,
                hashed_password=user_entity.hashed_password,
                name=user_entity.name,
                role=user_entity.role.value,
                is_active=user_entity.is_active,
            )
            session.add(user_model)

            with raise_storage_error('create user'):
                try:
                    await session.commit()
                except IntegrityError as e:
                    # unique index on email
                    await session.rollback()
                    raise ConflictError(
                        f'User with email {user_entity.email} already exists'
                    ) from e
                await session.refresh(user_model)

            return UserQueryRepoImpl.model_to_entity(user_model)
