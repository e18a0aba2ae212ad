from fastapi import Depends
from opentelemetry import trace

from src.platform.exception.exceptions import ForbiddenError
from src.service.cinema.domain.entity.user_entity import UserEntity, UserRole
from src.service.cinema.driving_adapter.http_controller.user_controller import (
    get_current_user as get_user_from_controller,
)


class RoleAuthStrategy:
    @staticmethod
    def is_admin(user: UserEntity) -> bool:
        return user.role == UserRole.ADMIN

    @staticmethod
    def can_manage_catalog(user: UserEntity) -> bool:
        return RoleAuthStrategy.is_admin(user)


async def require_user(current_user: UserEntity = Depends(get_user_from_controller)) -> UserEntity:
    return current_user


async def require_admin(
    current_user: UserEntity = Depends(get_user_from_controller),
) -> UserEntity:
    tracer = trace.get_tracer(__name__)
    with tracer.start_as_current_span(
        'auth.require_admin',
        attributes={
            'user.id': current_user.id or 0,
            'user.role': current_user.role.value,
        },
    ):
        if not RoleAuthStrategy.can_manage_catalog(current_user):
            raise ForbiddenError('Only admins can perform this action')
        return current_user
