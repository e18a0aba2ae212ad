"""
Unit of Work Pattern - one database transaction shared by several repositories

- UoW owns the session lifecycle: a fresh session per `async with`
- UoW owns commit/rollback; leaving the block without commit rolls back
- Repositories obtained from the UoW share its session
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, AsyncContextManager, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.exception.exceptions import StorageError
from src.platform.logging.loguru_io import Logger


if TYPE_CHECKING:
    from src.service.cinema.app.interface.i_reservation_command_repo import (
        IReservationCommandRepo,
    )
    from src.service.cinema.app.interface.i_showtime_command_repo import IShowtimeCommandRepo


class AbstractUnitOfWork(abc.ABC):
    """
    Usage:
        async with uow_factory() as uow:
            showtime = await uow.showtime_command_repo.get_for_update(showtime_id=...)
            await uow.reservation_command_repo.create(reservation=...)
            await uow.commit()
    """

    showtime_command_repo: IShowtimeCommandRepo
    reservation_command_repo: IReservationCommandRepo

    async def __aenter__(self) -> AbstractUnitOfWork:
        return self

    async def __aexit__(self, *args) -> None:
        await self.rollback()

    async def commit(self) -> None:
        await self._commit()

    @abc.abstractmethod
    async def _commit(self) -> None:
        raise NotImplementedError

    @abc.abstractmethod
    async def rollback(self) -> None:
        raise NotImplementedError


class SqlAlchemyUnitOfWork(AbstractUnitOfWork):
    def __init__(
        self,
        session_factory: Callable[[], AsyncContextManager[AsyncSession]],
        *,
        lock_timeout_seconds: float = 5.0,
    ) -> None:
        self.session_factory = session_factory
        self.lock_timeout_seconds = lock_timeout_seconds
        self._session_cm: Optional[AsyncContextManager[AsyncSession]] = None
        self.session: Optional[AsyncSession] = None

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        from src.service.cinema.driven_adapter.repo.reservation_command_repo_impl import (
            ReservationCommandRepoImpl,
        )
        from src.service.cinema.driven_adapter.repo.showtime_command_repo_impl import (
            ShowtimeCommandRepoImpl,
        )

        self._session_cm = self.session_factory()
        self.session = await self._session_cm.__aenter__()

        self.showtime_command_repo = ShowtimeCommandRepoImpl(
            session=self.session, lock_timeout_seconds=self.lock_timeout_seconds
        )
        self.reservation_command_repo = ReservationCommandRepoImpl(session=self.session)

        await super().__aenter__()
        return self

    async def __aexit__(self, *args) -> None:
        try:
            await super().__aexit__(*args)
        finally:
            if self._session_cm is not None:
                await self._session_cm.__aexit__(*args)
            self._session_cm = None
            self.session = None

    async def _commit(self) -> None:
        assert self.session is not None, 'commit() called outside of `async with`'
        try:
            await self.session.commit()
        except SQLAlchemyError as e:
            Logger.base.error(f'❌ [UOW] Commit failed, rolling back: {e}')
            await self.session.rollback()
            raise StorageError(f'Failed to commit transaction: {type(e).__name__}') from e

    async def rollback(self) -> None:
        if self.session is not None:
            await self.session.rollback()
