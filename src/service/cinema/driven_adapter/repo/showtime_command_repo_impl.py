from typing import Optional

from sqlalchemy import select, text
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_errors import raise_storage_error
from src.platform.exception.exceptions import BusyError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_command_repo import IShowtimeCommandRepo
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel
from src.service.cinema.driven_adapter.repo.showtime_query_repo_impl import ShowtimeQueryRepoImpl


LOCK_NOT_AVAILABLE = '55P03'  # PostgreSQL SQLSTATE raised when lock_timeout expires


class ShowtimeCommandRepoImpl(IShowtimeCommandRepo):
    def __init__(self, *, session: AsyncSession, lock_timeout_seconds: float = 5.0) -> None:
        self.session = session
        self.lock_timeout_seconds = lock_timeout_seconds

    @property
    def _is_postgresql(self) -> bool:
        bind = self.session.bind
        return bind is not None and bind.dialect.name == 'postgresql'

    @Logger.io
    async def create(self, *, showtime: Showtime) -> Showtime:
        showtime_model = ShowtimeModel(
            movie_id=showtime.movie_id,
            start_time=showtime.start_time,
            end_time=showtime.end_time,
            capacity=showtime.capacity,
        )
        self.session.add(showtime_model)
        with raise_storage_error('create showtime'):
            await self.session.flush()
            await self.session.refresh(showtime_model)

        return ShowtimeQueryRepoImpl.model_to_entity(showtime_model)

    @Logger.io
    async def get_for_update(self, *, showtime_id: int) -> Optional[Showtime]:
        stmt = select(ShowtimeModel).where(ShowtimeModel.id == showtime_id)

        with raise_storage_error('load showtime'):
            if self._is_postgresql:
                # Row lock on the showtime serializes writers across processes too
                lock_timeout_ms = int(self.lock_timeout_seconds * 1000)
                await self.session.execute(text(f"SET LOCAL lock_timeout = '{lock_timeout_ms}ms'"))
                stmt = stmt.with_for_update()

            try:
                result = await self.session.execute(stmt)
            except DBAPIError as e:
                if getattr(e.orig, 'pgcode', None) == LOCK_NOT_AVAILABLE or (
                    'lock timeout' in str(e.orig).lower()
                ):
                    Logger.base.warning(f'⏳ [SHOWTIME] Row lock timeout for showtime {showtime_id}')
                    raise BusyError(f'Showtime {showtime_id} is busy, please retry') from e
                raise

        showtime_model = result.scalar_one_or_none()
        return ShowtimeQueryRepoImpl.model_to_entity(showtime_model) if showtime_model else None
