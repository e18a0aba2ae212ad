from datetime import datetime
from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.domain.entity.showtime_entity import Showtime, as_utc
from src.service.cinema.driven_adapter.model.showtime_model import ShowtimeModel


class ShowtimeQueryRepoImpl(IShowtimeQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, showtime_id: int) -> Optional[Showtime]:
        async with self.session_factory() as session:
            showtime_model = await session.get(ShowtimeModel, showtime_id)
            return self.model_to_entity(showtime_model) if showtime_model else None

    @Logger.io
    async def list_showtimes(
        self,
        *,
        movie_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Showtime]:
        stmt = select(ShowtimeModel).order_by(ShowtimeModel.start_time, ShowtimeModel.id)
        if movie_id is not None:
            stmt = stmt.where(ShowtimeModel.movie_id == movie_id)
        if start is not None:
            stmt = stmt.where(ShowtimeModel.start_time >= as_utc(start))
        if end is not None:
            stmt = stmt.where(ShowtimeModel.start_time <= as_utc(end))

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self.model_to_entity(model) for model in result.scalars().all()]

    @staticmethod
    def model_to_entity(showtime_model: ShowtimeModel) -> Showtime:
        return Showtime(
            id=showtime_model.id,
            movie_id=showtime_model.movie_id,
            start_time=showtime_model.start_time,
            end_time=showtime_model.end_time,
            capacity=showtime_model.capacity,
            created_at=showtime_model.created_at,
        )
