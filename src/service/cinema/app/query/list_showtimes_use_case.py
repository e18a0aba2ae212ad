from datetime import datetime
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import InvalidRequestError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.domain.entity.showtime_entity import Showtime, as_utc


class ListShowtimesUseCase:
    def __init__(self, showtime_query_repo: IShowtimeQueryRepo) -> None:
        self.showtime_query_repo = showtime_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        showtime_query_repo: IShowtimeQueryRepo = Depends(
            Provide[Container.showtime_query_repo]
        ),
    ) -> Self:
        return cls(showtime_query_repo=showtime_query_repo)

    @Logger.io
    async def list_showtimes(
        self,
        *,
        movie_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Showtime]:
        if start is not None and end is not None and as_utc(end) < as_utc(start):
            raise InvalidRequestError('end must not be before start')

        return await self.showtime_query_repo.list_showtimes(
            movie_id=movie_id, start=start, end=end
        )
