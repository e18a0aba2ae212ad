from datetime import datetime
from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_query_repo import IMovieQueryRepo
from src.service.cinema.domain.entity.showtime_entity import Showtime


class CreateShowtimeUseCase:
    def __init__(
        self,
        *,
        movie_query_repo: IMovieQueryRepo,
        uow_factory: Callable[[], AbstractUnitOfWork],
        default_capacity: int = 100,
    ) -> None:
        self.movie_query_repo = movie_query_repo
        self.uow_factory = uow_factory
        self.default_capacity = default_capacity

    @classmethod
    @inject
    def depends(
        cls,
        movie_query_repo: IMovieQueryRepo = Depends(Provide[Container.movie_query_repo]),
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        default_capacity: int = Depends(
            Provide[Container.config_service.provided.DEFAULT_SHOWTIME_CAPACITY]
        ),
    ) -> Self:
        return cls(
            movie_query_repo=movie_query_repo,
            uow_factory=uow_factory,
            default_capacity=default_capacity,
        )

    @Logger.io
    async def create_showtime(
        self,
        *,
        movie_id: int,
        start_time: datetime,
        end_time: datetime,
        capacity: Optional[int] = None,
    ) -> Showtime:
        if await self.movie_query_repo.get_by_id(movie_id=movie_id) is None:
            raise NotFoundError(f'Movie {movie_id} not found')

        showtime = Showtime.create(
            movie_id=movie_id,
            start_time=start_time,
            end_time=end_time,
            capacity=self.default_capacity if capacity is None else capacity,
        )

        async with self.uow_factory() as uow:
            created = await uow.showtime_command_repo.create(showtime=showtime)
            await uow.commit()

        Logger.base.info(
            f'🎞️ [SHOWTIME] Created showtime {created.id} for movie {movie_id} '
            f'(capacity={created.capacity})'
        )
        return created
