from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_command_repo import IMovieCommandRepo
from src.service.cinema.domain.entity.movie_entity import Movie


class CreateMovieUseCase:
    def __init__(self, *, movie_command_repo: IMovieCommandRepo) -> None:
        self.movie_command_repo = movie_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        movie_command_repo: IMovieCommandRepo = Depends(Provide[Container.movie_command_repo]),
    ) -> Self:
        return cls(movie_command_repo=movie_command_repo)

    @Logger.io
    async def create_movie(
        self,
        *,
        title: str,
        genre: str,
        description: Optional[str] = None,
        poster_image_url: Optional[str] = None,
    ) -> Movie:
        movie = Movie.create(
            title=title,
            genre=genre,
            description=description,
            poster_image_url=poster_image_url,
        )
        created = await self.movie_command_repo.create(movie=movie)
        Logger.base.info(f'🎬 [MOVIE] Created movie {created.id} "{created.title}"')
        return created
