from typing import AsyncContextManager, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.database.storage_errors import raise_storage_error
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_command_repo import IMovieCommandRepo
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.repo.movie_query_repo_impl import MovieQueryRepoImpl


class MovieCommandRepoImpl(IMovieCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def create(self, *, movie: Movie) -> Movie:
        async with self.session_factory() as session:
            movie_model = MovieModel(
                title=movie.title,
                description=movie.description,
                poster_image_url=movie.poster_image_url,
                genre=movie.genre,
            )
            if movie.created_at is not None:
                movie_model.created_at = movie.created_at

            session.add(movie_model)
            with raise_storage_error('create movie'):
                await session.commit()
                await session.refresh(movie_model)

            return MovieQueryRepoImpl.model_to_entity(movie_model)
