from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_movie_query_repo import IMovieQueryRepo
from src.service.cinema.domain.entity.movie_entity import Movie
from src.service.cinema.driven_adapter.model.movie_model import MovieModel


class MovieQueryRepoImpl(IMovieQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, movie_id: int) -> Optional[Movie]:
        async with self.session_factory() as session:
            movie_model = await session.get(MovieModel, movie_id)
            return self.model_to_entity(movie_model) if movie_model else None

    @Logger.io
    async def list_movies(self, *, genre: Optional[str] = None) -> List[Movie]:
        stmt = select(MovieModel).order_by(MovieModel.id)
        if genre:
            stmt = stmt.where(MovieModel.genre == genre)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self.model_to_entity(model) for model in result.scalars().all()]

    @staticmethod
    def model_to_entity(movie_model: MovieModel) -> Movie:
        return Movie(
            id=movie_model.id,
            title=movie_model.title,
            description=movie_model.description,
            poster_image_url=movie_model.poster_image_url,
            genre=movie_model.genre,
            created_at=movie_model.created_at,
        )
