from typing import List, Optional

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_movie_use_case import CreateMovieUseCase
from src.service.cinema.app.query.get_movie_use_case import GetMovieUseCase
from src.service.cinema.app.query.list_movies_use_case import ListMoviesUseCase
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.movie_schema import (
    MovieCreateRequest,
    MovieResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_movie(
    request: MovieCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateMovieUseCase = Depends(CreateMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.create_movie(
        title=request.title,
        genre=request.genre,
        description=request.description,
        poster_image_url=request.poster_image_url,
    )
    return MovieResponse.model_validate(movie)


@router.get('')
@Logger.io
async def list_movies(
    genre: Optional[str] = None,
    use_case: ListMoviesUseCase = Depends(ListMoviesUseCase.depends),
) -> List[MovieResponse]:
    movies = await use_case.list_movies(genre=genre)
    return [MovieResponse.model_validate(movie) for movie in movies]


@router.get('/{movie_id}')
@Logger.io
async def get_movie(
    movie_id: int,
    use_case: GetMovieUseCase = Depends(GetMovieUseCase.depends),
) -> MovieResponse:
    movie = await use_case.get_by_id(movie_id=movie_id)
    return MovieResponse.model_validate(movie)
