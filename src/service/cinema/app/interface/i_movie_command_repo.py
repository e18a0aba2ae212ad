from abc import ABC, abstractmethod

from src.service.cinema.domain.entity.movie_entity import Movie


class IMovieCommandRepo(ABC):
    @abstractmethod
    async def create(self, *, movie: Movie) -> Movie:
        pass
