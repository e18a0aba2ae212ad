from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.domain.entity.movie_entity import Movie


class IMovieQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, movie_id: int) -> Optional[Movie]:
        pass

    @abstractmethod
    async def list_movies(self, *, genre: Optional[str] = None) -> List[Movie]:
        pass
