from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.cinema.domain.entity.showtime_entity import Showtime


class IShowtimeQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, showtime_id: int) -> Optional[Showtime]:
        pass

    @abstractmethod
    async def list_showtimes(
        self,
        *,
        movie_id: Optional[int] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[Showtime]:
        """Showtimes ordered by start_time; `start`/`end` bound start_time inclusively."""
        pass
