from abc import ABC, abstractmethod
from typing import Optional

from src.service.cinema.domain.entity.showtime_entity import Showtime


class IShowtimeCommandRepo(ABC):
    """Showtime writes, bound to the unit of work session"""

    @abstractmethod
    async def create(self, *, showtime: Showtime) -> Showtime:
        pass

    @abstractmethod
    async def get_for_update(self, *, showtime_id: int) -> Optional[Showtime]:
        """
        Load the showtime as the locked resource of the current transaction.

        On PostgreSQL this is `SELECT ... FOR UPDATE` with a lock timeout;
        a timeout raises BusyError.
        """
        pass
