from abc import ABC, abstractmethod
from typing import List, Optional

from uuid_utils import UUID

from src.service.cinema.domain.entity.reservation_entity import Reservation, ReservationStatus


class IReservationQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def list_by_user(
        self, *, user_id: int, status: Optional[ReservationStatus] = None
    ) -> List[Reservation]:
        pass

    @abstractmethod
    async def list_by_showtime(
        self, *, showtime_id: int, status: Optional[ReservationStatus] = None
    ) -> List[Reservation]:
        pass

    @abstractmethod
    async def active_reservation_seats(self, *, showtime_id: int) -> List[int]:
        """Every seat of every ACTIVE reservation; a seat sold twice appears twice."""
        pass
