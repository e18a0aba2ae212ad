from abc import ABC, abstractmethod
from typing import Optional, Set

from uuid_utils import UUID

from src.service.cinema.domain.entity.reservation_entity import Reservation


class IReservationCommandRepo(ABC):
    """
    Reservation writes and the seat ledger, bound to the unit of work session

    Ledger rows change only together with their reservation, inside one
    transaction, so the ledger always equals the union of ACTIVE seat sets.
    """

    @abstractmethod
    async def get_held_seats(self, *, showtime_id: int) -> Set[int]:
        pass

    @abstractmethod
    async def create(self, *, reservation: Reservation) -> Reservation:
        """Insert the reservation, its seat history and its ledger rows."""
        pass

    @abstractmethod
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        pass

    @abstractmethod
    async def mark_cancelled_and_release(self, *, reservation: Reservation) -> Reservation:
        """Persist the CANCELLED status and delete the reservation's ledger rows."""
        pass
