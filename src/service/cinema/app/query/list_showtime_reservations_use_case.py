from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.cinema.app.interface.i_showtime_query_repo import IShowtimeQueryRepo
from src.service.cinema.domain.entity.reservation_entity import Reservation, ReservationStatus


class ListShowtimeReservationsUseCase:
    """Raw reservation records of one showtime (admin)"""

    def __init__(
        self,
        *,
        showtime_query_repo: IShowtimeQueryRepo,
        reservation_query_repo: IReservationQueryRepo,
    ) -> None:
        self.showtime_query_repo = showtime_query_repo
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        showtime_query_repo: IShowtimeQueryRepo = Depends(
            Provide[Container.showtime_query_repo]
        ),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(
            showtime_query_repo=showtime_query_repo,
            reservation_query_repo=reservation_query_repo,
        )

    @Logger.io
    async def list_by_showtime(
        self, *, showtime_id: int, status: Optional[ReservationStatus] = None
    ) -> List[Reservation]:
        if await self.showtime_query_repo.get_by_id(showtime_id=showtime_id) is None:
            raise NotFoundError(f'Showtime {showtime_id} not found')

        return await self.reservation_query_repo.list_by_showtime(
            showtime_id=showtime_id, status=status
        )
