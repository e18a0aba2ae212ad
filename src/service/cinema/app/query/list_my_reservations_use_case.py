from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.cinema.domain.entity.reservation_entity import Reservation, ReservationStatus


class ListMyReservationsUseCase:
    def __init__(self, reservation_query_repo: IReservationQueryRepo) -> None:
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(reservation_query_repo=reservation_query_repo)

    @Logger.io
    async def list_by_user(
        self, *, user_id: int, status: Optional[ReservationStatus] = None
    ) -> List[Reservation]:
        return await self.reservation_query_repo.list_by_user(user_id=user_id, status=status)
