from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.cinema.domain.entity.reservation_entity import Reservation


class GetReservationUseCase:
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
    async def get_by_id(
        self, *, reservation_id: UUID, user_id: Optional[int], is_admin: bool = False
    ) -> Reservation:
        reservation = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if reservation is None:
            raise NotFoundError(f'Reservation {reservation_id} not found')

        if not (is_admin or reservation.is_owned_by(user_id)):
            raise ForbiddenError('You can only view your own reservations')

        return reservation
