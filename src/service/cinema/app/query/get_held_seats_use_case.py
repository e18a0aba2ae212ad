from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_showtime_guard import IShowtimeGuard
from src.service.cinema.domain.seat_ledger import SeatLedger


class GetHeldSeatsUseCase:
    """Seat-map read; goes through the showtime guard so it never sees a half-applied write"""

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        showtime_guard: IShowtimeGuard,
    ) -> None:
        self.uow_factory = uow_factory
        self.showtime_guard = showtime_guard

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        showtime_guard: IShowtimeGuard = Depends(Provide[Container.showtime_guard]),
    ) -> Self:
        return cls(uow_factory=uow_factory, showtime_guard=showtime_guard)

    @Logger.io
    async def get_ledger(self, *, showtime_id: int) -> SeatLedger:
        async with self.showtime_guard.hold(showtime_id):
            async with self.uow_factory() as uow:
                showtime = await uow.showtime_command_repo.get_for_update(showtime_id=showtime_id)
                if showtime is None:
                    raise NotFoundError(f'Showtime {showtime_id} not found')

                held_seats = await uow.reservation_command_repo.get_held_seats(
                    showtime_id=showtime_id
                )

        return SeatLedger(
            showtime_id=showtime_id, capacity=showtime.capacity, held_seats=held_seats
        )
