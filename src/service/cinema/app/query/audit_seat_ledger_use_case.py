from typing import Callable, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.cinema.app.interface.i_showtime_guard import IShowtimeGuard
from src.service.cinema.domain.seat_ledger import LedgerAudit, SeatLedger


class AuditSeatLedgerUseCase:
    """Checks the held-seat ledger against reservation history (admin)"""

    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        showtime_guard: IShowtimeGuard,
        reservation_query_repo: IReservationQueryRepo,
    ) -> None:
        self.uow_factory = uow_factory
        self.showtime_guard = showtime_guard
        self.reservation_query_repo = reservation_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        showtime_guard: IShowtimeGuard = Depends(Provide[Container.showtime_guard]),
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
    ) -> Self:
        return cls(
            uow_factory=uow_factory,
            showtime_guard=showtime_guard,
            reservation_query_repo=reservation_query_repo,
        )

    @Logger.io
    async def audit(self, *, showtime_id: int) -> LedgerAudit:
        # Both reads happen under the guard so no reservation lands between them
        async with self.showtime_guard.hold(showtime_id):
            async with self.uow_factory() as uow:
                showtime = await uow.showtime_command_repo.get_for_update(showtime_id=showtime_id)
                if showtime is None:
                    raise NotFoundError(f'Showtime {showtime_id} not found')

                held_seats = await uow.reservation_command_repo.get_held_seats(
                    showtime_id=showtime_id
                )

            active_seats = await self.reservation_query_repo.active_reservation_seats(
                showtime_id=showtime_id
            )

        audit = SeatLedger(
            showtime_id=showtime_id, capacity=showtime.capacity, held_seats=held_seats
        ).audit(active_seats)
        if not audit.consistent:
            Logger.base.error(
                f'🚨 [AUDIT] Showtime {showtime_id} ledger drift: '
                f'double_booked={sorted(audit.double_booked)} '
                f'missing={audit.missing_from_ledger} orphaned={audit.orphaned_in_ledger}'
            )
        return audit
