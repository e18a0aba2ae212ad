"""
Cancellation Handler

Rules:
- only the owner or an admin may cancel                 -> ForbiddenError
- only ACTIVE reservations                              -> InvalidStateError
- not within the lead time before the showtime start    -> InvalidStateError

The status change and the ledger release commit together under the same
showtime guard the allocator uses, so a released seat is free for the very
next reserve call.
"""

from typing import Callable, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics, result_label
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.cinema.app.interface.i_showtime_guard import IShowtimeGuard
from src.service.cinema.domain.entity.reservation_entity import Reservation


class CancelReservationUseCase:
    def __init__(
        self,
        *,
        reservation_query_repo: IReservationQueryRepo,
        uow_factory: Callable[[], AbstractUnitOfWork],
        showtime_guard: IShowtimeGuard,
        cancellation_lead_time_minutes: int = 120,
    ) -> None:
        self.reservation_query_repo = reservation_query_repo
        self.uow_factory = uow_factory
        self.showtime_guard = showtime_guard
        self.cancellation_lead_time_minutes = cancellation_lead_time_minutes
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        reservation_query_repo: IReservationQueryRepo = Depends(
            Provide[Container.reservation_query_repo]
        ),
        uow_factory: Callable[[], AbstractUnitOfWork] = Depends(
            Provide[Container.unit_of_work.provider]
        ),
        showtime_guard: IShowtimeGuard = Depends(Provide[Container.showtime_guard]),
        cancellation_lead_time_minutes: int = Depends(
            Provide[Container.config_service.provided.CANCELLATION_LEAD_TIME_MINUTES]
        ),
    ) -> Self:
        return cls(
            reservation_query_repo=reservation_query_repo,
            uow_factory=uow_factory,
            showtime_guard=showtime_guard,
            cancellation_lead_time_minutes=cancellation_lead_time_minutes,
        )

    @Logger.io
    async def cancel(
        self, *, reservation_id: UUID, user_id: Optional[int], is_admin: bool = False
    ) -> Reservation:
        with self.tracer.start_as_current_span(
            'use_case.cancel_reservation',
            attributes={'reservation.id': str(reservation_id), 'user.id': user_id or 0},
        ):
            try:
                reservation = await self._cancel(
                    reservation_id=reservation_id, user_id=user_id, is_admin=is_admin
                )
            except CustomBaseError as e:
                metrics.record_cancellation(result=result_label(e))
                raise

            metrics.record_cancellation(result='success')
            return reservation

    async def _cancel(
        self, *, reservation_id: UUID, user_id: Optional[int], is_admin: bool
    ) -> Reservation:
        existing = await self.reservation_query_repo.get_by_id(reservation_id=reservation_id)
        if existing is None:
            raise NotFoundError(f'Reservation {reservation_id} not found')

        if not (is_admin or existing.is_owned_by(user_id)):
            raise ForbiddenError('Only the owner or an admin can cancel this reservation')

        async with self.showtime_guard.hold(existing.showtime_id):
            async with self.uow_factory() as uow:
                showtime = await uow.showtime_command_repo.get_for_update(
                    showtime_id=existing.showtime_id
                )
                # Re-read under the guard: a concurrent cancel may have won
                reservation = await uow.reservation_command_repo.get_by_id(
                    reservation_id=reservation_id
                )
                if showtime is None or reservation is None:
                    raise NotFoundError(f'Reservation {reservation_id} not found')

                cancelled = reservation.cancel()
                showtime.validate_cancellable(
                    lead_time_minutes=self.cancellation_lead_time_minutes
                )

                cancelled = await uow.reservation_command_repo.mark_cancelled_and_release(
                    reservation=cancelled
                )
                held_seats = await uow.reservation_command_repo.get_held_seats(
                    showtime_id=showtime.id or existing.showtime_id
                )
                await uow.commit()

        metrics.set_held_seats(
            showtime_id=existing.showtime_id,
            count=len(held_seats),
            start_time=showtime.start_time,
        )
        Logger.base.info(
            f'↩️ [CANCEL] Reservation {reservation_id} cancelled, '
            f'seats {cancelled.seat_numbers} released'
        )
        return cancelled
