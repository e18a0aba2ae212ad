"""
Reservation Allocator

All checks that read the seat ledger and the commit that changes it run as
one unit inside the showtime guard and one transaction, so no second caller
can see the requested seats as free between validation and commit.

Validation order:
1. request shape (non-empty, positive, no duplicates)   -> InvalidRequestError
2. showtime exists                                       -> NotFoundError
3. seats within 1..capacity                              -> InvalidRequestError
4. showtime has not started                              -> InvalidStateError
5. no requested seat already held                        -> SeatConflictError
6. held + requested fits the capacity                    -> InvalidStateError
"""

import time
from typing import Callable, List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
from uuid_utils import UUID, uuid7

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork
from src.platform.exception.exceptions import CustomBaseError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import metrics, result_label
from src.service.cinema.app.interface.i_showtime_guard import IShowtimeGuard
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.domain.seat_ledger import SeatLedger


class ReserveSeatsUseCase:
    def __init__(
        self,
        *,
        uow_factory: Callable[[], AbstractUnitOfWork],
        showtime_guard: IShowtimeGuard,
    ) -> None:
        self.uow_factory = uow_factory
        self.showtime_guard = showtime_guard
        self.tracer = trace.get_tracer(__name__)

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
    async def reserve(
        self, *, showtime_id: int, user_id: int, seat_numbers: List[int]
    ) -> Reservation:
        with self.tracer.start_as_current_span(
            'use_case.reserve_seats',
            attributes={
                'showtime.id': showtime_id,
                'user.id': user_id,
                'seat.count': len(seat_numbers),
            },
        ) as span:
            start = time.perf_counter()
            try:
                reservation = await self._reserve(
                    showtime_id=showtime_id, user_id=user_id, seat_numbers=seat_numbers
                )
            except CustomBaseError as e:
                span.set_attribute('reservation.result', result_label(e))
                metrics.record_reservation(result=result_label(e))
                raise
            finally:
                metrics.reservation_duration.observe(time.perf_counter() - start)

            span.set_attribute('reservation.id', str(reservation.id))
            metrics.record_reservation(result='success', seats=len(reservation.seat_numbers))
            return reservation

    async def _reserve(
        self, *, showtime_id: int, user_id: int, seat_numbers: List[int]
    ) -> Reservation:
        Reservation.validate_seat_numbers(seat_numbers)

        async with self.showtime_guard.hold(showtime_id):
            async with self.uow_factory() as uow:
                showtime = await uow.showtime_command_repo.get_for_update(showtime_id=showtime_id)
                if showtime is None:
                    raise NotFoundError(f'Showtime {showtime_id} not found')

                showtime.validate_seat_range(seat_numbers)
                showtime.validate_bookable()

                ledger = SeatLedger(
                    showtime_id=showtime_id,
                    capacity=showtime.capacity,
                    held_seats=await uow.reservation_command_repo.get_held_seats(
                        showtime_id=showtime_id
                    ),
                )
                ledger = ledger.allocate(seat_numbers)

                reservation = Reservation.create(
                    id=UUID(str(uuid7())),
                    user_id=user_id,
                    showtime_id=showtime_id,
                    seat_numbers=seat_numbers,
                )
                reservation = await uow.reservation_command_repo.create(reservation=reservation)
                await uow.commit()

        metrics.set_held_seats(
            showtime_id=showtime_id,
            count=len(ledger.held_seats),
            start_time=showtime.start_time,
        )
        Logger.base.info(
            f'🎟️ [RESERVE] Reservation {reservation.id} holds seats {reservation.seat_numbers} '
            f'for showtime {showtime_id} ({ledger.available_count} left)'
        )
        return reservation
