from typing import Optional, Set
import uuid

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.database.storage_errors import raise_storage_error
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_reservation_command_repo import IReservationCommandRepo
from src.service.cinema.domain.entity.reservation_entity import Reservation
from src.service.cinema.driven_adapter.model.held_seat_model import HeldSeatModel
from src.service.cinema.driven_adapter.model.reservation_model import ReservationModel
from src.service.cinema.driven_adapter.model.reservation_seat_model import ReservationSeatModel
from src.service.cinema.driven_adapter.repo.reservation_query_repo_impl import (
    ReservationQueryRepoImpl,
)


class ReservationCommandRepoImpl(IReservationCommandRepo):
    """Session is owned by the unit of work; nothing here commits."""

    def __init__(self, *, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_held_seats(self, *, showtime_id: int) -> Set[int]:
        with raise_storage_error('load held seats'):
            result = await self.session.execute(
                select(HeldSeatModel.seat_number).where(HeldSeatModel.showtime_id == showtime_id)
            )
            return set(result.scalars().all())

    @Logger.io
    async def create(self, *, reservation: Reservation) -> Reservation:
        reservation_id = uuid.UUID(str(reservation.id))
        reservation_model = ReservationModel(
            id=reservation_id,
            user_id=reservation.user_id,
            showtime_id=reservation.showtime_id,
            status=reservation.status.value,
            seats=[
                ReservationSeatModel(seat_number=seat_number, position=position)
                for position, seat_number in enumerate(reservation.seat_numbers)
            ],
        )
        if reservation.created_at is not None:
            reservation_model.created_at = reservation.created_at

        with raise_storage_error('insert reservation'):
            self.session.add(reservation_model)
            await self.session.flush()

            # Ledger rows reference the reservation, so they go in after it
            self.session.add_all(
                [
                    HeldSeatModel(
                        showtime_id=reservation.showtime_id,
                        seat_number=seat_number,
                        reservation_id=reservation_id,
                    )
                    for seat_number in reservation.seat_numbers
                ]
            )
            await self.session.flush()

        return reservation

    @Logger.io
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        with raise_storage_error('load reservation'):
            model = await self.session.get(ReservationModel, uuid.UUID(str(reservation_id)))
        return ReservationQueryRepoImpl.model_to_entity(model) if model else None

    @Logger.io
    async def mark_cancelled_and_release(self, *, reservation: Reservation) -> Reservation:
        reservation_id = uuid.UUID(str(reservation.id))

        with raise_storage_error('cancel reservation'):
            await self.session.execute(
                update(ReservationModel)
                .where(ReservationModel.id == reservation_id)
                .values(status=reservation.status.value, cancelled_at=reservation.cancelled_at)
            )
            await self.session.execute(
                delete(HeldSeatModel).where(HeldSeatModel.reservation_id == reservation_id)
            )

        return reservation
