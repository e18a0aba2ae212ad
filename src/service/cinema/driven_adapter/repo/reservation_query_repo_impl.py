from typing import AsyncContextManager, Callable, List, Optional
import uuid

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_reservation_query_repo import IReservationQueryRepo
from src.service.cinema.domain.entity.reservation_entity import Reservation, ReservationStatus
from src.service.cinema.domain.entity.showtime_entity import as_utc
from src.service.cinema.driven_adapter.model.reservation_model import ReservationModel
from src.service.cinema.driven_adapter.model.reservation_seat_model import ReservationSeatModel


class ReservationQueryRepoImpl(IReservationQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def get_by_id(self, *, reservation_id: UUID) -> Optional[Reservation]:
        async with self.session_factory() as session:
            model = await session.get(ReservationModel, uuid.UUID(str(reservation_id)))
            return self.model_to_entity(model) if model else None

    @Logger.io
    async def list_by_user(
        self, *, user_id: int, status: Optional[ReservationStatus] = None
    ) -> List[Reservation]:
        stmt = select(ReservationModel).where(ReservationModel.user_id == user_id)
        return await self._list(stmt, status=status)

    @Logger.io
    async def list_by_showtime(
        self, *, showtime_id: int, status: Optional[ReservationStatus] = None
    ) -> List[Reservation]:
        stmt = select(ReservationModel).where(ReservationModel.showtime_id == showtime_id)
        return await self._list(stmt, status=status)

    @Logger.io
    async def active_reservation_seats(self, *, showtime_id: int) -> List[int]:
        stmt = (
            select(ReservationSeatModel.seat_number)
            .join(ReservationModel, ReservationModel.id == ReservationSeatModel.reservation_id)
            .where(
                ReservationModel.showtime_id == showtime_id,
                ReservationModel.status == ReservationStatus.ACTIVE.value,
            )
            .order_by(ReservationSeatModel.seat_number)
        )

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return list(result.scalars().all())

    async def _list(
        self, stmt: Select, *, status: Optional[ReservationStatus]
    ) -> List[Reservation]:
        if status is not None:
            stmt = stmt.where(ReservationModel.status == status.value)
        # UUID7 ids are time-ordered, so id breaks created_at ties in booking order
        stmt = stmt.order_by(ReservationModel.created_at, ReservationModel.id)

        async with self.session_factory() as session:
            result = await session.execute(stmt)
            return [self.model_to_entity(model) for model in result.scalars().all()]

    @staticmethod
    def model_to_entity(model: ReservationModel) -> Reservation:
        """
        Note:
        - SQLAlchemy returns stdlib uuid.UUID; the domain uses uuid_utils.UUID
        - seats come back ordered by their request position
        """
        return Reservation(
            id=UUID(str(model.id)),
            user_id=model.user_id,
            showtime_id=model.showtime_id,
            seat_numbers=[seat.seat_number for seat in model.seats],
            status=ReservationStatus(model.status),
            created_at=as_utc(model.created_at) if model.created_at else None,
            cancelled_at=as_utc(model.cancelled_at) if model.cancelled_at else None,
        )
