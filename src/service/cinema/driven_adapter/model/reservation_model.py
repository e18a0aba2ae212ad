import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import DateTime, ForeignKey, Integer, String, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.platform.database.db_setting import Base
from src.service.cinema.driven_adapter.model.reservation_seat_model import ReservationSeatModel


class ReservationModel(Base):
    __tablename__ = 'reservation'

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)  # UUID7
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('user.id', ondelete='RESTRICT'), nullable=False, index=True
    )
    showtime_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('showtime.id', ondelete='RESTRICT'), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(20), default='active', nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    cancelled_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    seats: Mapped[List[ReservationSeatModel]] = relationship(
        ReservationSeatModel,
        order_by=ReservationSeatModel.position,
        cascade='all, delete-orphan',
        lazy='selectin',
    )
