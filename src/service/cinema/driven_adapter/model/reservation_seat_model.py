import uuid

from sqlalchemy import ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class ReservationSeatModel(Base):
    """Seat history of a reservation; kept after cancellation"""

    __tablename__ = 'reservation_seat'

    reservation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey('reservation.id', ondelete='CASCADE'), primary_key=True
    )
    seat_number: Mapped[int] = mapped_column(Integer, primary_key=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)  # request order
