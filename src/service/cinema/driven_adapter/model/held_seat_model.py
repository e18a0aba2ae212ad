import uuid

from sqlalchemy import ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.db_setting import Base


class HeldSeatModel(Base):
    """
    Seat ledger row: one per seat currently held by an ACTIVE reservation.
    The composite primary key makes a double hold impossible at the storage layer.
    """

    __tablename__ = 'held_seat'

    showtime_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('showtime.id', ondelete='RESTRICT'), primary_key=True
    )
    seat_number: Mapped[int] = mapped_column(Integer, primary_key=True)
    reservation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey('reservation.id', ondelete='CASCADE'),
        nullable=False,
        index=True,
    )
