from datetime import datetime, timezone
from enum import StrEnum
from typing import List, Optional, Sequence

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import InvalidRequestError, InvalidStateError
from src.platform.logging.loguru_io import Logger


class ReservationStatus(StrEnum):
    ACTIVE = 'active'
    CANCELLED = 'cancelled'


@attrs.define
class Reservation:
    id: UUID
    user_id: int
    showtime_id: int
    seat_numbers: List[int] = attrs.field(factory=list)
    status: ReservationStatus = ReservationStatus.ACTIVE
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None

    @staticmethod
    def validate_seat_numbers(seat_numbers: Sequence[int]) -> None:
        """
        Shape checks that need no showtime: non-empty, positive, no duplicates.
        The upper bound depends on the showtime capacity (see Showtime.validate_seat_range).
        """
        if not seat_numbers:
            raise InvalidRequestError('At least one seat number is required')

        non_positive = sorted(seat for seat in seat_numbers if seat < 1)
        if non_positive:
            raise InvalidRequestError(
                f'Seat numbers must be positive, got: {", ".join(map(str, non_positive))}'
            )

        if len(set(seat_numbers)) != len(seat_numbers):
            duplicates = sorted({seat for seat in seat_numbers if seat_numbers.count(seat) > 1})
            raise InvalidRequestError(
                f'Duplicate seat numbers in request: {", ".join(map(str, duplicates))}'
            )

    @classmethod
    @Logger.io
    def create(
        cls, *, id: UUID, user_id: int, showtime_id: int, seat_numbers: Sequence[int]
    ) -> 'Reservation':
        cls.validate_seat_numbers(seat_numbers)
        return cls(
            id=id,
            user_id=user_id,
            showtime_id=showtime_id,
            seat_numbers=list(seat_numbers),
            status=ReservationStatus.ACTIVE,
            created_at=datetime.now(timezone.utc),
        )

    @property
    def is_active(self) -> bool:
        return self.status == ReservationStatus.ACTIVE

    def is_owned_by(self, user_id: Optional[int]) -> bool:
        return user_id is not None and self.user_id == user_id

    @Logger.io
    def cancel(self) -> 'Reservation':
        if self.status == ReservationStatus.CANCELLED:
            raise InvalidStateError('Reservation already cancelled')

        return attrs.evolve(
            self, status=ReservationStatus.CANCELLED, cancelled_at=datetime.now(timezone.utc)
        )
