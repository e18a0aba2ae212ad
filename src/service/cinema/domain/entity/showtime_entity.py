from datetime import datetime, timezone
from typing import Iterable, Optional

import attrs

from src.platform.exception.exceptions import InvalidRequestError, InvalidStateError


def as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; everything in the domain is UTC-aware."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


@attrs.define
class Showtime:
    movie_id: int
    start_time: datetime = attrs.field(converter=as_utc)
    end_time: datetime = attrs.field(converter=as_utc)
    capacity: int = 100
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def create(
        cls,
        *,
        movie_id: int,
        start_time: datetime,
        end_time: datetime,
        capacity: int,
        now: Optional[datetime] = None,
    ) -> 'Showtime':
        now = now or datetime.now(timezone.utc)
        start_time = as_utc(start_time)
        end_time = as_utc(end_time)

        if end_time <= start_time:
            raise InvalidRequestError('end_time must be after start_time')
        if capacity < 1:
            raise InvalidRequestError('capacity must be at least 1')
        if start_time <= now:
            raise InvalidRequestError('start_time must be in the future')

        return cls(
            movie_id=movie_id,
            start_time=start_time,
            end_time=end_time,
            capacity=capacity,
            created_at=now,
        )

    def minutes_until_start(self, now: Optional[datetime] = None) -> float:
        now = now or datetime.now(timezone.utc)
        return (self.start_time - now).total_seconds() / 60

    def is_bookable(self, now: Optional[datetime] = None) -> bool:
        return self.minutes_until_start(now) > 0

    def validate_seat_range(self, seat_numbers: Iterable[int]) -> None:
        out_of_range = sorted(seat for seat in seat_numbers if not 1 <= seat <= self.capacity)
        if out_of_range:
            raise InvalidRequestError(
                f'Seat numbers must be between 1 and {self.capacity}, got: '
                f'{", ".join(str(seat) for seat in out_of_range)}'
            )

    def validate_bookable(self, now: Optional[datetime] = None) -> None:
        if not self.is_bookable(now):
            raise InvalidStateError(f'Showtime {self.id} has already started')

    def validate_cancellable(self, *, lead_time_minutes: int, now: Optional[datetime] = None) -> None:
        if self.minutes_until_start(now) < lead_time_minutes:
            raise InvalidStateError(
                f'Reservations cannot be cancelled within {lead_time_minutes} minutes '
                'of the showtime start'
            )
