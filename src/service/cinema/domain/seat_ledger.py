"""
Seat Ledger - the set of seats held by ACTIVE reservations of one showtime

The ledger is stored incrementally (one held_seat row per held seat) and read
back into this value object under the showtime guard. All allocation rules
that depend on current holdings live here.
"""

from collections import Counter
from typing import FrozenSet, Iterable, List

import attrs

from src.platform.exception.exceptions import InvalidStateError, SeatConflictError


@attrs.frozen
class LedgerAudit:
    """Held-seat ledger compared against the seats of ACTIVE reservations"""

    showtime_id: int
    capacity: int
    held_seats: FrozenSet[int] = attrs.field(converter=frozenset)
    reserved_seats: FrozenSet[int] = attrs.field(converter=frozenset)
    double_booked: FrozenSet[int] = attrs.field(converter=frozenset)

    @property
    def missing_from_ledger(self) -> List[int]:
        return sorted(self.reserved_seats - self.held_seats)

    @property
    def orphaned_in_ledger(self) -> List[int]:
        return sorted(self.held_seats - self.reserved_seats)

    @property
    def over_capacity(self) -> bool:
        return len(self.held_seats) > self.capacity

    @property
    def consistent(self) -> bool:
        return not (
            self.double_booked
            or self.missing_from_ledger
            or self.orphaned_in_ledger
            or self.over_capacity
        )


@attrs.frozen
class SeatLedger:
    showtime_id: int
    capacity: int
    held_seats: FrozenSet[int] = attrs.field(factory=frozenset, converter=frozenset)

    @property
    def available_count(self) -> int:
        return max(self.capacity - len(self.held_seats), 0)

    def conflicts_with(self, seat_numbers: Iterable[int]) -> List[int]:
        return sorted(self.held_seats.intersection(seat_numbers))

    def would_exceed_capacity(self, seat_numbers: Iterable[int]) -> bool:
        return len(self.held_seats.union(seat_numbers)) > self.capacity

    def validate_allocation(self, seat_numbers: Iterable[int]) -> None:
        seat_numbers = list(seat_numbers)

        conflicts = self.conflicts_with(seat_numbers)
        if conflicts:
            raise SeatConflictError(conflicts)

        if self.would_exceed_capacity(seat_numbers):
            raise InvalidStateError(
                f'Showtime {self.showtime_id} cannot hold {len(seat_numbers)} more seats '
                f'({self.available_count} of {self.capacity} available)'
            )

    def allocate(self, seat_numbers: Iterable[int]) -> 'SeatLedger':
        seat_numbers = list(seat_numbers)
        self.validate_allocation(seat_numbers)
        return attrs.evolve(self, held_seats=self.held_seats.union(seat_numbers))

    def release(self, seat_numbers: Iterable[int]) -> 'SeatLedger':
        return attrs.evolve(self, held_seats=self.held_seats.difference(seat_numbers))

    def audit(self, active_reservation_seats: Iterable[int]) -> LedgerAudit:
        """
        Compare the ledger with history. `active_reservation_seats` lists every seat of
        every ACTIVE reservation, so a seat appearing twice was sold twice.
        """
        counts = Counter(active_reservation_seats)
        return LedgerAudit(
            showtime_id=self.showtime_id,
            capacity=self.capacity,
            held_seats=self.held_seats,
            reserved_seats=counts.keys(),
            double_booked={seat for seat, count in counts.items() if count > 1},
        )
