"""
Unit tests for SeatLedger

Test Coverage:
1. Allocation (free seats, conflicts, capacity)
2. Release
3. Auditing against the seats of active reservations
"""

import pytest

from src.platform.exception.exceptions import InvalidStateError, SeatConflictError
from src.service.cinema.domain.seat_ledger import SeatLedger


pytestmark = pytest.mark.unit


class TestAllocate:
    def setup_method(self):
        self.ledger = SeatLedger(showtime_id=1, capacity=100, held_seats={25, 26})

    def test_allocate_free_seats_returns_new_ledger(self):
        # When
        updated = self.ledger.allocate([27, 28])

        # Then: original is untouched
        assert updated.held_seats == {25, 26, 27, 28}
        assert self.ledger.held_seats == {25, 26}
        assert updated.available_count == 96

    def test_overlap_raises_seat_conflict_with_only_overlapping_seats(self):
        with pytest.raises(SeatConflictError) as exc_info:
            self.ledger.allocate([27, 26])

        assert exc_info.value.conflicting_seats == [26]
        assert exc_info.value.extra == {'conflicting_seats': [26]}
        assert exc_info.value.status_code == 409

    def test_conflicting_seats_are_sorted(self):
        with pytest.raises(SeatConflictError) as exc_info:
            self.ledger.allocate([26, 1, 25])

        assert exc_info.value.conflicting_seats == [25, 26]
        assert 'Seats already reserved: 25, 26' in str(exc_info.value)

    def test_exceeding_capacity_raises_invalid_state(self):
        ledger = SeatLedger(showtime_id=1, capacity=3, held_seats={1, 2})

        with pytest.raises(InvalidStateError):
            ledger.allocate([3, 4])

    def test_conflict_is_reported_before_capacity(self):
        ledger = SeatLedger(showtime_id=1, capacity=2, held_seats={1, 2})

        with pytest.raises(SeatConflictError):
            ledger.allocate([2, 3])

    def test_filling_to_exact_capacity_is_allowed(self):
        ledger = SeatLedger(showtime_id=1, capacity=3, held_seats={1})

        assert ledger.allocate([2, 3]).available_count == 0


class TestRelease:
    def test_release_frees_seats(self):
        ledger = SeatLedger(showtime_id=1, capacity=10, held_seats={1, 2, 3})

        released = ledger.release([2, 3])

        assert released.held_seats == {1}
        assert released.allocate([2]).held_seats == {1, 2}

    def test_release_of_unheld_seats_is_a_no_op(self):
        ledger = SeatLedger(showtime_id=1, capacity=10, held_seats={1})

        assert ledger.release([5]).held_seats == {1}


class TestAudit:
    def setup_method(self):
        self.ledger = SeatLedger(showtime_id=1, capacity=10, held_seats={1, 2, 3})

    def test_ledger_matching_history_is_consistent(self):
        audit = self.ledger.audit([1, 2, 3])

        assert audit.consistent
        assert audit.reserved_seats == {1, 2, 3}
        assert audit.double_booked == frozenset()

    def test_seat_sold_twice_is_reported(self):
        audit = self.ledger.audit([1, 2, 2, 3])

        assert not audit.consistent
        assert audit.double_booked == {2}

    def test_seat_missing_from_ledger(self):
        audit = self.ledger.audit([1, 2, 3, 7])

        assert audit.missing_from_ledger == [7]
        assert audit.orphaned_in_ledger == []
        assert not audit.consistent

    def test_seat_held_without_active_reservation(self):
        # Seat 3 was released in history but left behind in the ledger
        audit = self.ledger.audit([2, 1])

        assert audit.orphaned_in_ledger == [3]
        assert not audit.consistent

    def test_empty_showtime(self):
        audit = SeatLedger(showtime_id=1, capacity=10).audit([])

        assert audit.consistent
        assert audit.held_seats == frozenset()
