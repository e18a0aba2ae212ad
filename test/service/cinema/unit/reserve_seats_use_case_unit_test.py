"""
Unit tests for ReserveSeatsUseCase

Test Coverage:
1. Validation order (request shape, missing showtime, range, started, conflict, capacity)
2. Successful reservation updates the ledger
3. Concurrent requests on one showtime (overlapping and disjoint)
4. Storage failure leaves the ledger untouched
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from src.platform.exception.exceptions import (
    InvalidRequestError,
    InvalidStateError,
    NotFoundError,
    SeatConflictError,
    StorageError,
)
from src.service.cinema.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.cinema.domain.entity.reservation_entity import ReservationStatus
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.driven_adapter.guard.showtime_lock_guard import ShowtimeLockGuard
from test.service.cinema.unit.fakes import FakeUnitOfWork, InMemoryStore


pytestmark = pytest.mark.unit


def _showtime(*, starts_in=timedelta(days=1), capacity=100) -> Showtime:
    start = datetime.now(timezone.utc) + starts_in
    return Showtime(
        movie_id=1, start_time=start, end_time=start + timedelta(hours=2), capacity=capacity
    )


class TestReserveSeats:
    def setup_method(self):
        self.store = InMemoryStore()
        self.showtime = self.store.add_showtime(_showtime())
        self.fail_on_commit = False
        self.use_case = ReserveSeatsUseCase(
            uow_factory=lambda: FakeUnitOfWork(self.store, fail_on_commit=self.fail_on_commit),
            showtime_guard=ShowtimeLockGuard(timeout_seconds=1.0),
        )

    async def _reserve(self, seats, *, showtime_id=None, user_id=1):
        return await self.use_case.reserve(
            showtime_id=showtime_id or self.showtime.id, user_id=user_id, seat_numbers=seats
        )

    # ==================== Success ====================

    @pytest.mark.asyncio
    async def test_reserve_free_seats(self):
        # When
        reservation = await self._reserve([25, 26])

        # Then
        assert reservation.status == ReservationStatus.ACTIVE
        assert reservation.seat_numbers == [25, 26]
        assert reservation.showtime_id == self.showtime.id
        assert self.store.held(self.showtime.id) == {25, 26}
        assert self.store.commits == 1

    @pytest.mark.asyncio
    async def test_reservation_ids_are_unique(self):
        first = await self._reserve([1])
        second = await self._reserve([2])

        assert first.id != second.id

    # ==================== Validation order ====================

    @pytest.mark.asyncio
    async def test_empty_request_is_rejected_before_lookup(self):
        # Unknown showtime would be NotFound, but the request shape is checked first
        with pytest.raises(InvalidRequestError):
            await self._reserve([], showtime_id=999)

    @pytest.mark.asyncio
    async def test_duplicate_seats_rejected(self):
        with pytest.raises(InvalidRequestError, match='Duplicate'):
            await self._reserve([3, 3])

    @pytest.mark.asyncio
    async def test_unknown_showtime(self):
        with pytest.raises(NotFoundError):
            await self._reserve([1], showtime_id=999)

    @pytest.mark.asyncio
    async def test_out_of_range_seat(self):
        with pytest.raises(InvalidRequestError, match='between 1 and 100'):
            await self._reserve([100, 101])

        assert self.store.held(self.showtime.id) == set()

    @pytest.mark.asyncio
    async def test_started_showtime(self):
        past = self.store.add_showtime(_showtime(starts_in=timedelta(minutes=-5)))

        with pytest.raises(InvalidStateError, match='already started'):
            await self._reserve([1], showtime_id=past.id)

    @pytest.mark.asyncio
    async def test_overlap_reports_only_conflicting_seats(self):
        # Given
        await self._reserve([25, 26])

        # When / Then
        with pytest.raises(SeatConflictError) as exc_info:
            await self._reserve([26, 27], user_id=2)

        assert exc_info.value.conflicting_seats == [26]
        assert self.store.held(self.showtime.id) == {25, 26}

    @pytest.mark.asyncio
    async def test_full_showtime_reports_conflict(self):
        small = self.store.add_showtime(_showtime(capacity=2))
        await self._reserve([1, 2], showtime_id=small.id)

        with pytest.raises(SeatConflictError):
            await self._reserve([2], showtime_id=small.id)

    # ==================== Concurrency ====================

    @pytest.mark.asyncio
    async def test_concurrent_overlapping_requests_exactly_one_wins(self):
        # When: two users race for seat 26
        results = await asyncio.gather(
            self._reserve([25, 26], user_id=1),
            self._reserve([26, 27], user_id=2),
            return_exceptions=True,
        )

        # Then
        successes = [r for r in results if not isinstance(r, Exception)]
        failures = [r for r in results if isinstance(r, Exception)]
        assert len(successes) == 1
        assert len(failures) == 1
        assert isinstance(failures[0], SeatConflictError)
        assert failures[0].conflicting_seats == [26]
        assert self.store.held(self.showtime.id) == set(successes[0].seat_numbers)

    @pytest.mark.asyncio
    async def test_concurrent_disjoint_requests_all_succeed(self):
        seat_groups = [[1, 2], [3, 4], [5], [6, 7, 8]]

        results = await asyncio.gather(
            *(self._reserve(seats, user_id=i) for i, seats in enumerate(seat_groups, start=1))
        )

        assert len(results) == 4
        assert self.store.held(self.showtime.id) == set(range(1, 9))
        assert self.store.commits == 4

    @pytest.mark.asyncio
    async def test_many_racers_for_one_seat(self):
        results = await asyncio.gather(
            *(self._reserve([42], user_id=i) for i in range(10)), return_exceptions=True
        )

        assert sum(not isinstance(r, Exception) for r in results) == 1
        assert all(isinstance(r, SeatConflictError) for r in results if isinstance(r, Exception))

    @pytest.mark.asyncio
    async def test_different_showtimes_do_not_conflict(self):
        other = self.store.add_showtime(_showtime())

        first, second = await asyncio.gather(
            self._reserve([10]), self._reserve([10], showtime_id=other.id)
        )

        assert first.showtime_id != second.showtime_id
        assert self.store.held(self.showtime.id) == {10}
        assert self.store.held(other.id) == {10}

    @pytest.mark.asyncio
    async def test_interleaved_commits_on_many_showtimes_are_all_kept(self):
        # Given: several showtimes booked at once, two requests each
        showtimes = [self.showtime] + [self.store.add_showtime(_showtime()) for _ in range(4)]

        # When
        await asyncio.gather(
            *(
                self._reserve(seats, showtime_id=showtime.id)
                for showtime in showtimes
                for seats in ([1, 2], [3])
            )
        )

        # Then: no commit overwrote another showtime's seats
        for showtime in showtimes:
            assert self.store.held(showtime.id) == {1, 2, 3}
        assert len(self.store.reservations) == 10
        assert self.store.commits == 10

    # ==================== Storage failure ====================

    @pytest.mark.asyncio
    async def test_commit_failure_leaves_no_trace(self):
        # Given
        self.fail_on_commit = True

        # When
        with pytest.raises(StorageError):
            await self._reserve([5, 6])

        # Then: nothing was published, seats are still free
        self.fail_on_commit = False
        assert self.store.reservations == {}
        assert self.store.held(self.showtime.id) == set()
        reservation = await self._reserve([5, 6])
        assert reservation.seat_numbers == [5, 6]
