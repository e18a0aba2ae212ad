"""
Unit tests for CancelReservationUseCase

Test Coverage:
1. Owner and admin can cancel, other users cannot
2. Cancelled seats are immediately reservable again
3. Double cancel and lead-time blackout are rejected
4. Concurrent cancels of one reservation succeed once
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from uuid_utils import uuid7

from src.platform.exception.exceptions import (
    ForbiddenError,
    InvalidStateError,
    NotFoundError,
    StorageError,
)
from src.service.cinema.app.command.cancel_reservation_use_case import CancelReservationUseCase
from src.service.cinema.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.cinema.domain.entity.reservation_entity import ReservationStatus
from src.service.cinema.domain.entity.showtime_entity import Showtime
from src.service.cinema.driven_adapter.guard.showtime_lock_guard import ShowtimeLockGuard
from test.service.cinema.unit.fakes import FakeReservationQueryRepo, FakeUnitOfWork, InMemoryStore


pytestmark = pytest.mark.unit

OWNER_ID = 1
OTHER_USER_ID = 2


def _showtime(*, starts_in=timedelta(days=1)) -> Showtime:
    start = datetime.now(timezone.utc) + starts_in
    return Showtime(movie_id=1, start_time=start, end_time=start + timedelta(hours=2))


class TestCancelReservation:
    def setup_method(self):
        self.store = InMemoryStore()
        self.showtime = self.store.add_showtime(_showtime())
        self.fail_on_commit = False
        guard = ShowtimeLockGuard(timeout_seconds=1.0)

        def uow_factory():
            return FakeUnitOfWork(self.store, fail_on_commit=self.fail_on_commit)

        self.reserve_use_case = ReserveSeatsUseCase(uow_factory=uow_factory, showtime_guard=guard)
        self.use_case = CancelReservationUseCase(
            reservation_query_repo=FakeReservationQueryRepo(self.store),
            uow_factory=uow_factory,
            showtime_guard=guard,
            cancellation_lead_time_minutes=120,
        )

    async def _reserve(self, seats, *, showtime_id=None, user_id=OWNER_ID):
        return await self.reserve_use_case.reserve(
            showtime_id=showtime_id or self.showtime.id, user_id=user_id, seat_numbers=seats
        )

    # ==================== Success ====================

    @pytest.mark.asyncio
    async def test_owner_cancels_and_seats_are_released(self):
        # Given
        reservation = await self._reserve([25, 26])

        # When
        cancelled = await self.use_case.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        # Then
        assert cancelled.status == ReservationStatus.CANCELLED
        assert cancelled.cancelled_at is not None
        assert self.store.held(self.showtime.id) == set()
        assert self.store.reservations[str(reservation.id)].status == ReservationStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_released_seats_can_be_rebooked(self):
        first = await self._reserve([25, 26])
        await self.use_case.cancel(reservation_id=first.id, user_id=OWNER_ID)

        again = await self._reserve([25, 26], user_id=OTHER_USER_ID)

        assert again.id != first.id
        assert self.store.held(self.showtime.id) == {25, 26}

    @pytest.mark.asyncio
    async def test_admin_can_cancel_any_reservation(self):
        reservation = await self._reserve([3])

        cancelled = await self.use_case.cancel(
            reservation_id=reservation.id, user_id=99, is_admin=True
        )

        assert cancelled.status == ReservationStatus.CANCELLED

    @pytest.mark.asyncio
    async def test_cancel_only_releases_own_seats(self):
        mine = await self._reserve([1, 2])
        await self._reserve([3, 4], user_id=OTHER_USER_ID)

        await self.use_case.cancel(reservation_id=mine.id, user_id=OWNER_ID)

        assert self.store.held(self.showtime.id) == {3, 4}

    # ==================== Failures ====================

    @pytest.mark.asyncio
    async def test_unknown_reservation(self):
        with pytest.raises(NotFoundError):
            await self.use_case.cancel(reservation_id=uuid7(), user_id=OWNER_ID)

    @pytest.mark.asyncio
    async def test_other_user_is_forbidden(self):
        reservation = await self._reserve([1])

        with pytest.raises(ForbiddenError):
            await self.use_case.cancel(reservation_id=reservation.id, user_id=OTHER_USER_ID)

        assert self.store.held(self.showtime.id) == {1}

    @pytest.mark.asyncio
    async def test_double_cancel(self):
        reservation = await self._reserve([1])
        await self.use_case.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        with pytest.raises(InvalidStateError, match='already cancelled'):
            await self.use_case.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

    @pytest.mark.asyncio
    async def test_cancel_within_lead_time(self):
        soon = self.store.add_showtime(_showtime(starts_in=timedelta(minutes=30)))
        reservation = await self._reserve([1], showtime_id=soon.id)

        with pytest.raises(InvalidStateError, match='within 120 minutes'):
            await self.use_case.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        assert self.store.held(soon.id) == {1}
        assert self.store.reservations[str(reservation.id)].is_active

    @pytest.mark.asyncio
    async def test_commit_failure_keeps_reservation_active(self):
        reservation = await self._reserve([7])
        self.fail_on_commit = True

        with pytest.raises(StorageError):
            await self.use_case.cancel(reservation_id=reservation.id, user_id=OWNER_ID)

        assert self.store.reservations[str(reservation.id)].is_active
        assert self.store.held(self.showtime.id) == {7}

    # ==================== Concurrency ====================

    @pytest.mark.asyncio
    async def test_concurrent_cancels_succeed_once(self):
        reservation = await self._reserve([8, 9])

        results = await asyncio.gather(
            self.use_case.cancel(reservation_id=reservation.id, user_id=OWNER_ID),
            self.use_case.cancel(reservation_id=reservation.id, user_id=OWNER_ID, is_admin=True),
            return_exceptions=True,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 1
        assert isinstance(failures[0], InvalidStateError)
        assert self.store.held(self.showtime.id) == set()

    @pytest.mark.asyncio
    async def test_cancel_and_rebook_race_never_double_books(self):
        reservation = await self._reserve([30])

        results = await asyncio.gather(
            self.use_case.cancel(reservation_id=reservation.id, user_id=OWNER_ID),
            self._reserve([30], user_id=OTHER_USER_ID),
            return_exceptions=True,
        )

        # Either order is valid; the ledger must match the surviving reservations
        active = [r for r in self.store.reservations.values() if r.is_active]
        held = {seat for r in active for seat in r.seat_numbers}
        assert self.store.held(self.showtime.id) == held
        assert len(active) <= 1
        assert not isinstance(results[0], Exception)
