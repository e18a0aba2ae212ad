from datetime import datetime, timezone
from typing import Dict, Optional

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram


class ReservationMetrics:
    """Seat reservation business metrics, exposed at /metrics"""

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        self.reservation_requests = Counter(
            'seat_reservation_requests_total',
            'Total seat reservation requests',
            ['result'],  # success / seat_conflict / invalid_request / busy / ...
            registry=registry,
        )

        self.reservation_duration = Histogram(
            'seat_reservation_duration_seconds',
            'Seat reservation processing time (guard wait included)',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0, 5.0],
            registry=registry,
        )

        self.reserved_seats = Counter(
            'seat_reservation_seats_total',
            'Seats granted by successful reservations',
            registry=registry,
        )

        self.cancellation_requests = Counter(
            'reservation_cancellation_requests_total',
            'Total reservation cancellation requests',
            ['result'],
            registry=registry,
        )

        self.guard_wait_duration = Histogram(
            'showtime_guard_wait_seconds',
            'Time spent waiting for the per-showtime guard',
            buckets=[0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
            registry=registry,
        )

        self.guard_timeouts = Counter(
            'showtime_guard_timeouts_total',
            'Guard acquisitions that gave up after the configured timeout',
            registry=registry,
        )

        self.held_seats = Gauge(
            'showtime_held_seats',
            'Seats held by active reservations of showtimes that have not started',
            ['showtime_id'],
            registry=registry,
        )

        self.active_guards = Gauge(
            'showtime_guard_active_keys',
            'Showtimes that currently have a guard holder or waiter',
            registry=registry,
        )
        # showtime_id -> start time, for every showtime with a live held_seats series
        self._held_series_starts: Dict[int, datetime] = {}

    def record_reservation(self, *, result: str, seats: int = 0) -> None:
        self.reservation_requests.labels(result=result).inc()
        if seats:
            self.reserved_seats.inc(seats)

    def record_cancellation(self, *, result: str) -> None:
        self.cancellation_requests.labels(result=result).inc()

    def set_held_seats(
        self,
        *,
        showtime_id: int,
        count: int,
        start_time: datetime,
        now: Optional[datetime] = None,
    ) -> None:
        """Series live only while a showtime is upcoming and has held seats."""
        now = now or datetime.now(timezone.utc)
        if count and start_time > now:
            self.held_seats.labels(showtime_id=str(showtime_id)).set(count)
            self._held_series_starts[showtime_id] = start_time
        else:
            self._drop_held_series(showtime_id)

        for started_id in [
            sid for sid, starts in self._held_series_starts.items() if starts <= now
        ]:
            self._drop_held_series(started_id)

    def _drop_held_series(self, showtime_id: int) -> None:
        if self._held_series_starts.pop(showtime_id, None) is not None:
            self.held_seats.remove(str(showtime_id))


def result_label(error: Exception) -> str:
    """Metric label for a failed request: the error code, e.g. 'seat_conflict'."""
    return str(getattr(error, 'code', 'error')).lower()


metrics = ReservationMetrics()
