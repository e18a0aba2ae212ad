from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_showtime_use_case import CreateShowtimeUseCase
from src.service.cinema.app.query.audit_seat_ledger_use_case import AuditSeatLedgerUseCase
from src.service.cinema.app.query.get_held_seats_use_case import GetHeldSeatsUseCase
from src.service.cinema.app.query.get_showtime_use_case import GetShowtimeUseCase
from src.service.cinema.app.query.list_showtime_reservations_use_case import (
    ListShowtimeReservationsUseCase,
)
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.domain.entity.reservation_entity import ReservationStatus
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_admin
from src.service.cinema.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationResponse,
)
from src.service.cinema.driving_adapter.http_controller.schema.showtime_schema import (
    SeatLedgerAuditResponse,
    SeatMapResponse,
    ShowtimeCreateRequest,
    ShowtimeResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_showtime(
    request: ShowtimeCreateRequest,
    current_user: UserEntity = Depends(require_admin),
    use_case: CreateShowtimeUseCase = Depends(CreateShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.create_showtime(
        movie_id=request.movie_id,
        start_time=request.start_time,
        end_time=request.end_time,
        capacity=request.capacity,
    )
    return ShowtimeResponse.model_validate(showtime)


@router.get('')
@Logger.io
async def list_showtimes(
    movie_id: Optional[int] = None,
    start: Optional[datetime] = None,
    end: Optional[datetime] = None,
    use_case: ListShowtimesUseCase = Depends(ListShowtimesUseCase.depends),
) -> List[ShowtimeResponse]:
    showtimes = await use_case.list_showtimes(movie_id=movie_id, start=start, end=end)
    return [ShowtimeResponse.model_validate(showtime) for showtime in showtimes]


@router.get('/{showtime_id}')
@Logger.io
async def get_showtime(
    showtime_id: int,
    use_case: GetShowtimeUseCase = Depends(GetShowtimeUseCase.depends),
) -> ShowtimeResponse:
    showtime = await use_case.get_by_id(showtime_id=showtime_id)
    return ShowtimeResponse.model_validate(showtime)


@router.get('/{showtime_id}/seats')
@Logger.io
async def get_held_seats(
    showtime_id: int,
    use_case: GetHeldSeatsUseCase = Depends(GetHeldSeatsUseCase.depends),
) -> SeatMapResponse:
    ledger = await use_case.get_ledger(showtime_id=showtime_id)
    return SeatMapResponse(
        showtime_id=ledger.showtime_id,
        capacity=ledger.capacity,
        held_seats=sorted(ledger.held_seats),
        available_count=ledger.available_count,
    )


@router.get('/{showtime_id}/seats/audit')
@Logger.io
async def audit_seat_ledger(
    showtime_id: int,
    current_user: UserEntity = Depends(require_admin),
    use_case: AuditSeatLedgerUseCase = Depends(AuditSeatLedgerUseCase.depends),
) -> SeatLedgerAuditResponse:
    audit = await use_case.audit(showtime_id=showtime_id)
    return SeatLedgerAuditResponse(
        showtime_id=audit.showtime_id,
        capacity=audit.capacity,
        held_seats=sorted(audit.held_seats),
        reserved_seats=sorted(audit.reserved_seats),
        double_booked=sorted(audit.double_booked),
        missing_from_ledger=audit.missing_from_ledger,
        orphaned_in_ledger=audit.orphaned_in_ledger,
        consistent=audit.consistent,
    )

@router.get('/{showtime_id}/reservations')
@Logger.io
async def list_showtime_reservations(
    showtime_id: int,
    reservation_status: Optional[ReservationStatus] = Query(None, alias='status'),
    current_user: UserEntity = Depends(require_admin),
    use_case: ListShowtimeReservationsUseCase = Depends(ListShowtimeReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_by_showtime(
        showtime_id=showtime_id, status=reservation_status
    )
    return [ReservationResponse.model_validate(reservation) for reservation in reservations]
