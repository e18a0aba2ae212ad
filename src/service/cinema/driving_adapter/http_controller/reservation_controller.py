from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.cinema.app.command.cancel_reservation_use_case import CancelReservationUseCase
from src.service.cinema.app.command.reserve_seats_use_case import ReserveSeatsUseCase
from src.service.cinema.app.query.get_reservation_use_case import GetReservationUseCase
from src.service.cinema.app.query.list_my_reservations_use_case import ListMyReservationsUseCase
from src.service.cinema.domain.entity.reservation_entity import ReservationStatus
from src.service.cinema.domain.entity.user_entity import UserEntity
from src.service.cinema.driving_adapter.http_controller.auth.role_auth import require_user
from src.service.cinema.driving_adapter.http_controller.schema.reservation_schema import (
    ReservationCreateRequest,
    ReservationResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def reserve_seats(
    request: ReservationCreateRequest,
    current_user: UserEntity = Depends(require_user),
    use_case: ReserveSeatsUseCase = Depends(ReserveSeatsUseCase.depends),
) -> ReservationResponse:
    with tracer.start_as_current_span('controller.reserve_seats') as span:
        span.set_attribute('showtime_id', request.showtime_id)
        span.set_attribute('user_id', current_user.id or 0)

        reservation = await use_case.reserve(
            showtime_id=request.showtime_id,
            user_id=current_user.id or 0,
            seat_numbers=request.seat_numbers,
        )
        return ReservationResponse.model_validate(reservation)


# Registered before '/{reservation_id}' so 'my' is not parsed as an id
@router.get('/my')
@Logger.io
async def list_my_reservations(
    reservation_status: Optional[ReservationStatus] = Query(None, alias='status'),
    current_user: UserEntity = Depends(require_user),
    use_case: ListMyReservationsUseCase = Depends(ListMyReservationsUseCase.depends),
) -> List[ReservationResponse]:
    reservations = await use_case.list_by_user(
        user_id=current_user.id or 0, status=reservation_status
    )
    return [ReservationResponse.model_validate(reservation) for reservation in reservations]


@router.get('/{reservation_id}')
@Logger.io
async def get_reservation(
    reservation_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_user),
    use_case: GetReservationUseCase = Depends(GetReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.get_by_id(
        reservation_id=reservation_id,
        user_id=current_user.id,
        is_admin=current_user.is_admin,
    )
    return ReservationResponse.model_validate(reservation)


@router.post('/{reservation_id}/cancel')
@Logger.io
async def cancel_reservation(
    reservation_id: UtilsUUID7,
    current_user: UserEntity = Depends(require_user),
    use_case: CancelReservationUseCase = Depends(CancelReservationUseCase.depends),
) -> ReservationResponse:
    reservation = await use_case.cancel(
        reservation_id=reservation_id,
        user_id=current_user.id,
        is_admin=current_user.is_admin,
    )
    return ReservationResponse.model_validate(reservation)
