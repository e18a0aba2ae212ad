from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, StrictInt

from src.platform.types import UtilsUUID7
from src.service.cinema.domain.entity.reservation_entity import ReservationStatus


class ReservationCreateRequest(BaseModel):
    # Strict: true, 2.0 and "5" are not seat numbers
    showtime_id: StrictInt
    seat_numbers: List[StrictInt]

    class Config:
        json_schema_extra = {'example': {'showtime_id': 1, 'seat_numbers': [25, 26]}}


class ReservationResponse(BaseModel):
    model_config = {
        'from_attributes': True,
        'json_schema_extra': {
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'user_id': 2,
                'showtime_id': 1,
                'seat_numbers': [25, 26],
                'status': 'active',
                'created_at': '2030-01-10T10:30:00Z',
                'cancelled_at': None,
            }
        },
    }

    id: UtilsUUID7
    user_id: int
    showtime_id: int
    seat_numbers: List[int]
    status: ReservationStatus
    created_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
