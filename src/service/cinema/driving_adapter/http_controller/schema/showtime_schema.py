from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ShowtimeCreateRequest(BaseModel):
    movie_id: int
    start_time: datetime
    end_time: datetime
    capacity: Optional[int] = Field(None, description='Defaults to DEFAULT_SHOWTIME_CAPACITY')

    class Config:
        json_schema_extra = {
            'example': {
                'movie_id': 1,
                'start_time': '2030-01-10T19:30:00Z',
                'end_time': '2030-01-10T22:00:00Z',
                'capacity': 100,
            }
        }


class ShowtimeResponse(BaseModel):
    id: int
    movie_id: int
    start_time: datetime
    end_time: datetime
    capacity: int

    class Config:
        from_attributes = True


class SeatMapResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'showtime_id': 1,
                'capacity': 100,
                'held_seats': [25, 26],
                'available_count': 98,
            }
        },
    }

    showtime_id: int
    capacity: int
    held_seats: List[int]
    available_count: int


class SeatLedgerAuditResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'showtime_id': 1,
                'capacity': 100,
                'held_seats': [25, 26],
                'reserved_seats': [25, 26],
                'double_booked': [],
                'missing_from_ledger': [],
                'orphaned_in_ledger': [],
                'consistent': True,
            }
        },
    }

    showtime_id: int
    capacity: int
    held_seats: List[int]
    reserved_seats: List[int]
    double_booked: List[int]
    missing_from_ledger: List[int]
    orphaned_in_ledger: List[int]
    consistent: bool
