"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.cinema.app.command import (
    cancel_reservation_use_case,
    create_movie_use_case,
    create_showtime_use_case,
    reserve_seats_use_case,
)
from src.service.cinema.app.query import (
    audit_seat_ledger_use_case,
    get_held_seats_use_case,
    get_movie_use_case,
    get_reservation_use_case,
    get_showtime_use_case,
    list_movies_use_case,
    list_my_reservations_use_case,
    list_showtime_reservations_use_case,
    list_showtimes_use_case,
    user_query_use_case,
)
from src.service.cinema.driving_adapter.http_controller import user_controller


WIRE_MODULES: list[ModuleType] = [
    create_movie_use_case,
    create_showtime_use_case,
    reserve_seats_use_case,
    cancel_reservation_use_case,
    audit_seat_ledger_use_case,
    get_held_seats_use_case,
    get_movie_use_case,
    get_reservation_use_case,
    get_showtime_use_case,
    list_movies_use_case,
    list_my_reservations_use_case,
    list_showtime_reservations_use_case,
    list_showtimes_use_case,
    user_query_use_case,
    user_controller,
]
