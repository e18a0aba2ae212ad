from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import (
    MOVIE_CREATE,
    RESERVATION_CREATE,
    SHOWTIME_CREATE,
    USER_CREATE,
    USER_LOGIN,
)
from test.util_constant import ADMIN_EMAIL, DEFAULT_MOVIE, DEFAULT_PASSWORD


def login_user(client: TestClient, email: str, password: str = DEFAULT_PASSWORD) -> Any:
    """Login a user and keep the auth cookie on the client."""
    client.cookies.clear()
    login_response = client.post(USER_LOGIN, json={'email': email, 'password': password})
    assert login_response.status_code == 200, f'Login failed: {login_response.text}'
    if 'fastapiusersauth' in login_response.cookies:
        client.cookies.set('fastapiusersauth', login_response.cookies['fastapiusersauth'])
    return login_response


def assert_response_status(response, expected_status: int, message: str | None = None):
    response_text = getattr(response, 'text', getattr(response, 'content', 'N/A'))
    assert response.status_code == expected_status, (
        message or f'Expected {expected_status}, got {response.status_code}: {response_text}'
    )


def create_user(
    client: TestClient, email: str, password: str, name: str, role: str
) -> Dict[str, Any]:
    user_data = {'email': email, 'password': password, 'name': name, 'role': role}
    response = client.post(USER_CREATE, json=user_data)
    assert_response_status(response, 201, f'Failed to create {role} user: {response.text}')
    return response.json()


def future_window(
    *, starts_in: timedelta = timedelta(days=1), duration: timedelta = timedelta(hours=2)
) -> tuple[datetime, datetime]:
    start_time = datetime.now(timezone.utc) + starts_in
    return start_time, start_time + duration


def create_movie(client: TestClient, **overrides: Any) -> Dict[str, Any]:
    """Create a movie as the (already logged-in) admin."""
    response = client.post(MOVIE_CREATE, json={**DEFAULT_MOVIE, **overrides})
    assert_response_status(response, 201, 'Failed to create movie')
    return response.json()


def create_showtime(
    client: TestClient,
    movie_id: int,
    *,
    starts_in: timedelta = timedelta(days=1),
    capacity: int | None = 100,
) -> Dict[str, Any]:
    """Create a showtime as the (already logged-in) admin."""
    start_time, end_time = future_window(starts_in=starts_in)
    payload: Dict[str, Any] = {
        'movie_id': movie_id,
        'start_time': start_time.isoformat(),
        'end_time': end_time.isoformat(),
    }
    if capacity is not None:
        payload['capacity'] = capacity
    response = client.post(SHOWTIME_CREATE, json=payload)
    assert_response_status(response, 201, 'Failed to create showtime')
    return response.json()


def setup_showtime_as_admin(client: TestClient, **showtime_kwargs: Any) -> Dict[str, Any]:
    """Login as the admin, create a movie and one showtime, then log out."""
    login_user(client, ADMIN_EMAIL)
    movie = create_movie(client)
    showtime = create_showtime(client, movie['id'], **showtime_kwargs)
    client.cookies.clear()
    return showtime


def reserve(client: TestClient, showtime_id: int, seat_numbers: list[int]) -> Any:
    return client.post(
        RESERVATION_CREATE, json={'showtime_id': showtime_id, 'seat_numbers': seat_numbers}
    )
