from typing import Any, Iterable


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    code: str = 'ERROR'

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def extra(self) -> dict[str, Any]:
        """Additional fields merged into the JSON error body."""
        return {}

    @property
    def headers(self) -> dict[str, str] | None:
        return None


class DomainError(CustomBaseError):
    code = 'INVALID_REQUEST'

    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidRequestError(DomainError):
    """Malformed input, e.g. seat numbers out of range or duplicated."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class InvalidStateError(DomainError):
    """Request is well-formed but not allowed in the current state."""

    code = 'INVALID_STATE'

    def __init__(self, message: str) -> None:
        super().__init__(message, 422)


class ForbiddenError(CustomBaseError):
    code = 'FORBIDDEN'

    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    code = 'NOT_FOUND'

    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    code = 'CONFLICT'

    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class SeatConflictError(ConflictError):
    """Requested seats are already held. Retry with a different selection."""

    code = 'SEAT_CONFLICT'

    def __init__(self, conflicting_seats: Iterable[int]) -> None:
        self.conflicting_seats = sorted(conflicting_seats)
        seats = ', '.join(str(seat) for seat in self.conflicting_seats)
        super().__init__(f'Seats already reserved: {seats}')

    @property
    def extra(self) -> dict[str, Any]:
        return {'conflicting_seats': self.conflicting_seats}


class BusyError(CustomBaseError):
    """Showtime guard could not be acquired in time. Safe to retry."""

    code = 'BUSY'

    def __init__(self, message: str, retry_after_seconds: int = 1) -> None:
        self.retry_after_seconds = retry_after_seconds
        super().__init__(message, 503)

    @property
    def extra(self) -> dict[str, Any]:
        return {'retryable': True}

    @property
    def headers(self) -> dict[str, str] | None:
        return {'Retry-After': str(self.retry_after_seconds)}


class StorageError(CustomBaseError):
    code = 'STORAGE_ERROR'

    def __init__(self, message: str) -> None:
        super().__init__(message, 500)


class AuthenticationError(CustomBaseError):
    code = 'AUTHENTICATION_FAILED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class LoginError(CustomBaseError):
    code = 'LOGIN_FAILED'

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)
