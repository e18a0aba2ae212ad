"""
Unit tests for the JSON error body produced by the exception handlers
"""

import json
from unittest.mock import Mock

import pytest

from src.platform.exception.exception_handlers import (
    custom_error_handler,
    general_500_exception_handler,
)
from src.platform.exception.exceptions import (
    BusyError,
    InvalidStateError,
    NotFoundError,
    SeatConflictError,
    StorageError,
)
from src.platform.metrics.reservation_metrics import result_label


pytestmark = pytest.mark.unit

REQUEST = Mock()


def _body(response) -> dict:
    return json.loads(response.body)


class TestCustomErrorHandler:
    @pytest.mark.asyncio
    async def test_seat_conflict_lists_conflicting_seats(self):
        response = await custom_error_handler(REQUEST, SeatConflictError([27, 26]))

        assert response.status_code == 409
        assert _body(response) == {
            'detail': 'Seats already reserved: 26, 27',
            'code': 'SEAT_CONFLICT',
            'conflicting_seats': [26, 27],
        }

    @pytest.mark.asyncio
    async def test_busy_is_retryable(self):
        response = await custom_error_handler(REQUEST, BusyError('Showtime 1 is busy'))

        assert response.status_code == 503
        assert response.headers['retry-after'] == '1'
        assert _body(response)['retryable'] is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        'error, status_code, code',
        [
            (InvalidStateError('started'), 422, 'INVALID_STATE'),
            (NotFoundError('missing'), 404, 'NOT_FOUND'),
            (StorageError('Failed to commit'), 500, 'STORAGE_ERROR'),
        ],
    )
    async def test_status_and_code(self, error, status_code, code):
        response = await custom_error_handler(REQUEST, error)

        assert response.status_code == status_code
        assert _body(response)['code'] == code

    @pytest.mark.asyncio
    async def test_unhandled_error_hides_details(self):
        response = await general_500_exception_handler(REQUEST, RuntimeError('secret'))

        assert response.status_code == 500
        assert _body(response) == {'detail': 'Internal server error'}


def test_metric_result_labels():
    assert result_label(SeatConflictError([1])) == 'seat_conflict'
    assert result_label(BusyError('busy')) == 'busy'
    assert result_label(StorageError('x')) == 'storage_error'
