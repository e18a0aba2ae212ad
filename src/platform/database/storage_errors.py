from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import SQLAlchemyError

from src.platform.exception.exceptions import StorageError
from src.platform.logging.loguru_io import Logger


@contextmanager
def raise_storage_error(action: str) -> Iterator[None]:
    """
    Re-raise driver/ORM failures as StorageError.

    Usage:
        with raise_storage_error('insert reservation'):
            await session.flush()
    """
    try:
        yield
    except SQLAlchemyError as e:
        Logger.base.error(f'❌ [DB] Failed to {action}: {type(e).__name__}: {e}')
        raise StorageError(f'Failed to {action}') from e
