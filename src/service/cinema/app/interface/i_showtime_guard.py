from abc import ABC, abstractmethod
from typing import AsyncContextManager


class IShowtimeGuard(ABC):
    """Per-showtime mutual exclusion for ledger reads and writes"""

    @abstractmethod
    def hold(self, showtime_id: int) -> AsyncContextManager[None]:
        """
        Usage:
            async with guard.hold(showtime_id):
                ...  # validate-then-commit

        Raises BusyError when the guard cannot be acquired in time.
        """
        pass
