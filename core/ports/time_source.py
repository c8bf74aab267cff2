"""
Time source port (interface).

Key activation and verification read "now" through this port so the
clock can come from an external service and be replaced in tests.
"""
from abc import ABC, abstractmethod
from datetime import date, datetime

from django.utils import timezone


class TimeSource(ABC):
    """Abstract provider of the current time."""

    @abstractmethod
    async def now(self) -> datetime:
        """
        Get the current time.

        Returns:
            Timezone-aware datetime
        """
        pass

    async def today(self) -> date:
        """
        Get the current calendar date in the business time zone.

        Returns:
            Date of now() in settings.TIME_ZONE
        """
        return timezone.localdate(await self.now())
