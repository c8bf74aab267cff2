"""
Time source adapters.

HttpTimeSource asks an external time service (worldtimeapi-compatible)
for the current UTC time and falls back to the local clock on any failure.
"""
import logging
from datetime import datetime, timezone as dt_timezone
from typing import Optional

import requests
from asgiref.sync import sync_to_async
from django.conf import settings
from django.utils import timezone
from django.utils.dateparse import parse_datetime

from core.metrics import time_source_fallbacks_total
from core.ports.time_source import TimeSource

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 5.0


class SystemTimeSource(TimeSource):
    """Local wall clock."""

    async def now(self) -> datetime:
        return timezone.now()


class HttpTimeSource(TimeSource):
    """
    External time service client.

    Expects a JSON body with a "utc_datetime" (or "datetime") ISO-8601 field.
    Never raises: fetch errors, timeouts, non-2xx statuses and unparsable
    payloads all fall back to timezone.now().
    """

    def __init__(self, url: str, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        """
        Initialize time source.

        Args:
            url: Time service URL
            timeout: Request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

    async def now(self) -> datetime:
        return await sync_to_async(self._now, thread_sensitive=False)()

    def _now(self) -> datetime:
        try:
            response = requests.get(
                self.url,
                timeout=self.timeout,
                headers={"Cache-Control": "no-store"},
            )
            response.raise_for_status()
            return self._parse(response.json())
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.warning(
                "Could not fetch time from %s, falling back to server time: %s",
                self.url,
                e,
            )
            time_source_fallbacks_total.labels(reason=type(e).__name__).inc()
            return timezone.now()

    @staticmethod
    def _parse(payload) -> datetime:
        """
        Extract an aware datetime from the service payload.

        Raises:
            ValueError: If the payload carries no usable timestamp
        """
        if not isinstance(payload, dict):
            raise ValueError("Time service returned a non-object payload")
        raw = payload.get("utc_datetime") or payload.get("datetime")
        parsed = parse_datetime(raw) if isinstance(raw, str) else None
        if parsed is None:
            raise ValueError(f"Time service payload has no datetime: {raw!r}")
        if timezone.is_naive(parsed):
            parsed = timezone.make_aware(parsed, dt_timezone.utc)
        return parsed


def get_time_source(url: Optional[str] = None, timeout: Optional[float] = None) -> TimeSource:
    """
    Build the configured time source.

    An empty TIME_API_URL selects the local clock.
    """
    url = settings.TIME_API_URL if url is None else url
    if not url:
        return SystemTimeSource()
    return HttpTimeSource(
        url=url,
        timeout=settings.TIME_API_TIMEOUT if timeout is None else timeout,
    )
