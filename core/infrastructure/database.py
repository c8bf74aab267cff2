"""
Database utilities.
"""

import functools
import logging
from typing import Callable, TypeVar

from django.db import DatabaseError

from core.domain.exceptions import StorageError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable)


def translate_storage_errors(func: F) -> F:
    """
    Convert database failures raised by a repository method into StorageError.

    Only the exception type is logged; messages may carry query parameters.

    Usage:
        @sync_to_async
        @translate_storage_errors
        def save(self, entity):
            ...
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except DatabaseError as e:
            logger.error(
                "Storage operation %s failed: %s",
                func.__qualname__,
                type(e).__name__,
                exc_info=True,
            )
            raise StorageError() from e

    return wrapper  # type: ignore[return-value]
