"""Error taxonomy shared by every catalog surface.

Services raise these; the handlers registered in ``src.main`` render them
into the common failure envelope.
"""
import asyncio
import logging
from contextlib import contextmanager

from sqlalchemy.exc import (
    DisconnectionError,
    InterfaceError,
    OperationalError,
    TimeoutError as PoolTimeoutError,
)

logger = logging.getLogger(__name__)


class CatalogError(Exception):
    status_code: int = 500
    error_type: str = "InternalError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(CatalogError):
    status_code = 404
    error_type = "NotFound"

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"{resource} '{identifier}' not found")
        self.resource = resource
        self.identifier = identifier


class InvalidInput(CatalogError):
    status_code = 400
    error_type = "InvalidInput"


class StoreUnavailable(CatalogError):
    status_code = 503
    error_type = "StoreUnavailable"


_STORE_FAILURES = (
    OperationalError,
    InterfaceError,
    DisconnectionError,
    PoolTimeoutError,
    OSError,
    asyncio.TimeoutError,
)


@contextmanager
def store_errors():
    """Translate driver/connection failures raised inside the block into StoreUnavailable."""
    try:
        yield
    except _STORE_FAILURES as e:
        logger.warning(f"Entity store unavailable: {e}")
        raise StoreUnavailable(f"Entity store unavailable: {e}") from e
