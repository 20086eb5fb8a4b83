import logging
from datetime import datetime, timezone
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.exceptions import StoreUnavailable, store_errors

logger = logging.getLogger(__name__)


async def ping_database(db: AsyncSession) -> None:
    """Round-trip ``SELECT 1``; raises StoreUnavailable when the store cannot answer."""
    with store_errors():
        result = await db.execute(text("SELECT 1"))
    if result.scalar() != 1:
        raise StoreUnavailable("Database query returned no results")


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()
