from typing import Literal
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.health import ping_database
from src.database import get_db
from src.shared.exceptions import CatalogError
from src.shared.schemas import CamelModel

router = APIRouter(tags=["status"])


class DatabaseStatus(CamelModel):
    status: Literal["online", "offline"]
    message: str


@router.get("/db-status", response_model=DatabaseStatus)
async def database_status(db: AsyncSession = Depends(get_db)):
    """Store connectivity for dashboards. Always 200; the outcome is in ``status``."""
    try:
        await ping_database(db)
    except CatalogError as e:
        return DatabaseStatus(status="offline", message=e.message)
    return DatabaseStatus(status="online", message="Database connection successful")
