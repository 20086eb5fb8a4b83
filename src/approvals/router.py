from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.approvals.schemas import ApprovalResult
from src.approvals.service import ApprovalService
from src.shared.schemas import ApiResponse

router = APIRouter(prefix="/approvals", tags=["approvals"])


@router.get("/check", response_model=ApiResponse[ApprovalResult])
async def check_approval(
    team: Optional[str] = None,
    technology: Optional[str] = None,
    version: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Effective approval of a technology (or one of its versions) for a team.
    Version-level approval overrides technology-level approval, which
    overrides the restricted default.
    """
    service = ApprovalService(db)
    result = await service.resolve_approval(team, technology, version)
    return ApiResponse[ApprovalResult](data=result)
