from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.compliance.schemas import ComplianceReport
from src.compliance.service import ComplianceService
from src.shared.schemas import ApiResponse

router = APIRouter(prefix="/compliance", tags=["compliance"])


@router.get("/violations", response_model=ApiResponse[ComplianceReport])
async def list_compliance_violations(db: AsyncSession = Depends(get_db)):
    """Teams using technologies without approval or approved only for elimination."""
    service = ComplianceService(db)
    report = await service.compliance_report()
    return ApiResponse[ComplianceReport](data=report)
