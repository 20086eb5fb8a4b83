from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.approvals.schemas import TeamApprovals
from src.approvals.service import ApprovalService
from src.compliance.schemas import UsageSummary
from src.compliance.service import ComplianceService
from src.policies.schemas import TeamPolicies
from src.policies.service import PolicyService
from src.shared.schemas import ApiResponse

router = APIRouter(prefix="/teams", tags=["teams"])


@router.get("/{name}/usage", response_model=ApiResponse[UsageSummary])
async def get_team_usage(name: str, db: AsyncSession = Depends(get_db)):
    """Technologies a team uses, with usage statistics and compliance status."""
    service = ComplianceService(db)
    summary = await service.summarize_usage(name)
    return ApiResponse[UsageSummary](data=summary)


@router.get("/{name}/approvals", response_model=ApiResponse[TeamApprovals])
async def get_team_approvals(name: str, db: AsyncSession = Depends(get_db)):
    service = ApprovalService(db)
    approvals = await service.list_team_approvals(name)
    return ApiResponse[TeamApprovals](data=approvals)


@router.get("/{name}/policies", response_model=ApiResponse[TeamPolicies])
async def get_team_policies(name: str, db: AsyncSession = Depends(get_db)):
    """Policies the team enforces and policies it is subject to."""
    service = PolicyService(db)
    policies = await service.list_team_policies(name)
    return ApiResponse[TeamPolicies](data=policies)
