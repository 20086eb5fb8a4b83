import logging
from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import get_db
from src.policies.rules import ViolationFilters
from src.policies.schemas import ViolationListResponse
from src.policies.service import PolicyService
from src.shared.exceptions import CatalogError
from src.shared.schemas import ErrorDetail

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/policies", tags=["policies"])


@router.get("/violations", response_model=ViolationListResponse)
async def list_policy_violations(
    severity: Optional[str] = None,
    team: Optional[str] = None,
    technology: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Teams using a technology they have not approved, where an active policy
    they are subject to governs that technology.

    This dashboard endpoint degrades to an empty result instead of failing:
    on any evaluation error it answers 200 with success=false, the error,
    no violations and an all-zero summary.
    """
    service = PolicyService(db)
    filters = ViolationFilters(severity=severity, team=team, technology=technology)
    try:
        report = await service.find_violations(filters)
    except CatalogError as e:
        logger.warning(f"Policy violations unavailable: {e.message}")
        return ViolationListResponse(success=False, error=ErrorDetail.from_exception(e))
    except Exception:
        logger.exception("Policy violation evaluation failed")
        return ViolationListResponse(
            success=False,
            error=ErrorDetail(type="InternalError", message="Failed to fetch policy violations"),
        )

    return ViolationListResponse(
        data=report.violations,
        count=len(report.violations),
        summary=report.summary,
    )
