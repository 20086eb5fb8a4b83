from fastapi import APIRouter

from src.approvals.router import router as approvals_router
from src.policies.router import router as policies_router
from src.teams.router import router as teams_router
from src.compliance.router import router as compliance_router
from src.routes.v1.status import router as status_router

api_router = APIRouter()

api_router.include_router(approvals_router)
api_router.include_router(policies_router)
api_router.include_router(teams_router)
api_router.include_router(compliance_router)
api_router.include_router(status_router)
