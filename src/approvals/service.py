import logging
from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.approvals.models import TechnologyApproval, VersionApproval
from src.approvals.resolution import resolve_effective_approval
from src.approvals.schemas import (
    ApprovalResult,
    TeamApprovals,
    TeamTechnologyApproval,
    TeamVersionApproval,
)
from src.shared.exceptions import InvalidInput, store_errors
from src.teams.service import TeamService
from src.technologies.models import Technology, Version
from src.technologies.service import TechnologyService

logger = logging.getLogger(__name__)


class ApprovalService:
    def __init__(self, db: AsyncSession):
        self.db = db
        self.teams = TeamService(db)
        self.technologies = TechnologyService(db)

    async def _get_version_approval(self, team_id: UUID, version_id: UUID) -> Optional[VersionApproval]:
        with store_errors():
            result = await self.db.execute(
                select(VersionApproval).where(
                    VersionApproval.team_id == team_id,
                    VersionApproval.version_id == version_id,
                )
            )
        return result.scalar_one_or_none()

    async def _get_technology_approval(self, team_id: UUID, technology_id: UUID) -> Optional[TechnologyApproval]:
        with store_errors():
            result = await self.db.execute(
                select(TechnologyApproval).where(
                    TechnologyApproval.team_id == team_id,
                    TechnologyApproval.technology_id == technology_id,
                )
            )
        return result.scalar_one_or_none()

    async def resolve_approval(
        self, team: Optional[str], technology: Optional[str], version: Optional[str] = None
    ) -> ApprovalResult:
        """
        Resolve the effective approval of a technology (optionally a specific
        version) for a team: version-level, then technology-level, then the
        restricted default.
        """
        if not team or not team.strip() or not technology or not technology.strip():
            raise InvalidInput("Team and technology parameters are required")

        team_row = await self.teams.get_team(team)
        tech_row = await self.technologies.get_technology(technology)

        # An unknown version is not an error: resolution falls through to the technology level
        version_row = await self.technologies.find_version(tech_row.id, version) if version else None

        version_approval = None
        if version_row is not None:
            version_approval = await self._get_version_approval(team_row.id, version_row.id)

        technology_approval = None
        if version_approval is None:
            technology_approval = await self._get_technology_approval(team_row.id, tech_row.id)

        approval = resolve_effective_approval(version_approval, technology_approval)
        logger.debug(f"Resolved {team}/{technology}@{version}: level={approval.level} time={approval.time}")

        return ApprovalResult(
            team=team_row.name,
            technology=tech_row.name,
            category=tech_row.category,
            vendor=tech_row.vendor,
            version=version_row.version if version_row is not None else None,
            approval=approval,
        )

    async def list_team_approvals(self, team: str) -> TeamApprovals:
        """Every technology-level and version-level approval held by a team."""
        team_row = await self.teams.get_team(team)

        with store_errors():
            tech_result = await self.db.execute(
                select(TechnologyApproval, Technology)
                .join(Technology, Technology.id == TechnologyApproval.technology_id)
                .where(TechnologyApproval.team_id == team_row.id)
                .order_by(Technology.name)
            )
            version_result = await self.db.execute(
                select(VersionApproval, Version, Technology)
                .join(Version, Version.id == VersionApproval.version_id)
                .join(Technology, Technology.id == Version.technology_id)
                .where(VersionApproval.team_id == team_row.id)
                .order_by(Technology.name, Version.version)
            )

        technology_approvals = [
            TeamTechnologyApproval(
                technology=tech.name,
                category=tech.category,
                vendor=tech.vendor,
                time=approval.time,
                approved_at=approval.approved_at,
                deprecated_at=approval.deprecated_at,
                eol_date=approval.eol_date,
                migration_target=approval.migration_target,
                notes=approval.notes,
                approved_by=approval.approved_by,
                version_constraint=approval.version_constraint,
            )
            for approval, tech in tech_result.all()
        ]
        version_approvals = [
            TeamVersionApproval(
                technology=tech.name,
                version=ver.version,
                category=tech.category,
                vendor=tech.vendor,
                time=approval.time,
                approved_at=approval.approved_at,
                deprecated_at=approval.deprecated_at,
                eol_date=approval.eol_date,
                migration_target=approval.migration_target,
                notes=approval.notes,
                approved_by=approval.approved_by,
            )
            for approval, ver, tech in version_result.all()
        ]

        return TeamApprovals(
            team=team_row.name,
            technology_approvals=technology_approvals,
            version_approvals=version_approvals,
        )
