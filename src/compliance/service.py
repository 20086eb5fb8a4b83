import logging
from collections import defaultdict
from typing import Dict, List, Tuple
from uuid import UUID
from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.approvals.models import TechnologyApproval
from src.compliance.rules import UsageRecord, build_compliance_report, summarize_usage
from src.compliance.schemas import ComplianceReport, UsageSummary
from src.shared.exceptions import store_errors
from src.systems.models import Component, System, system_components
from src.teams.models import Team, TeamTechnologyUsage
from src.technologies.models import Technology

logger = logging.getLogger(__name__)


class ComplianceService:
    def __init__(self, db: AsyncSession):
        self.db = db

    def _usage_query(self):
        return (
            select(
                Team.id.label("team_id"),
                Team.name.label("team"),
                Technology.id.label("technology_id"),
                Technology.name.label("technology"),
                Technology.category,
                Technology.vendor,
                TeamTechnologyUsage.system_count,
                TeamTechnologyUsage.first_used,
                TeamTechnologyUsage.last_verified,
                TechnologyApproval.id.label("approval_id"),
                TechnologyApproval.time,
                TechnologyApproval.notes,
                TechnologyApproval.migration_target,
            )
            .select_from(TeamTechnologyUsage)
            .join(Team, Team.id == TeamTechnologyUsage.team_id)
            .join(Technology, Technology.id == TeamTechnologyUsage.technology_id)
            .outerjoin(
                TechnologyApproval,
                and_(
                    TechnologyApproval.team_id == Team.id,
                    TechnologyApproval.technology_id == Technology.id,
                ),
            )
        )

    async def summarize_usage(self, team: str) -> UsageSummary:
        """
        A team's technology usage classified against its technology-level
        approvals. An unknown team simply has no usage.
        """
        with store_errors():
            result = await self.db.execute(self._usage_query().where(Team.name == team))
        records = [
            UsageRecord(
                team=row.team,
                technology=row.technology,
                category=row.category,
                vendor=row.vendor,
                system_count=row.system_count,
                first_used=row.first_used,
                last_verified=row.last_verified,
                has_approval=row.approval_id is not None,
                approval_time=row.time,
            )
            for row in result.all()
        ]
        summary = summarize_usage(team, records)
        logger.debug(f"Usage summary for {team}: {summary.summary.model_dump()}")
        return summary

    async def _systems_by_usage(self) -> Dict[Tuple[UUID, UUID], List[str]]:
        """Names of systems each team owns that run a component of each technology."""
        with store_errors():
            result = await self.db.execute(
                select(System.owner_team_id, Component.technology_id, System.name)
                .join(system_components, system_components.c.system_id == System.id)
                .join(Component, Component.id == system_components.c.component_id)
                .where(System.owner_team_id.is_not(None), Component.technology_id.is_not(None))
                .distinct()
            )
        systems: Dict[Tuple[UUID, UUID], List[str]] = defaultdict(list)
        for team_id, technology_id, system_name in result.all():
            systems[(team_id, technology_id)].append(system_name)
        return systems

    async def compliance_report(self) -> ComplianceReport:
        """Organization-wide usages that are unapproved or approved for elimination."""
        with store_errors():
            result = await self.db.execute(self._usage_query())
        rows = result.all()
        systems = await self._systems_by_usage() if rows else {}

        records = [
            UsageRecord(
                team=row.team,
                technology=row.technology,
                category=row.category,
                system_count=row.system_count,
                has_approval=row.approval_id is not None,
                approval_time=row.time,
                approval_notes=row.notes,
                migration_target=row.migration_target,
                systems=systems.get((row.team_id, row.technology_id), []),
            )
            for row in rows
        ]
        report = build_compliance_report(records)
        logger.debug(
            f"Compliance report: {report.summary.total_violations} violations "
            f"across {report.summary.teams_affected} teams"
        )
        return report
