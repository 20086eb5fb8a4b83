import logging
from collections import defaultdict
from typing import Dict, List, Optional
from uuid import UUID
from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.approvals.models import TechnologyApproval
from src.policies.models import Policy, policy_enforcers, policy_subjects, policy_technologies
from src.policies.rules import GovernedUsage, ViolationFilters, evaluate_violations
from src.policies.schemas import SubjectPolicy, TeamPolicies, TeamPolicy, ViolationReport
from src.shared.exceptions import store_errors
from src.teams.models import Team, TeamTechnologyUsage
from src.teams.service import TeamService
from src.technologies.models import Technology

logger = logging.getLogger(__name__)


class PolicyService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _enforcers_by_policy(self, policy_ids: Optional[List[UUID]] = None) -> Dict[UUID, str]:
        """Enforcing team per policy; the alphabetically first when several teams enforce it."""
        stmt = (
            select(policy_enforcers.c.policy_id, Team.name)
            .join(Team, Team.id == policy_enforcers.c.team_id)
            .order_by(Team.name)
        )
        if policy_ids is not None:
            stmt = stmt.where(policy_enforcers.c.policy_id.in_(policy_ids))
        with store_errors():
            result = await self.db.execute(stmt)
        enforcers: Dict[UUID, str] = {}
        for policy_id, team_name in result.all():
            enforcers.setdefault(policy_id, team_name)
        return enforcers

    async def _governed_usages(self, filters: ViolationFilters) -> List[GovernedUsage]:
        """Usage edges of teams subject to a policy governing the used technology."""
        stmt = (
            select(
                Team.name.label("team"),
                Technology.name.label("technology"),
                Technology.category,
                Technology.risk_level,
                Policy.id.label("policy_id"),
                Policy.name.label("policy_name"),
                Policy.description,
                Policy.severity,
                Policy.rule_type,
                Policy.status,
                TechnologyApproval.id.label("approval_id"),
            )
            .select_from(TeamTechnologyUsage)
            .join(Team, Team.id == TeamTechnologyUsage.team_id)
            .join(Technology, Technology.id == TeamTechnologyUsage.technology_id)
            .join(policy_technologies, policy_technologies.c.technology_id == Technology.id)
            .join(Policy, Policy.id == policy_technologies.c.policy_id)
            .join(
                policy_subjects,
                and_(
                    policy_subjects.c.policy_id == Policy.id,
                    policy_subjects.c.team_id == Team.id,
                ),
            )
            .outerjoin(
                TechnologyApproval,
                and_(
                    TechnologyApproval.team_id == Team.id,
                    TechnologyApproval.technology_id == Technology.id,
                ),
            )
        )
        if filters.team:
            stmt = stmt.where(Team.name == filters.team)
        if filters.technology:
            stmt = stmt.where(Technology.name == filters.technology)
        if filters.severity:
            stmt = stmt.where(Policy.severity == filters.severity)
        with store_errors():
            result = await self.db.execute(stmt)
        rows = result.all()

        enforcers = await self._enforcers_by_policy(list({row.policy_id for row in rows})) if rows else {}
        return [
            GovernedUsage(
                team=row.team,
                technology=row.technology,
                technology_category=row.category,
                risk_level=row.risk_level,
                policy_name=row.policy_name,
                policy_description=row.description,
                severity=row.severity,
                rule_type=row.rule_type,
                policy_status=row.status,
                has_approval=row.approval_id is not None,
                enforced_by=enforcers.get(row.policy_id),
            )
            for row in rows
        ]

    async def find_violations(self, filters: Optional[ViolationFilters] = None) -> ViolationReport:
        """
        Policy violations across the organization, ranked by severity
        (critical first), then team, then technology.
        """
        filters = filters or ViolationFilters()
        usages = await self._governed_usages(filters)
        report = evaluate_violations(usages, filters)
        logger.debug(
            f"Evaluated {len(usages)} governed usages against {filters}: "
            f"{len(report.violations)} violations"
        )
        return report

    async def list_team_policies(self, team: str) -> TeamPolicies:
        """Policies a team enforces and policies it is subject to."""
        team_row = await TeamService(self.db).get_team(team)

        with store_errors():
            enforced_result = await self.db.execute(
                select(Policy)
                .join(policy_enforcers, policy_enforcers.c.policy_id == Policy.id)
                .where(policy_enforcers.c.team_id == team_row.id)
            )
            subject_result = await self.db.execute(
                select(Policy)
                .join(policy_subjects, policy_subjects.c.policy_id == Policy.id)
                .where(policy_subjects.c.team_id == team_row.id)
            )
        enforced_rows = list(enforced_result.scalars().all())
        subject_rows = list(subject_result.scalars().all())

        policy_ids = list({p.id for p in enforced_rows + subject_rows})
        governed = await self._governed_technologies(policy_ids)
        enforcers = await self._enforcers_by_policy(policy_ids) if policy_ids else {}

        enforced = [
            TeamPolicy(
                name=p.name,
                description=p.description,
                rule_type=p.rule_type,
                severity=p.severity,
                effective_date=p.effective_date,
                expiry_date=p.expiry_date,
                scope=p.scope,
                status=p.status,
                governed_technologies=governed.get(p.id, []),
            )
            for p in _newest_first(enforced_rows)
        ]
        subject_to = [
            SubjectPolicy(
                name=p.name,
                description=p.description,
                rule_type=p.rule_type,
                severity=p.severity,
                effective_date=p.effective_date,
                expiry_date=p.expiry_date,
                scope=p.scope,
                status=p.status,
                governed_technologies=governed.get(p.id, []),
                enforced_by=enforcers.get(p.id),
            )
            for p in _newest_first(subject_rows)
        ]

        return TeamPolicies(
            team=team_row.name,
            enforced=enforced,
            subject_to=subject_to,
            enforced_count=len(enforced),
            subject_to_count=len(subject_to),
        )

    async def _governed_technologies(self, policy_ids: List[UUID]) -> Dict[UUID, List[str]]:
        if not policy_ids:
            return {}
        with store_errors():
            result = await self.db.execute(
                select(policy_technologies.c.policy_id, Technology.name)
                .join(Technology, Technology.id == policy_technologies.c.technology_id)
                .where(policy_technologies.c.policy_id.in_(policy_ids))
                .order_by(Technology.name)
            )
        governed: Dict[UUID, List[str]] = defaultdict(list)
        for policy_id, technology_name in result.all():
            governed[policy_id].append(technology_name)
        return governed


def _newest_first(policies: List[Policy]) -> List[Policy]:
    """Most recent effective date first; undated policies last; ties by name."""
    ordered = sorted(policies, key=lambda p: p.name)
    dated = [p for p in ordered if p.effective_date is not None]
    undated = [p for p in ordered if p.effective_date is None]
    dated.sort(key=lambda p: p.effective_date, reverse=True)
    return dated + undated
