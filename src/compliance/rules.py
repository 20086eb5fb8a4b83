"""Usage compliance classification.

Every usage edge gets exactly one status, decided by the team's
technology-level approval of the technology it uses:

    no approval            -> unapproved
    invest / tolerate      -> compliant
    migrate                -> migration-needed
    eliminate              -> violation
    anything else          -> unknown
"""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Iterable, List, Optional

from src.approvals.models import Disposition
from src.compliance.schemas import (
    ComplianceReport,
    ComplianceSummary,
    ComplianceViolation,
    TeamViolationSummary,
    TechnologyUsage,
    UsageCounts,
    UsageSummary,
)


class ComplianceStatus(str, Enum):
    COMPLIANT = "compliant"
    UNAPPROVED = "unapproved"
    MIGRATION_NEEDED = "migration-needed"
    VIOLATION = "violation"
    UNKNOWN = "unknown"


class ViolationType(str, Enum):
    UNAPPROVED = "unapproved"
    ELIMINATED = "eliminated"


_STATUS_BY_DISPOSITION = {
    Disposition.INVEST.value: ComplianceStatus.COMPLIANT,
    Disposition.TOLERATE.value: ComplianceStatus.COMPLIANT,
    Disposition.MIGRATE.value: ComplianceStatus.MIGRATION_NEEDED,
    Disposition.ELIMINATE.value: ComplianceStatus.VIOLATION,
}


@dataclass(frozen=True)
class UsageRecord:
    """One USES edge joined with the team's technology-level approval, if any."""
    technology: str
    has_approval: bool
    approval_time: Optional[str] = None
    category: Optional[str] = None
    vendor: Optional[str] = None
    system_count: Optional[int] = None
    first_used: Optional[date] = None
    last_verified: Optional[date] = None
    approval_notes: Optional[str] = None
    migration_target: Optional[str] = None
    team: Optional[str] = None
    systems: List[str] = field(default_factory=list)


def classify_usage(has_approval: bool, time: Optional[str]) -> ComplianceStatus:
    if not has_approval:
        return ComplianceStatus.UNAPPROVED
    return _STATUS_BY_DISPOSITION.get(time, ComplianceStatus.UNKNOWN)


def _by_reach(system_count: int, *names: str) -> tuple:
    # Widest-used first, then alphabetical
    return (-system_count,) + names


def summarize_usage(team: str, records: Iterable[UsageRecord]) -> UsageSummary:
    usage = [
        TechnologyUsage(
            technology=record.technology,
            category=record.category,
            vendor=record.vendor,
            system_count=record.system_count or 0,
            first_used=record.first_used,
            last_verified=record.last_verified,
            approval_status=record.approval_time if record.has_approval else None,
            compliance_status=classify_usage(record.has_approval, record.approval_time).value,
        )
        for record in records
    ]
    usage.sort(key=lambda u: _by_reach(u.system_count, u.technology))

    def count(status: ComplianceStatus) -> int:
        return sum(1 for u in usage if u.compliance_status == status.value)

    return UsageSummary(
        team=team,
        usage=usage,
        summary=UsageCounts(
            total_technologies=len(usage),
            compliant=count(ComplianceStatus.COMPLIANT),
            unapproved=count(ComplianceStatus.UNAPPROVED),
            violations=count(ComplianceStatus.VIOLATION),
            migration_needed=count(ComplianceStatus.MIGRATION_NEEDED),
        ),
    )


def violation_type(record: UsageRecord) -> Optional[ViolationType]:
    """Why a usage shows up in the compliance report, or None when it does not."""
    if not record.has_approval:
        return ViolationType.UNAPPROVED
    if record.approval_time == Disposition.ELIMINATE.value:
        return ViolationType.ELIMINATED
    return None


def build_compliance_report(records: Iterable[UsageRecord]) -> ComplianceReport:
    violations: List[ComplianceViolation] = []
    for record in records:
        kind = violation_type(record)
        if kind is None:
            continue
        violations.append(
            ComplianceViolation(
                team=record.team,
                technology=record.technology,
                category=record.category,
                system_count=record.system_count or 0,
                systems=sorted(record.systems),
                violation_type=kind.value,
                notes=record.approval_notes,
                migration_target=record.migration_target,
            )
        )
    violations.sort(key=lambda v: _by_reach(v.system_count, v.team, v.technology))

    by_team: Dict[str, TeamViolationSummary] = {}
    for v in violations:
        entry = by_team.setdefault(v.team, TeamViolationSummary(team=v.team))
        entry.violation_count += 1
        entry.systems_affected += v.system_count

    return ComplianceReport(
        violations=violations,
        summary=ComplianceSummary(
            total_violations=len(violations),
            teams_affected=len(by_team),
            by_team=list(by_team.values()),
        ),
    )
