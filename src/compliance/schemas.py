from datetime import date
from typing import List, Optional

from src.shared.schemas import CamelModel


class TechnologyUsage(CamelModel):
    technology: str
    category: Optional[str] = None
    vendor: Optional[str] = None
    system_count: int = 0
    first_used: Optional[date] = None
    last_verified: Optional[date] = None
    approval_status: Optional[str] = None
    compliance_status: str


class UsageCounts(CamelModel):
    total_technologies: int = 0
    compliant: int = 0
    unapproved: int = 0
    violations: int = 0
    migration_needed: int = 0


class UsageSummary(CamelModel):
    team: str
    usage: List[TechnologyUsage] = []
    summary: UsageCounts


class ComplianceViolation(CamelModel):
    team: str
    technology: str
    category: Optional[str] = None
    system_count: int = 0
    systems: List[str] = []
    violation_type: str
    notes: Optional[str] = None
    migration_target: Optional[str] = None


class TeamViolationSummary(CamelModel):
    team: str
    violation_count: int = 0
    systems_affected: int = 0


class ComplianceSummary(CamelModel):
    total_violations: int = 0
    teams_affected: int = 0
    by_team: List[TeamViolationSummary] = []


class ComplianceReport(CamelModel):
    violations: List[ComplianceViolation] = []
    summary: ComplianceSummary
