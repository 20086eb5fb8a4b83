from datetime import date
from typing import List, Optional
from pydantic import Field

from src.shared.schemas import CamelModel, ErrorDetail


class ViolatedPolicy(CamelModel):
    name: str
    description: Optional[str] = None
    severity: str
    rule_type: Optional[str] = None
    enforced_by: Optional[str] = None


class PolicyViolation(CamelModel):
    team: str
    technology: str
    technology_category: Optional[str] = None
    risk_level: Optional[str] = None
    policy: ViolatedPolicy


class SeveritySummary(CamelModel):
    critical: int = 0
    error: int = 0
    warning: int = 0
    info: int = 0


class ViolationReport(CamelModel):
    violations: List[PolicyViolation] = []
    summary: SeveritySummary = Field(default_factory=SeveritySummary)


class ViolationListResponse(CamelModel):
    """Violations envelope. On failure it still carries an empty list and an all-zero summary."""
    success: bool = True
    data: List[PolicyViolation] = []
    count: int = 0
    summary: SeveritySummary = Field(default_factory=SeveritySummary)
    error: Optional[ErrorDetail] = None


class TeamPolicy(CamelModel):
    name: str
    description: Optional[str] = None
    rule_type: Optional[str] = None
    severity: str
    effective_date: Optional[date] = None
    expiry_date: Optional[date] = None
    scope: Optional[str] = None
    status: str
    governed_technologies: List[str] = []


class SubjectPolicy(TeamPolicy):
    enforced_by: Optional[str] = None


class TeamPolicies(CamelModel):
    team: str
    enforced: List[TeamPolicy] = []
    subject_to: List[SubjectPolicy] = []
    enforced_count: int = 0
    subject_to_count: int = 0
