"""Policy violation rules.

A team's use of a technology is a violation of a policy when all of these
hold:

- the team USES the technology,
- the team has no APPROVES edge to the technology itself,
- the policy is active and GOVERNS the technology,
- the team is SUBJECT_TO the policy.

Only technology-level approval is considered. A version-level approval held
by the team does not clear the violation.

The store query supplies one ``GovernedUsage`` per (team, technology,
policy) where the USES, GOVERNS and SUBJECT_TO edges exist; everything
else is decided here.
"""
from dataclasses import dataclass
from typing import Iterable, List, Optional

from src.policies.models import ACTIVE_POLICY_STATUS
from src.policies.schemas import PolicyViolation, SeveritySummary, ViolatedPolicy, ViolationReport
from src.policies.severity import Severity, severity_rank


@dataclass(frozen=True)
class GovernedUsage:
    team: str
    technology: str
    policy_name: str
    severity: str
    policy_status: Optional[str]
    has_approval: bool
    technology_category: Optional[str] = None
    risk_level: Optional[str] = None
    policy_description: Optional[str] = None
    rule_type: Optional[str] = None
    enforced_by: Optional[str] = None


@dataclass(frozen=True)
class ViolationFilters:
    """Exact, case-sensitive match filters. None or empty means no filter."""
    severity: Optional[str] = None
    team: Optional[str] = None
    technology: Optional[str] = None


def is_violation(usage: GovernedUsage) -> bool:
    return not usage.has_approval and usage.policy_status == ACTIVE_POLICY_STATUS


def matches_filters(usage: GovernedUsage, filters: ViolationFilters) -> bool:
    if filters.severity and usage.severity != filters.severity:
        return False
    if filters.team and usage.team != filters.team:
        return False
    if filters.technology and usage.technology != filters.technology:
        return False
    return True


def violation_sort_key(violation: PolicyViolation) -> tuple:
    return (
        severity_rank(violation.policy.severity),
        violation.team,
        violation.technology,
        violation.policy.name,
    )


def summarize_by_severity(violations: Iterable[PolicyViolation]) -> SeveritySummary:
    counts = {severity.value: 0 for severity in Severity}
    for violation in violations:
        if violation.policy.severity in counts:
            counts[violation.policy.severity] += 1
    return SeveritySummary(**counts)


def _to_violation(usage: GovernedUsage) -> PolicyViolation:
    return PolicyViolation(
        team=usage.team,
        technology=usage.technology,
        technology_category=usage.technology_category,
        risk_level=usage.risk_level,
        policy=ViolatedPolicy(
            name=usage.policy_name,
            description=usage.policy_description,
            severity=usage.severity,
            rule_type=usage.rule_type,
            enforced_by=usage.enforced_by,
        ),
    )


def evaluate_violations(
    usages: Iterable[GovernedUsage], filters: Optional[ViolationFilters] = None
) -> ViolationReport:
    """Violations ranked for triage: severity, then team, then technology."""
    filters = filters or ViolationFilters()
    violations: List[PolicyViolation] = [
        _to_violation(usage)
        for usage in usages
        if is_violation(usage) and matches_filters(usage, filters)
    ]
    violations.sort(key=violation_sort_key)
    return ViolationReport(violations=violations, summary=summarize_by_severity(violations))
