"""Approval precedence.

For one (team, technology[, version]) exactly one approval is effective:

1. the team's APPROVES edge on the requested version,
2. otherwise the team's APPROVES edge on the technology,
3. otherwise a synthetic ``default`` record with disposition ``eliminate``.

A version-level edge always wins over a technology-level edge for the same
team, whatever their dates or dispositions. Missing approval never means
permission.
"""
from typing import Any, Optional

from src.approvals.schemas import (
    DefaultApproval,
    EffectiveApproval,
    TechnologyLevelApproval,
    VersionLevelApproval,
)


def resolve_effective_approval(
    version_approval: Optional[Any],
    technology_approval: Optional[Any],
) -> EffectiveApproval:
    """Pick the effective approval from the candidate edges.

    Both arguments are APPROVES records (ORM rows or any object exposing the
    approval attributes) or None when the edge does not exist.
    """
    if version_approval is not None:
        return VersionLevelApproval.model_validate(version_approval)
    if technology_approval is not None:
        return TechnologyLevelApproval.model_validate(technology_approval)
    return DefaultApproval()
