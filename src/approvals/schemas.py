from datetime import date, datetime
from typing import Annotated, List, Literal, Optional, Union
from pydantic import Field

from src.approvals.models import Disposition
from src.shared.schemas import CamelModel

DEFAULT_APPROVAL_NOTE = "No explicit approval found for this team"


class ApprovalAttributes(CamelModel):
    time: str
    approved_at: Optional[datetime] = None
    deprecated_at: Optional[date] = None
    eol_date: Optional[date] = None
    migration_target: Optional[str] = None
    notes: Optional[str] = None
    approved_by: Optional[str] = None


class VersionLevelApproval(ApprovalAttributes):
    level: Literal["version"] = "version"


class TechnologyLevelApproval(ApprovalAttributes):
    level: Literal["technology"] = "technology"
    version_constraint: Optional[str] = None


class DefaultApproval(CamelModel):
    """Synthetic record used when the team holds no approval at all: restricted by default."""
    level: Literal["default"] = "default"
    time: Literal["eliminate"] = Disposition.ELIMINATE.value
    notes: str = DEFAULT_APPROVAL_NOTE


EffectiveApproval = Annotated[
    Union[VersionLevelApproval, TechnologyLevelApproval, DefaultApproval],
    Field(discriminator="level"),
]


class ApprovalResult(CamelModel):
    team: str
    technology: str
    category: Optional[str] = None
    vendor: Optional[str] = None
    version: Optional[str] = None
    approval: EffectiveApproval


class TeamTechnologyApproval(ApprovalAttributes):
    technology: str
    category: Optional[str] = None
    vendor: Optional[str] = None
    version_constraint: Optional[str] = None


class TeamVersionApproval(ApprovalAttributes):
    technology: str
    version: str
    category: Optional[str] = None
    vendor: Optional[str] = None


class TeamApprovals(CamelModel):
    team: str
    technology_approvals: List[TeamTechnologyApproval] = []
    version_approvals: List[TeamVersionApproval] = []
