from enum import Enum
from sqlalchemy import Column, String, ForeignKey, Date, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.shared.models import AuditMixin
from src.teams.models import Team
from src.technologies.models import Technology, Version


class Disposition(str, Enum):
    """A team's stance on continued use of a technology (the APPROVES ``time`` value)."""
    INVEST = "invest"
    TOLERATE = "tolerate"
    MIGRATE = "migrate"
    ELIMINATE = "eliminate"


class ApprovalAttributesMixin:
    # Stored as free text so that values outside Disposition survive and can be reported as such
    time = Column(String, nullable=False)
    approved_at = Column(DateTime, nullable=True)
    deprecated_at = Column(Date, nullable=True)
    eol_date = Column(Date, nullable=True)
    migration_target = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    approved_by = Column(String, nullable=True)


class TechnologyApproval(Base, AuditMixin, ApprovalAttributesMixin):
    """APPROVES edge from a team to a whole technology."""
    __tablename__ = "technology_approvals"
    __table_args__ = (
        UniqueConstraint("team_id", "technology_id", name="uq_technology_approvals_team_technology"),
    )

    team_id = Column(ForeignKey("teams.id"), nullable=False, index=True)
    technology_id = Column(ForeignKey("technologies.id"), nullable=False, index=True)
    version_constraint = Column(String, nullable=True)  # e.g. ">=11 <21"

    team = relationship(Team)
    technology = relationship(Technology)


class VersionApproval(Base, AuditMixin, ApprovalAttributesMixin):
    """APPROVES edge from a team to one specific version of a technology."""
    __tablename__ = "version_approvals"
    __table_args__ = (
        UniqueConstraint("team_id", "version_id", name="uq_version_approvals_team_version"),
    )

    team_id = Column(ForeignKey("teams.id"), nullable=False, index=True)
    version_id = Column(ForeignKey("versions.id"), nullable=False, index=True)

    team = relationship(Team)
    version = relationship(Version)
