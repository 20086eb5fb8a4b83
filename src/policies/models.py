from sqlalchemy import Column, String, ForeignKey, Date, Table
from sqlalchemy.orm import relationship
from src.database import Base
from src.shared.models import AuditMixin
from src.teams.models import Team
from src.technologies.models import Technology

ACTIVE_POLICY_STATUS = "active"

# GOVERNS: Policy -> Technology
policy_technologies = Table(
    "policy_technologies",
    Base.metadata,
    Column("policy_id", ForeignKey("policies.id"), primary_key=True),
    Column("technology_id", ForeignKey("technologies.id"), primary_key=True),
)

# ENFORCES: Team -> Policy
policy_enforcers = Table(
    "policy_enforcers",
    Base.metadata,
    Column("policy_id", ForeignKey("policies.id"), primary_key=True),
    Column("team_id", ForeignKey("teams.id"), primary_key=True),
)

# SUBJECT_TO: Team -> Policy
policy_subjects = Table(
    "policy_subjects",
    Base.metadata,
    Column("policy_id", ForeignKey("policies.id"), primary_key=True),
    Column("team_id", ForeignKey("teams.id"), primary_key=True),
)


class Policy(Base, AuditMixin):
    __tablename__ = "policies"

    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(String, nullable=True)
    rule_type = Column(String, nullable=True)  # e.g. "approval" | "deprecation" | "security"
    severity = Column(String, nullable=False)  # critical | error | warning | info
    effective_date = Column(Date, nullable=True)
    expiry_date = Column(Date, nullable=True)
    scope = Column(String, nullable=True)  # organization | domain | team
    status = Column(String, default=ACTIVE_POLICY_STATUS, nullable=False)

    technologies = relationship(Technology, secondary=policy_technologies)
    enforcers = relationship(Team, secondary=policy_enforcers)
    subjects = relationship(Team, secondary=policy_subjects)
