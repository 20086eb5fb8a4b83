from sqlalchemy import Column, String, ForeignKey, Integer, Date, UniqueConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.shared.models import AuditMixin
from src.technologies.models import Technology


class Team(Base, AuditMixin):
    __tablename__ = "teams"

    name = Column(String, unique=True, nullable=False, index=True)
    email = Column(String, nullable=True)
    responsibility_area = Column(String, nullable=True)

    usages = relationship("TeamTechnologyUsage", back_populates="team", cascade="all, delete-orphan")


class TeamTechnologyUsage(Base, AuditMixin):
    """USES edge: a team's use of a technology across the systems it runs."""
    __tablename__ = "team_technology_usage"
    __table_args__ = (
        UniqueConstraint("team_id", "technology_id", name="uq_usage_team_technology"),
    )

    team_id = Column(ForeignKey("teams.id"), nullable=False, index=True)
    technology_id = Column(ForeignKey("technologies.id"), nullable=False, index=True)
    system_count = Column(Integer, nullable=True)
    first_used = Column(Date, nullable=True)
    last_verified = Column(Date, nullable=True)

    team = relationship("Team", back_populates="usages")
    technology = relationship(Technology)
