from sqlalchemy import Column, String, ForeignKey, Table
from sqlalchemy.orm import relationship
from src.database import Base
from src.shared.models import AuditMixin
from src.teams.models import Team
from src.technologies.models import Technology

# USES: System -> Component
system_components = Table(
    "system_components",
    Base.metadata,
    Column("system_id", ForeignKey("systems.id"), primary_key=True),
    Column("component_id", ForeignKey("components.id"), primary_key=True),
)


class System(Base, AuditMixin):
    __tablename__ = "systems"

    name = Column(String, unique=True, nullable=False, index=True)
    description = Column(String, nullable=True)
    # OWNS: Team -> System
    owner_team_id = Column(ForeignKey("teams.id"), nullable=True, index=True)

    owner = relationship(Team)
    components = relationship("Component", secondary=system_components)


class Component(Base, AuditMixin):
    """SBOM entry. ``technology_id`` is the IS_VERSION_OF link once the component has been mapped."""
    __tablename__ = "components"

    name = Column(String, nullable=False, index=True)
    version = Column(String, nullable=True)
    purl = Column(String, nullable=True)
    technology_id = Column(ForeignKey("technologies.id"), nullable=True, index=True)

    technology = relationship(Technology)
