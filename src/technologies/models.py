from sqlalchemy import Column, String, ForeignKey, Boolean, Date, Float, UniqueConstraint
from sqlalchemy.orm import relationship
from src.database import Base
from src.shared.models import AuditMixin


class Technology(Base, AuditMixin):
    __tablename__ = "technologies"

    name = Column(String, unique=True, nullable=False, index=True)
    category = Column(String, nullable=True)  # e.g. "language" | "framework" | "library" | "database"
    vendor = Column(String, nullable=True)
    risk_level = Column(String, nullable=True)
    approved_version_range = Column(String, nullable=True)
    last_reviewed = Column(Date, nullable=True)

    # HAS_VERSION
    versions = relationship("Version", back_populates="technology", cascade="all, delete-orphan")


class Version(Base, AuditMixin):
    __tablename__ = "versions"
    __table_args__ = (
        UniqueConstraint("technology_id", "version", name="uq_versions_technology_version"),
    )

    technology_id = Column(ForeignKey("technologies.id"), nullable=False, index=True)
    version = Column(String, nullable=False)
    release_date = Column(Date, nullable=True)
    eol_date = Column(Date, nullable=True)
    approved = Column(Boolean, default=False, nullable=False)
    cvss_score = Column(Float, nullable=True)

    technology = relationship("Technology", back_populates="versions")
