import asyncio
from datetime import date, datetime
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.database import AsyncSessionLocal
from src.approvals.models import Disposition, TechnologyApproval, VersionApproval
from src.policies.models import Policy
from src.policies.severity import Severity
from src.systems.models import Component, System
from src.teams.models import Team, TeamTechnologyUsage
from src.technologies.models import Technology, Version


async def seed_catalog(session: AsyncSession) -> bool:
    """
    Demo catalog: three teams, four technologies, two policies and one system.
    Returns False without touching anything when the catalog is already seeded.
    """
    existing = await session.execute(select(Team).where(Team.name == "Backend Team"))
    if existing.scalar_one_or_none():
        return False

    backend = Team(name="Backend Team", email="backend@example.com", responsibility_area="APIs and services")
    frontend = Team(name="Frontend Team", email="frontend@example.com", responsibility_area="Web applications")
    platform = Team(name="Platform Team", email="platform@example.com", responsibility_area="Runtime governance")

    java = Technology(name="Java", category="language", vendor="Oracle", risk_level="medium",
                      approved_version_range=">=11", last_reviewed=date(2025, 6, 1))
    java_8 = Version(version="8", release_date=date(2014, 3, 18), eol_date=date(2030, 12, 31), cvss_score=7.5)
    java_21 = Version(version="21", release_date=date(2023, 9, 19), approved=True)
    java.versions = [java_8, java_21]

    node = Technology(name="Node.js", category="runtime", vendor="OpenJS Foundation", risk_level="medium")
    node_16 = Version(version="16", release_date=date(2021, 4, 20), eol_date=date(2023, 9, 11), cvss_score=8.1)
    node.versions = [node_16]

    react = Technology(name="React", category="framework", vendor="Meta", risk_level="low")
    jquery = Technology(name="jQuery", category="library", vendor="OpenJS Foundation", risk_level="high")

    session.add_all([backend, frontend, platform, java, node, react, jquery])

    session.add_all([
        TechnologyApproval(team=backend, technology=java, time=Disposition.INVEST.value,
                           approved_at=datetime(2024, 1, 15, 9, 0), approved_by="architecture-board",
                           version_constraint=">=17"),
        VersionApproval(team=backend, version=java_21, time=Disposition.INVEST.value,
                        notes="Preferred LTS release"),
        TechnologyApproval(team=frontend, technology=java, time=Disposition.TOLERATE.value,
                           notes="Build tooling only"),
        TechnologyApproval(team=frontend, technology=react, time=Disposition.INVEST.value),
        TechnologyApproval(team=frontend, technology=jquery, time=Disposition.ELIMINATE.value,
                           notes="Migrate to modern framework", migration_target="React"),
    ])

    session.add_all([
        TeamTechnologyUsage(team=backend, technology=java, system_count=12,
                            first_used=date(2016, 2, 1), last_verified=date(2025, 10, 1)),
        TeamTechnologyUsage(team=frontend, technology=react, system_count=8,
                            first_used=date(2023, 1, 15), last_verified=date(2025, 10, 20)),
        TeamTechnologyUsage(team=frontend, technology=node, system_count=5),
        TeamTechnologyUsage(team=frontend, technology=jquery, system_count=3),
    ])

    session.add_all([
        Policy(
            name="no-eol-software",
            description="Software past its end-of-life date must not be used without approval",
            rule_type="lifecycle",
            severity=Severity.CRITICAL.value,
            effective_date=date(2025, 1, 1),
            scope="organization",
            technologies=[java, node],
            enforcers=[platform],
            subjects=[backend, frontend],
        ),
        Policy(
            name="approved-frameworks",
            description="Frontend frameworks need an explicit approval",
            rule_type="approval",
            severity=Severity.WARNING.value,
            effective_date=date(2024, 6, 1),
            scope="domain",
            technologies=[react, jquery],
            enforcers=[platform],
            subjects=[frontend],
        ),
    ])

    portal = System(name="web-portal", description="Customer web portal", owner=frontend)
    portal.components = [
        Component(name="node", version="16.20.2", purl="pkg:generic/node@16.20.2", technology=node),
        Component(name="jquery", version="3.6.0", purl="pkg:npm/jquery@3.6.0", technology=jquery),
    ]
    session.add(portal)

    await session.commit()
    return True


async def seed_data():
    async with AsyncSessionLocal() as session:
        if await seed_catalog(session):
            print("Seeding complete.")
        else:
            print("Catalog already seeded.")

if __name__ == "__main__":
    asyncio.run(seed_data())
