import os

# Tests always run against a private in-memory SQLite database
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"

from typing import AsyncGenerator, Iterable, Optional
from unittest.mock import AsyncMock

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from src.main import app
from src.config import settings
from src.database import get_db, Base
from src.approvals.models import TechnologyApproval, VersionApproval
from src.policies.models import Policy
from src.systems.models import Component, System
from src.teams.models import Team, TeamTechnologyUsage
from src.technologies.models import Technology, Version


class CatalogBuilder:
    """Builds catalog graphs for a test, flushing after every node or edge."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _add(self, obj):
        self.session.add(obj)
        await self.session.flush()
        return obj

    async def team(self, name: str, **attrs) -> Team:
        return await self._add(Team(name=name, **attrs))

    async def technology(self, name: str, **attrs) -> Technology:
        return await self._add(Technology(name=name, **attrs))

    async def version(self, technology: Technology, version: str, **attrs) -> Version:
        return await self._add(Version(technology_id=technology.id, version=version, **attrs))

    async def approve(self, team: Team, technology: Technology, time: str, **attrs) -> TechnologyApproval:
        return await self._add(
            TechnologyApproval(team_id=team.id, technology_id=technology.id, time=time, **attrs)
        )

    async def approve_version(self, team: Team, version: Version, time: str, **attrs) -> VersionApproval:
        return await self._add(VersionApproval(team_id=team.id, version_id=version.id, time=time, **attrs))

    async def use(self, team: Team, technology: Technology, system_count: Optional[int] = None, **attrs):
        return await self._add(
            TeamTechnologyUsage(
                team_id=team.id, technology_id=technology.id, system_count=system_count, **attrs
            )
        )

    async def policy(
        self,
        name: str,
        severity: str,
        governs: Iterable[Technology] = (),
        subjects: Iterable[Team] = (),
        enforcers: Iterable[Team] = (),
        **attrs,
    ) -> Policy:
        return await self._add(
            Policy(
                name=name,
                severity=severity,
                technologies=list(governs),
                subjects=list(subjects),
                enforcers=list(enforcers),
                **attrs,
            )
        )

    async def system(self, name: str, owner: Team, components: Iterable[Technology] = ()) -> System:
        system = System(
            name=name,
            owner_team_id=owner.id,
            components=[
                Component(name=tech.name.lower(), version="1.0.0", technology_id=tech.id) for tech in components
            ],
        )
        return await self._add(system)


@pytest_asyncio.fixture(scope="function")
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database with the catalog schema for each test."""
    test_engine = create_async_engine(
        settings.SQLALCHEMY_DATABASE_URI,
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    TestingSessionLocal = sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )

    async with TestingSessionLocal() as session:
        yield session

    await test_engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def catalog(db_session: AsyncSession) -> CatalogBuilder:
    return CatalogBuilder(db_session)


@pytest_asyncio.fixture(scope="function")
async def async_client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Client for testing API endpoints."""
    # Override the get_db dependency to use our test session
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


def unreachable_store() -> AsyncMock:
    """A session whose every query fails the way a dropped database connection does."""
    session = AsyncMock(spec=AsyncSession)
    session.execute.side_effect = OperationalError(
        "SELECT 1", {}, ConnectionRefusedError("connection refused")
    )
    return session


@pytest_asyncio.fixture(scope="function")
async def offline_client() -> AsyncGenerator[AsyncClient, None]:
    """Client whose database dependency cannot reach the store."""
    session = unreachable_store()

    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def broken_client() -> AsyncGenerator[AsyncClient, None]:
    """Client whose session fails with an unexpected error on every query.

    Starlette re-raises unhandled errors after the 500 response is sent, so
    the transport is told not to propagate them.
    """
    session = AsyncMock(spec=AsyncSession)
    session.execute.side_effect = RuntimeError("cursor state corrupted")

    async def override_get_db():
        yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
