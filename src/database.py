from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from src.config import settings


def _make_engine():
    # SQLite (tests, local runs) needs a single shared connection for in-memory databases
    if settings.SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        return create_async_engine(
            settings.SQLALCHEMY_DATABASE_URI,
            echo=settings.DB_ECHO,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(settings.SQLALCHEMY_DATABASE_URI, echo=settings.DB_ECHO, pool_pre_ping=True)


engine = _make_engine()
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)

Base = declarative_base()

# Dependency
async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()
