import asyncio
import logging

from src.core.logging import configure_logging
from src.database import engine, Base

logger = logging.getLogger(__name__)


def load_models() -> None:
    """Import every model module so its tables are registered in Base.metadata."""
    import src.technologies.models  # noqa: F401
    import src.teams.models  # noqa: F401
    import src.approvals.models  # noqa: F401
    import src.policies.models  # noqa: F401
    import src.systems.models  # noqa: F401


async def init_models(drop: bool = False):
    load_models()
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created.")

if __name__ == "__main__":
    configure_logging()
    asyncio.run(init_models())
