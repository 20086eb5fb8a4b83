from typing import Optional
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.exceptions import NotFound, store_errors
from src.technologies.models import Technology, Version


class TechnologyService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_technology(self, name: str) -> Optional[Technology]:
        with store_errors():
            result = await self.db.execute(select(Technology).where(Technology.name == name))
        return result.scalar_one_or_none()

    async def get_technology(self, name: str) -> Technology:
        technology = await self.find_technology(name)
        if not technology:
            raise NotFound("Technology", name)
        return technology

    async def find_version(self, technology_id: UUID, version: str) -> Optional[Version]:
        """Version scoped to a technology, or None when that technology has no such version."""
        with store_errors():
            result = await self.db.execute(
                select(Version).where(
                    Version.technology_id == technology_id,
                    Version.version == version,
                )
            )
        return result.scalar_one_or_none()
