from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.exceptions import NotFound, store_errors
from src.teams.models import Team


class TeamService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_team(self, name: str) -> Optional[Team]:
        with store_errors():
            result = await self.db.execute(select(Team).where(Team.name == name))
        return result.scalar_one_or_none()

    async def get_team(self, name: str) -> Team:
        team = await self.find_team(name)
        if not team:
            raise NotFound("Team", name)
        return team
