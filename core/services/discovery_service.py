"""
Discovery service - browse leagues, teams and free agents near a user.
Text/skill filters first, then nearest-first ordering within the user's search radius.
"""

import logging
from typing import Iterable, List, Optional

from core.domain.models import (
    User, League, Team, FreeAgent, Nearby,
    SkillLevel, LeagueStatus, ExperienceLevel,
)
from core.interfaces.repositories import ILeagueRepository, ITeamRepository, IPlayerRepository
from core.utils.location import sort_by_distance

logger = logging.getLogger(__name__)


def _matches_query(query: str, fields: Iterable[Optional[str]]) -> bool:
    """Case-insensitive substring match against any field. Empty query matches everything."""
    needle = query.strip().lower()
    if not needle:
        return True
    return any(needle in (value or "").lower() for value in fields)


class DiscoveryService:
    """Service for location-aware browsing"""

    def __init__(
        self,
        league_repo: ILeagueRepository,
        team_repo: ITeamRepository,
        player_repo: IPlayerRepository,
    ):
        self.league_repo = league_repo
        self.team_repo = team_repo
        self.player_repo = player_repo

    def _rank(self, items: list, user: User) -> list:
        reference = user.coordinate
        radius = user.search_radius_miles
        if reference is None:
            logger.debug(f"[DISCOVERY] User {user.id} has no location, skipping distance sort")
        return sort_by_distance(items, reference, radius)

    async def find_leagues(
        self,
        user: User,
        query: str = "",
        skill_level: Optional[SkillLevel] = None,
        status: Optional[LeagueStatus] = None,
    ) -> List[Nearby[League]]:
        leagues = await self.league_repo.list_leagues()
        matching = [
            league for league in leagues
            if _matches_query(query, (league.name, league.description, league.location))
            and (skill_level is None or league.skill_level == skill_level)
            and (status is None or league.status == status)
        ]
        return self._rank(matching, user)

    async def find_teams(
        self,
        user: User,
        query: str = "",
        skill_level: Optional[SkillLevel] = None,
    ) -> List[Nearby[Team]]:
        teams = await self.team_repo.list_teams()
        matching = [
            team for team in teams
            if _matches_query(query, (team.name, team.league_name, team.description))
            and (skill_level is None or team.skill_level == skill_level)
        ]
        return self._rank(matching, user)

    async def find_free_agents(
        self,
        user: User,
        query: str = "",
        experience_level: Optional[ExperienceLevel] = None,
    ) -> List[Nearby[FreeAgent]]:
        agents = await self.player_repo.list_free_agents()
        matching = [
            agent for agent in agents
            if _matches_query(query, (agent.name, agent.bio, *agent.preferred_positions))
            and (experience_level is None or agent.experience_level == experience_level)
        ]
        return self._rank(matching, user)
