"""
Supabase implementations of League, Team and Player repositories.
"""

import logging
from typing import Optional, List

from supabase import Client

from core.domain.models import League, Team, FreeAgent
from core.interfaces.repositories import ILeagueRepository, ITeamRepository, IPlayerRepository
from infrastructure.database.supabase_client import get_supabase, run_sync

logger = logging.getLogger(__name__)


class _SupabaseRepository:

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client


class SupabaseLeagueRepository(_SupabaseRepository, ILeagueRepository):
    """Supabase implementation of league repository"""

    def _to_model(self, data: dict) -> League:
        return League(
            id=data["id"],
            name=data["name"],
            description=data.get("description"),
            skill_level=data.get("skill_level") or "beginner",
            location=data.get("location") or "",
            location_latitude=data.get("location_latitude"),
            location_longitude=data.get("location_longitude"),
            season_start=data.get("season_start"),
            season_end=data.get("season_end"),
            registration_deadline=data.get("registration_deadline"),
            base_fee=data.get("base_fee") or 0,
            max_teams=data.get("max_teams") or 0,
            current_teams=data.get("current_teams") or 0,
            status=data.get("status") or "open",
            director_id=data.get("director_id"),
        )

    @run_sync
    def _list_sync(self) -> List[dict]:
        response = self.client.table("leagues").select("*").order("created_at", desc=True).execute()
        return response.data or []

    async def list_leagues(self) -> List[League]:
        return [self._to_model(row) for row in await self._list_sync()]

    @run_sync
    def _list_missing_coordinates_sync(self) -> List[dict]:
        response = self.client.table("leagues")\
            .select("*")\
            .is_("location_latitude", "null")\
            .neq("location", "")\
            .execute()
        return response.data or []

    async def list_missing_coordinates(self) -> List[League]:
        return [self._to_model(row) for row in await self._list_missing_coordinates_sync()]

    @run_sync
    def _update_coordinates_sync(self, league_id: str, latitude: float, longitude: float) -> None:
        self.client.table("leagues")\
            .update({"location_latitude": latitude, "location_longitude": longitude})\
            .eq("id", league_id)\
            .execute()

    async def update_coordinates(self, league_id: str, latitude: float, longitude: float) -> None:
        await self._update_coordinates_sync(league_id, latitude, longitude)
        logger.info(f"[LEAGUE_REPO] League {league_id} -> ({latitude}, {longitude})")


class SupabaseTeamRepository(_SupabaseRepository, ITeamRepository):
    """Supabase implementation of team repository.

    Teams have no coordinates of their own; they are located where their
    league plays.
    """

    _SELECT = "*, leagues(name, skill_level, location_latitude, location_longitude)"

    def _to_model(self, data: dict) -> Team:
        league = data.get("leagues") or {}
        return Team(
            id=data["id"],
            name=data["name"],
            league_id=data.get("league_id"),
            league_name=league.get("name"),
            manager_id=data.get("manager_id"),
            description=data.get("description"),
            skill_level=league.get("skill_level"),
            location_latitude=league.get("location_latitude"),
            location_longitude=league.get("location_longitude"),
            max_players=data.get("max_players") or 0,
            current_players=data.get("current_players") or 0,
            total_fee=data.get("total_fee") or 0,
            paid_amount=data.get("paid_amount") or 0,
            status=data.get("status") or "active",
        )

    @run_sync
    def _list_sync(self) -> List[dict]:
        response = self.client.table("teams")\
            .select(self._SELECT)\
            .neq("status", "inactive")\
            .execute()
        return response.data or []

    async def list_teams(self) -> List[Team]:
        return [self._to_model(row) for row in await self._list_sync()]

    @run_sync
    def _get_by_id_sync(self, team_id: str) -> Optional[dict]:
        response = self.client.table("teams").select(self._SELECT).eq("id", team_id).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, team_id: str) -> Optional[Team]:
        data = await self._get_by_id_sync(team_id)
        return self._to_model(data) if data else None

    @run_sync
    def _get_member_ids_sync(self, team_id: str) -> List[str]:
        response = self.client.table("players").select("user_id").eq("team_id", team_id).execute()
        return [row["user_id"] for row in response.data or []]

    async def get_member_ids(self, team_id: str) -> List[str]:
        return await self._get_member_ids_sync(team_id)


class SupabasePlayerRepository(_SupabaseRepository, IPlayerRepository):
    """Supabase implementation of player repository"""

    def _to_free_agent(self, data: dict) -> FreeAgent:
        user = data.get("users") or {}
        position = data.get("position")
        return FreeAgent(
            id=data["id"],
            user_id=data["user_id"],
            name=user.get("full_name") or "Unknown",
            bio=data.get("bio"),
            experience_level=data.get("experience_level") or "beginner",
            preferred_positions=[p.strip() for p in position.split(",") if p.strip()] if position else [],
            location_latitude=user.get("location_latitude"),
            location_longitude=user.get("location_longitude"),
        )

    @run_sync
    def _list_free_agents_sync(self) -> List[dict]:
        response = self.client.table("players")\
            .select("*, users(full_name, location_latitude, location_longitude)")\
            .eq("is_free_agent", True)\
            .is_("team_id", "null")\
            .execute()
        return response.data or []

    async def list_free_agents(self) -> List[FreeAgent]:
        return [self._to_free_agent(row) for row in await self._list_free_agents_sync()]
