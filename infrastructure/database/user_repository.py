"""
Supabase implementation of User repository.
"""

from typing import Optional

from supabase import Client

from core.domain.models import User, UserLocationUpdate
from core.interfaces.repositories import IUserRepository
from infrastructure.database.supabase_client import get_supabase, run_sync


class SupabaseUserRepository(IUserRepository):
    """Supabase implementation of user repository"""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def _to_model(self, data: dict) -> User:
        """Convert database row to User model"""
        return User(
            id=data["id"],
            email=data.get("email") or "",
            full_name=data.get("full_name") or "",
            role=data.get("role") or "player",
            phone=data.get("phone"),
            avatar_url=data.get("avatar_url"),
            location_latitude=data.get("location_latitude"),
            location_longitude=data.get("location_longitude"),
            search_radius_miles=data.get("search_radius_miles"),
            created_at=data.get("created_at"),
            updated_at=data.get("updated_at"),
        )

    @run_sync
    def _get_by_id_sync(self, user_id: str) -> Optional[dict]:
        response = self.client.table("users").select("*").eq("id", user_id).execute()
        return response.data[0] if response.data else None

    async def get_by_id(self, user_id: str) -> Optional[User]:
        data = await self._get_by_id_sync(user_id)
        return self._to_model(data) if data else None

    @run_sync
    def _update_sync(self, user_id: str, data: dict) -> Optional[dict]:
        response = self.client.table("users").update(data).eq("id", user_id).execute()
        return response.data[0] if response.data else None

    async def update_location(self, user_id: str, data: UserLocationUpdate) -> Optional[User]:
        row = await self._update_sync(user_id, data.model_dump())
        return self._to_model(row) if row else None
