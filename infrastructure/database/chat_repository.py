"""
Supabase implementation of Chat repository.
Tables: conversations, conversation_participants, messages, users.
RPCs: get_unread_count, mark_messages_read, get_or_create_direct_conversation.
"""

import logging
from typing import Optional, List, Tuple

from supabase import Client

from core.domain.models import Conversation, Message, MessageCreate, Participant, Sender
from core.interfaces.repositories import IChatRepository
from infrastructure.database.supabase_client import get_supabase, run_sync

logger = logging.getLogger(__name__)

_SENDER_COLUMNS = "id, full_name, avatar_url"


def _to_sender(data: Optional[dict]) -> Optional[Sender]:
    if not data:
        return None
    return Sender(
        id=data.get("id") or "",
        full_name=data.get("full_name") or "Unknown",
        avatar_url=data.get("avatar_url"),
    )


class SupabaseChatRepository(IChatRepository):
    """Supabase implementation of chat repository"""

    def __init__(self, client: Optional[Client] = None):
        self._client = client

    @property
    def client(self) -> Client:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def _to_conversation(self, data: dict) -> Conversation:
        return Conversation(
            id=data["id"],
            type=data["type"],
            title=data.get("title"),
            team_id=data.get("team_id"),
            last_message_at=data.get("last_message_at"),
            created_at=data.get("created_at"),
        )

    def _to_message(self, data: dict) -> Message:
        return Message(
            id=data["id"],
            conversation_id=data["conversation_id"],
            sender_id=data["sender_id"],
            content=data.get("content"),
            message_type=data.get("message_type") or "text",
            image_url=data.get("image_url"),
            metadata=data.get("metadata") or {},
            created_at=data.get("created_at"),
        )

    # --- CONVERSATIONS ---

    @run_sync
    def _get_conversation_ids_sync(self, user_id: str) -> List[str]:
        response = self.client.table("conversation_participants")\
            .select("conversation_id")\
            .eq("user_id", user_id)\
            .execute()
        return [row["conversation_id"] for row in response.data or []]

    async def get_conversation_ids(self, user_id: str) -> List[str]:
        return await self._get_conversation_ids_sync(user_id)

    @run_sync
    def _get_conversations_sync(self, conversation_ids: List[str]) -> List[dict]:
        response = self.client.table("conversations")\
            .select("*, teams(name)")\
            .in_("id", conversation_ids)\
            .order("last_message_at", desc=True)\
            .execute()
        return response.data or []

    async def get_conversations(self, conversation_ids: List[str]) -> List[Tuple[Conversation, Optional[str]]]:
        rows = await self._get_conversations_sync(conversation_ids)
        return [
            (self._to_conversation(row), (row.get("teams") or {}).get("name"))
            for row in rows
        ]

    @run_sync
    def _find_team_conversation_sync(self, team_id: str) -> Optional[dict]:
        response = self.client.table("conversations")\
            .select("id")\
            .eq("team_id", team_id)\
            .eq("type", "team")\
            .limit(1)\
            .execute()
        return response.data[0] if response.data else None

    async def find_team_conversation(self, team_id: str) -> Optional[str]:
        data = await self._find_team_conversation_sync(team_id)
        return data["id"] if data else None

    @run_sync
    def _create_conversation_sync(self, data: dict) -> dict:
        response = self.client.table("conversations").insert(data).execute()
        return response.data[0]

    async def create_conversation(self, conversation_type: str, title: Optional[str],
                                  team_id: Optional[str] = None) -> Conversation:
        data = {"type": conversation_type, "title": title}
        if team_id:
            data["team_id"] = team_id
        row = await self._create_conversation_sync(data)
        return self._to_conversation(row)

    @run_sync
    def _get_or_create_direct_sync(self, user_id: str, other_user_id: str) -> str:
        response = self.client.rpc("get_or_create_direct_conversation", {
            "p_user1_id": user_id,
            "p_user2_id": other_user_id,
        }).execute()
        return response.data

    async def get_or_create_direct_conversation(self, user_id: str, other_user_id: str) -> str:
        return await self._get_or_create_direct_sync(user_id, other_user_id)

    # --- PARTICIPANTS ---

    @run_sync
    def _get_participants_sync(self, conversation_id: str) -> List[dict]:
        response = self.client.table("conversation_participants")\
            .select(f"user_id, users({_SENDER_COLUMNS})")\
            .eq("conversation_id", conversation_id)\
            .execute()
        return response.data or []

    async def get_participants(self, conversation_id: str) -> List[Participant]:
        rows = await self._get_participants_sync(conversation_id)
        participants = []
        for row in rows:
            user = row.get("users") or {}
            participants.append(Participant(
                user_id=user.get("id") or "",
                full_name=user.get("full_name") or "Unknown",
                avatar_url=user.get("avatar_url"),
            ))
        return participants

    @run_sync
    def _add_participants_sync(self, rows: List[dict]) -> None:
        self.client.table("conversation_participants").insert(rows).execute()

    async def add_participants(self, conversation_id: str, user_ids: List[str]) -> None:
        if not user_ids:
            return
        await self._add_participants_sync([
            {"conversation_id": conversation_id, "user_id": user_id}
            for user_id in user_ids
        ])

    # --- READ RECEIPTS ---

    @run_sync
    def _get_unread_count_sync(self, conversation_id: str, user_id: str) -> int:
        response = self.client.rpc("get_unread_count", {
            "p_conversation_id": conversation_id,
            "p_user_id": user_id,
        }).execute()
        return response.data or 0

    async def get_unread_count(self, conversation_id: str, user_id: str) -> int:
        return await self._get_unread_count_sync(conversation_id, user_id)

    @run_sync
    def _mark_read_sync(self, conversation_id: str, user_id: str) -> None:
        self.client.rpc("mark_messages_read", {
            "p_conversation_id": conversation_id,
            "p_user_id": user_id,
        }).execute()

    async def mark_messages_read(self, conversation_id: str, user_id: str) -> None:
        await self._mark_read_sync(conversation_id, user_id)

    # --- MESSAGES ---

    @run_sync
    def _get_last_message_sync(self, conversation_id: str) -> Optional[dict]:
        response = self.client.table("messages")\
            .select("*")\
            .eq("conversation_id", conversation_id)\
            .order("created_at", desc=True)\
            .limit(1)\
            .execute()
        return response.data[0] if response.data else None

    async def get_last_message(self, conversation_id: str) -> Optional[Message]:
        data = await self._get_last_message_sync(conversation_id)
        return self._to_message(data) if data else None

    @run_sync
    def _get_messages_sync(self, conversation_id: str) -> List[dict]:
        response = self.client.table("messages")\
            .select(f"*, users({_SENDER_COLUMNS})")\
            .eq("conversation_id", conversation_id)\
            .order("created_at", desc=False)\
            .execute()
        return response.data or []

    async def get_messages(self, conversation_id: str) -> List[Tuple[Message, Optional[Sender]]]:
        rows = await self._get_messages_sync(conversation_id)
        return [(self._to_message(row), _to_sender(row.get("users"))) for row in rows]

    @run_sync
    def _get_sender_sync(self, user_id: str) -> Optional[dict]:
        response = self.client.table("users")\
            .select(_SENDER_COLUMNS)\
            .eq("id", user_id)\
            .execute()
        return response.data[0] if response.data else None

    async def get_sender(self, user_id: str) -> Optional[Sender]:
        return _to_sender(await self._get_sender_sync(user_id))

    @run_sync
    def _insert_message_sync(self, data: dict) -> dict:
        response = self.client.table("messages").insert(data).execute()
        return response.data[0]

    async def insert_message(self, message: MessageCreate) -> Message:
        data = message.model_dump(mode="json", exclude_none=True)
        row = await self._insert_message_sync(data)
        logger.debug(f"[CHAT_REPO] Inserted message {row.get('id')} into {message.conversation_id}")
        return self._to_message(row)

    def parse_message(self, data: dict) -> Message:
        """Build a Message from a raw row (e.g. a realtime payload record)."""
        return self._to_message(data)
