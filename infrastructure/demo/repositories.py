"""
In-memory repositories for the demo data source.

All repositories built from one DemoStore share its state, so a message sent
through the chat repository shows up in conversation lists and reaches live
subscribers through the store's MessageBus.
"""

import copy
import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from core.domain.models import (
    User, UserLocationUpdate, League, Team, FreeAgent,
    Conversation, Message, MessageCreate, Participant, Sender,
)
from core.interfaces.realtime import IMessageSubscriber, ISubscription, MessageCallback
from core.interfaces.repositories import (
    IUserRepository, ILeagueRepository, ITeamRepository, IPlayerRepository, IChatRepository,
)
from infrastructure.demo import seed_data

logger = logging.getLogger(__name__)

_EPOCH = datetime(2024, 1, 1, tzinfo=timezone.utc)


class MessageBus:
    """Fan-out of inserted messages to per-conversation callbacks."""

    def __init__(self):
        self._callbacks: Dict[str, List[MessageCallback]] = {}

    def add(self, conversation_id: str, callback: MessageCallback) -> None:
        self._callbacks.setdefault(conversation_id, []).append(callback)

    def remove(self, conversation_id: str, callback: MessageCallback) -> None:
        callbacks = self._callbacks.get(conversation_id, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def subscriber_count(self, conversation_id: str) -> int:
        return len(self._callbacks.get(conversation_id, []))

    async def publish(self, message: Message) -> None:
        for callback in list(self._callbacks.get(message.conversation_id, [])):
            try:
                await callback(message)
            except Exception as e:
                logger.warning(f"[DEMO] Subscriber failed for {message.conversation_id}: {e}")


class DemoStore:
    """Mutable copy of the seed data plus a monotonic clock."""

    def __init__(self):
        self.users: Dict[str, dict] = {u["id"]: dict(u) for u in seed_data.DEMO_USERS}
        self.leagues: List[dict] = copy.deepcopy(seed_data.DEMO_LEAGUES)
        self.teams: List[dict] = copy.deepcopy(seed_data.DEMO_TEAMS)
        self.rosters: Dict[str, List[str]] = copy.deepcopy(seed_data.DEMO_ROSTERS)
        self.free_agents: List[dict] = copy.deepcopy(seed_data.DEMO_FREE_AGENTS)
        self.conversations: Dict[str, dict] = {}
        # (conversation_id, user_id) -> last_read_at (None = never read)
        self.participants: Dict[Tuple[str, str], Optional[datetime]] = {}
        self.messages: List[dict] = []
        self.bus = MessageBus()
        self._ticks = 0

        for conv in seed_data.DEMO_CONVERSATIONS:
            now = self.now()
            self.conversations[conv["id"]] = {
                "id": conv["id"],
                "type": conv["type"],
                "title": conv.get("title"),
                "team_id": conv.get("team_id"),
                "created_at": now,
                "last_message_at": now,
            }
            for user_id in conv["participants"]:
                self.participants[(conv["id"], user_id)] = None

        for msg in seed_data.DEMO_MESSAGES:
            self.append_message(msg)

    def now(self) -> datetime:
        self._ticks += 1
        return _EPOCH + timedelta(seconds=self._ticks)

    def append_message(self, data: dict) -> dict:
        row = {
            "id": f"demo-msg-{uuid.uuid4().hex[:12]}",
            "message_type": "text",
            "metadata": {},
            **data,
            "created_at": self.now(),
        }
        self.messages.append(row)
        conversation = self.conversations.get(row["conversation_id"])
        if conversation is not None:
            conversation["last_message_at"] = row["created_at"]
        return row


class DemoUserRepository(IUserRepository):

    def __init__(self, store: DemoStore):
        self.store = store

    async def get_by_id(self, user_id: str) -> Optional[User]:
        data = self.store.users.get(user_id)
        return User(**data) if data else None

    async def update_location(self, user_id: str, data: UserLocationUpdate) -> Optional[User]:
        row = self.store.users.get(user_id)
        if row is None:
            return None
        row.update(data.model_dump())
        return User(**row)


class DemoLeagueRepository(ILeagueRepository):

    def __init__(self, store: DemoStore):
        self.store = store

    async def list_leagues(self) -> List[League]:
        return [League(**row) for row in self.store.leagues]

    async def list_missing_coordinates(self) -> List[League]:
        return [
            League(**row) for row in self.store.leagues
            if row.get("location") and row.get("location_latitude") is None
        ]

    async def update_coordinates(self, league_id: str, latitude: float, longitude: float) -> None:
        for row in self.store.leagues:
            if row["id"] == league_id:
                row["location_latitude"] = latitude
                row["location_longitude"] = longitude


class DemoTeamRepository(ITeamRepository):

    def __init__(self, store: DemoStore):
        self.store = store

    async def list_teams(self) -> List[Team]:
        return [Team(**row) for row in self.store.teams]

    async def get_by_id(self, team_id: str) -> Optional[Team]:
        for row in self.store.teams:
            if row["id"] == team_id:
                return Team(**row)
        return None

    async def get_member_ids(self, team_id: str) -> List[str]:
        return list(self.store.rosters.get(team_id, []))


class DemoPlayerRepository(IPlayerRepository):

    def __init__(self, store: DemoStore):
        self.store = store

    async def list_free_agents(self) -> List[FreeAgent]:
        return [FreeAgent(**row) for row in self.store.free_agents]


class DemoChatRepository(IChatRepository):

    def __init__(self, store: DemoStore):
        self.store = store

    def _sender(self, user_id: str) -> Optional[Sender]:
        user = self.store.users.get(user_id)
        if user is None:
            return None
        return Sender(id=user["id"], full_name=user["full_name"], avatar_url=user.get("avatar_url"))

    async def get_conversation_ids(self, user_id: str) -> List[str]:
        return [conv_id for (conv_id, uid) in self.store.participants if uid == user_id]

    async def get_conversations(self, conversation_ids: List[str]) -> List[Tuple[Conversation, Optional[str]]]:
        team_names = {team["id"]: team["name"] for team in self.store.teams}
        rows = [self.store.conversations[cid] for cid in conversation_ids if cid in self.store.conversations]
        rows.sort(key=lambda row: row["last_message_at"], reverse=True)
        return [(Conversation(**row), team_names.get(row.get("team_id"))) for row in rows]

    async def get_last_message(self, conversation_id: str) -> Optional[Message]:
        for row in reversed(self.store.messages):
            if row["conversation_id"] == conversation_id:
                return Message(**row)
        return None

    async def get_participants(self, conversation_id: str) -> List[Participant]:
        participants = []
        for (conv_id, user_id) in self.store.participants:
            if conv_id != conversation_id:
                continue
            sender = self._sender(user_id) or Sender(id=user_id)
            participants.append(Participant(
                user_id=user_id, full_name=sender.full_name, avatar_url=sender.avatar_url,
            ))
        return participants

    async def get_unread_count(self, conversation_id: str, user_id: str) -> int:
        last_read = self.store.participants.get((conversation_id, user_id))
        return sum(
            1 for row in self.store.messages
            if row["conversation_id"] == conversation_id
            and row["sender_id"] != user_id
            and (last_read is None or row["created_at"] > last_read)
        )

    async def get_messages(self, conversation_id: str) -> List[Tuple[Message, Optional[Sender]]]:
        return [
            (Message(**row), self._sender(row["sender_id"]))
            for row in self.store.messages
            if row["conversation_id"] == conversation_id
        ]

    async def get_sender(self, user_id: str) -> Optional[Sender]:
        return self._sender(user_id)

    async def insert_message(self, message: MessageCreate) -> Message:
        if message.conversation_id not in self.store.conversations:
            raise ValueError(f"Conversation {message.conversation_id} not found")
        row = self.store.append_message(message.model_dump(mode="json", exclude_none=True))
        created = Message(**row)
        await self.store.bus.publish(created)
        return created

    async def get_or_create_direct_conversation(self, user_id: str, other_user_id: str) -> str:
        for conv_id, conv in self.store.conversations.items():
            if conv["type"] != "direct":
                continue
            if (conv_id, user_id) in self.store.participants and (conv_id, other_user_id) in self.store.participants:
                return conv_id

        conversation = await self.create_conversation("direct", None)
        await self.add_participants(conversation.id, [user_id, other_user_id])
        return conversation.id

    async def find_team_conversation(self, team_id: str) -> Optional[str]:
        for conv_id, conv in self.store.conversations.items():
            if conv["type"] == "team" and conv.get("team_id") == team_id:
                return conv_id
        return None

    async def create_conversation(self, conversation_type: str, title: Optional[str],
                                  team_id: Optional[str] = None) -> Conversation:
        now = self.store.now()
        row = {
            "id": f"demo-conv-{uuid.uuid4().hex[:12]}",
            "type": conversation_type,
            "title": title,
            "team_id": team_id,
            "created_at": now,
            "last_message_at": now,
        }
        self.store.conversations[row["id"]] = row
        return Conversation(**row)

    async def add_participants(self, conversation_id: str, user_ids: List[str]) -> None:
        if conversation_id not in self.store.conversations:
            raise ValueError(f"Conversation {conversation_id} not found")
        for user_id in user_ids:
            self.store.participants.setdefault((conversation_id, user_id), None)

    async def mark_messages_read(self, conversation_id: str, user_id: str) -> None:
        key = (conversation_id, user_id)
        if key in self.store.participants:
            self.store.participants[key] = self.store.now()


class DemoSubscription(ISubscription):

    def __init__(self, bus: MessageBus, conversation_id: str, callback: MessageCallback):
        self._bus = bus
        self.conversation_id = conversation_id
        self._callback = callback

    async def unsubscribe(self) -> None:
        self._bus.remove(self.conversation_id, self._callback)


class DemoMessageSubscriber(IMessageSubscriber):

    def __init__(self, store: DemoStore):
        self.store = store

    async def subscribe(self, conversation_id: str, callback: MessageCallback) -> ISubscription:
        self.store.bus.add(conversation_id, callback)
        return DemoSubscription(self.store.bus, conversation_id, callback)
