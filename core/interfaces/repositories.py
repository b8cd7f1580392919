"""
Repository interfaces - abstractions for data access.
This allows swapping implementations (Supabase -> in-memory demo data, etc.)
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from core.domain.models import (
    User, UserLocationUpdate,
    League, Team, FreeAgent,
    Conversation, Message, MessageCreate,
    Participant, Sender,
)


class IUserRepository(ABC):
    """Interface for user profile access"""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user profile by ID"""
        pass

    @abstractmethod
    async def update_location(self, user_id: str, data: UserLocationUpdate) -> Optional[User]:
        """Save home coordinate and search radius"""
        pass


class ILeagueRepository(ABC):
    """Interface for league data access"""

    @abstractmethod
    async def list_leagues(self) -> List[League]:
        """All leagues, in storage order"""
        pass

    @abstractmethod
    async def list_missing_coordinates(self) -> List[League]:
        """Leagues with a location text but no coordinate"""
        pass

    @abstractmethod
    async def update_coordinates(self, league_id: str, latitude: float, longitude: float) -> None:
        pass


class ITeamRepository(ABC):
    """Interface for team data access"""

    @abstractmethod
    async def list_teams(self) -> List[Team]:
        """All teams open for browsing"""
        pass

    @abstractmethod
    async def get_by_id(self, team_id: str) -> Optional[Team]:
        pass

    @abstractmethod
    async def get_member_ids(self, team_id: str) -> List[str]:
        """User IDs of players on the team roster"""
        pass


class IPlayerRepository(ABC):
    """Interface for player data access"""

    @abstractmethod
    async def list_free_agents(self) -> List[FreeAgent]:
        """Players without a team who opted in as free agents"""
        pass


class IChatRepository(ABC):
    """Interface for conversations and messages"""

    @abstractmethod
    async def get_conversation_ids(self, user_id: str) -> List[str]:
        """IDs of conversations the user participates in"""
        pass

    @abstractmethod
    async def get_conversations(self, conversation_ids: List[str]) -> List[tuple]:
        """(Conversation, team name or None), newest last_message_at first"""
        pass

    @abstractmethod
    async def get_last_message(self, conversation_id: str) -> Optional[Message]:
        pass

    @abstractmethod
    async def get_participants(self, conversation_id: str) -> List[Participant]:
        pass

    @abstractmethod
    async def get_unread_count(self, conversation_id: str, user_id: str) -> int:
        pass

    @abstractmethod
    async def get_messages(self, conversation_id: str) -> List[tuple]:
        """(Message, Sender or None), oldest first"""
        pass

    @abstractmethod
    async def get_sender(self, user_id: str) -> Optional[Sender]:
        pass

    @abstractmethod
    async def insert_message(self, message: MessageCreate) -> Message:
        pass

    @abstractmethod
    async def get_or_create_direct_conversation(self, user_id: str, other_user_id: str) -> str:
        """Return the ID of the direct conversation between two users"""
        pass

    @abstractmethod
    async def find_team_conversation(self, team_id: str) -> Optional[str]:
        pass

    @abstractmethod
    async def create_conversation(self, conversation_type: str, title: Optional[str],
                                  team_id: Optional[str] = None) -> Conversation:
        pass

    @abstractmethod
    async def add_participants(self, conversation_id: str, user_ids: List[str]) -> None:
        pass

    @abstractmethod
    async def mark_messages_read(self, conversation_id: str, user_id: str) -> None:
        pass
