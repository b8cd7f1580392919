"""
Domain models - the core of business logic.
These models are transport-agnostic (work with Supabase rows, the demo store, the HTTP API).
"""

from dataclasses import dataclass
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Dict, Any, Generic, TypeVar
from datetime import datetime
from enum import Enum


# === ENUMS ===

class UserRole(str, Enum):
    PLAYER = "player"
    MANAGER = "manager"
    DIRECTOR = "director"


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    COMPETITIVE = "competitive"


class ExperienceLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class LeagueStatus(str, Enum):
    OPEN = "open"
    FULL = "full"
    CLOSED = "closed"


class TeamStatus(str, Enum):
    DRAFT = "draft"
    ACTIVE = "active"
    FULL = "full"
    INACTIVE = "inactive"


class PaymentStatus(str, Enum):
    UNPAID = "unpaid"
    PARTIAL = "partial"
    PAID = "paid"


class ConversationType(str, Enum):
    TEAM = "team"
    DIRECT = "direct"
    LEAGUE = "league"


class MessageType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    SYSTEM = "system"


# === LOCATION ===

class Coordinate(BaseModel):
    """Latitude/longitude pair in decimal degrees. Not range-checked."""
    model_config = ConfigDict(frozen=True)

    latitude: float
    longitude: float


class Locatable(BaseModel):
    """Any record that may carry a location (league, team, player, user)."""
    location_latitude: Optional[float] = None
    location_longitude: Optional[float] = None

    @property
    def coordinate(self) -> Optional[Coordinate]:
        if self.location_latitude is None or self.location_longitude is None:
            return None
        return Coordinate(latitude=self.location_latitude, longitude=self.location_longitude)


T = TypeVar("T")


@dataclass(frozen=True)
class Nearby(Generic[T]):
    """An item paired with its distance (miles) from a reference point.

    The distance exists only for the duration of a sort; it is never stored
    on the item itself.
    """
    item: T
    distance: Optional[float] = None


# === USER ===

class User(Locatable):
    """User profile"""
    id: str
    email: str
    full_name: str
    role: UserRole = UserRole.PLAYER
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    search_radius_miles: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class UserLocationUpdate(BaseModel):
    """Data for saving a user's home location"""
    location_latitude: float
    location_longitude: float
    search_radius_miles: float


# === LEAGUES & TEAMS ===

class League(Locatable):
    id: str
    name: str
    description: Optional[str] = None
    skill_level: SkillLevel = SkillLevel.BEGINNER
    location: str = ""
    season_start: Optional[str] = None
    season_end: Optional[str] = None
    registration_deadline: Optional[str] = None
    base_fee: float = 0
    max_teams: int = 0
    current_teams: int = 0
    status: LeagueStatus = LeagueStatus.OPEN
    director_id: Optional[str] = None


class Team(Locatable):
    id: str
    name: str
    league_id: Optional[str] = None
    league_name: Optional[str] = None
    manager_id: Optional[str] = None
    description: Optional[str] = None
    skill_level: Optional[SkillLevel] = None
    max_players: int = 0
    current_players: int = 0
    total_fee: float = 0
    paid_amount: float = 0
    status: TeamStatus = TeamStatus.ACTIVE


class FreeAgent(Locatable):
    """Player without a team, looking to be recruited"""
    id: str
    user_id: str
    name: str
    bio: Optional[str] = None
    experience_level: ExperienceLevel = ExperienceLevel.BEGINNER
    preferred_positions: List[str] = Field(default_factory=list)


# === CHAT ===

class Sender(BaseModel):
    id: str = ""
    full_name: str = "Unknown"
    avatar_url: Optional[str] = None


class Participant(BaseModel):
    user_id: str
    full_name: str = "Unknown"
    avatar_url: Optional[str] = None


class Conversation(BaseModel):
    id: str
    type: ConversationType
    title: Optional[str] = None
    team_id: Optional[str] = None
    last_message_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class Message(BaseModel):
    id: str
    conversation_id: str
    sender_id: str
    content: Optional[str] = None
    message_type: MessageType = MessageType.TEXT
    image_url: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: Optional[datetime] = None


class MessageCreate(BaseModel):
    """Data for sending a message"""
    conversation_id: str
    sender_id: str
    content: Optional[str] = None
    message_type: MessageType = MessageType.TEXT
    image_url: Optional[str] = None


class MessageWithSender(Message):
    sender: Sender = Field(default_factory=Sender)


class ConversationWithDetails(Conversation):
    unread_count: int = 0
    last_message: Optional[Message] = None
    participants: List[Participant] = Field(default_factory=list)
    team_name: Optional[str] = None
