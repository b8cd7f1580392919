from core.interfaces.repositories import (
    IUserRepository,
    ILeagueRepository,
    ITeamRepository,
    IPlayerRepository,
    IChatRepository,
)
from core.interfaces.realtime import IMessageSubscriber, ISubscription, MessageCallback
from core.interfaces.geocoding import IGeocoder

__all__ = [
    # Repositories
    "IUserRepository",
    "ILeagueRepository",
    "ITeamRepository",
    "IPlayerRepository",
    "IChatRepository",
    # Realtime
    "IMessageSubscriber",
    "ISubscription",
    "MessageCallback",
    # Location
    "IGeocoder",
]
