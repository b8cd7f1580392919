"""
Service loader - builds repositories and services for the configured data source.
The data source is chosen once here; nothing downstream checks for demo users.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from config.features import features
from config.settings import settings
from core.interfaces import (
    IUserRepository, ILeagueRepository, ITeamRepository, IPlayerRepository,
    IChatRepository, IMessageSubscriber, IGeocoder,
)
from core.services import ChatService, DiscoveryService, LocationService

logger = logging.getLogger(__name__)


@dataclass
class Container:
    user_repo: IUserRepository
    league_repo: ILeagueRepository
    team_repo: ITeamRepository
    player_repo: IPlayerRepository
    chat_repo: IChatRepository
    subscriber: Optional[IMessageSubscriber]
    geocoder: Optional[IGeocoder]
    discovery_service: DiscoveryService
    location_service: LocationService

    def chat_service(self, user_id: Optional[str]) -> ChatService:
        """Chat state is per user, so each caller gets its own facade."""
        return ChatService(
            chat_repo=self.chat_repo,
            team_repo=self.team_repo,
            subscriber=self.subscriber,
            user_id=user_id,
        )


def _supabase_repositories():
    from infrastructure.database import (
        SupabaseUserRepository, SupabaseLeagueRepository, SupabaseTeamRepository,
        SupabasePlayerRepository, SupabaseChatRepository,
    )
    from infrastructure.database.supabase_client import get_supabase
    from infrastructure.realtime.supabase_realtime import SupabaseMessageSubscriber

    client = get_supabase()
    chat_repo = SupabaseChatRepository(client)
    subscriber = SupabaseMessageSubscriber(parse_message=chat_repo.parse_message)
    return (
        SupabaseUserRepository(client), SupabaseLeagueRepository(client), SupabaseTeamRepository(client),
        SupabasePlayerRepository(client), chat_repo, subscriber,
    )


def _demo_repositories():
    from infrastructure.demo import (
        DemoStore, DemoUserRepository, DemoLeagueRepository, DemoTeamRepository,
        DemoPlayerRepository, DemoChatRepository, DemoMessageSubscriber,
    )

    store = DemoStore()
    return (
        DemoUserRepository(store), DemoLeagueRepository(store), DemoTeamRepository(store),
        DemoPlayerRepository(store), DemoChatRepository(store), DemoMessageSubscriber(store),
    )


def build_container(data_source: Optional[str] = None, geocoder: Optional[IGeocoder] = None) -> Container:
    source = data_source or settings.data_source
    if source == "demo":
        repos = _demo_repositories()
    elif source == "supabase":
        repos = _supabase_repositories()
    else:
        raise ValueError(f"Unknown data source: {source}")

    user_repo, league_repo, team_repo, player_repo, chat_repo, subscriber = repos

    if not features.REALTIME_ENABLED:
        subscriber = None

    if geocoder is None and features.GEOCODING_ENABLED:
        from infrastructure.geocoding.nominatim import NominatimGeocoder
        geocoder = NominatimGeocoder()

    logger.info(f"[LOADER] Data source: {source}, realtime: {subscriber is not None}, geocoding: {geocoder is not None}")

    return Container(
        user_repo=user_repo,
        league_repo=league_repo,
        team_repo=team_repo,
        player_repo=player_repo,
        chat_repo=chat_repo,
        subscriber=subscriber,
        geocoder=geocoder,
        discovery_service=DiscoveryService(league_repo, team_repo, player_repo),
        location_service=LocationService(user_repo, geocoder),
    )
