from infrastructure.database.user_repository import SupabaseUserRepository
from infrastructure.database.league_repository import (
    SupabaseLeagueRepository,
    SupabaseTeamRepository,
    SupabasePlayerRepository,
)
from infrastructure.database.chat_repository import SupabaseChatRepository

__all__ = [
    "SupabaseUserRepository",
    "SupabaseLeagueRepository",
    "SupabaseTeamRepository",
    "SupabasePlayerRepository",
    "SupabaseChatRepository",
]
