from infrastructure.demo.repositories import (
    DemoStore,
    DemoUserRepository,
    DemoLeagueRepository,
    DemoTeamRepository,
    DemoPlayerRepository,
    DemoChatRepository,
    DemoMessageSubscriber,
)

__all__ = [
    "DemoStore",
    "DemoUserRepository",
    "DemoLeagueRepository",
    "DemoTeamRepository",
    "DemoPlayerRepository",
    "DemoChatRepository",
    "DemoMessageSubscriber",
]
