"""
Shared fixtures: in-memory demo data source and small model factories.
"""

from unittest.mock import MagicMock

import pytest

from core.domain.models import User
from infrastructure.demo import (
    DemoStore,
    DemoUserRepository,
    DemoLeagueRepository,
    DemoTeamRepository,
    DemoPlayerRepository,
    DemoChatRepository,
    DemoMessageSubscriber,
)

# Lower Manhattan
NYC = (40.7128, -74.0060)


@pytest.fixture
def demo_store():
    return DemoStore()


@pytest.fixture
def demo_repos(demo_store):
    return {
        "user": DemoUserRepository(demo_store),
        "league": DemoLeagueRepository(demo_store),
        "team": DemoTeamRepository(demo_store),
        "player": DemoPlayerRepository(demo_store),
        "chat": DemoChatRepository(demo_store),
        "subscriber": DemoMessageSubscriber(demo_store),
    }


@pytest.fixture
def make_user():
    def _make(user_id="u-1", location=NYC, radius=None, **kwargs):
        lat, lon = location if location else (None, None)
        return User(
            id=user_id,
            email=f"{user_id}@example.com",
            full_name=kwargs.pop("full_name", "Test User"),
            location_latitude=lat,
            location_longitude=lon,
            search_radius_miles=radius,
            **kwargs,
        )
    return _make


def supabase_response(data=None, count=None):
    """Object shaped like a postgrest APIResponse."""
    response = MagicMock()
    response.data = data
    response.count = count
    return response


@pytest.fixture
def supabase_client():
    """MagicMock client whose query builders chain back to themselves.

    Set `client.query.execute.return_value` (tables) or
    `client.rpc.return_value.execute.return_value` (RPCs) per test.
    """
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "eq", "neq", "in_", "is_", "order", "limit",
                   "insert", "update", "upsert"):
        getattr(query, method).return_value = query
    client.table.return_value = query
    client.query = query
    return client


@pytest.fixture
def make_response():
    return supabase_response
