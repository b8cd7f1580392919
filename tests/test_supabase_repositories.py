"""Tests for the Supabase repositories against a mocked client."""

import pytest

from core.domain.models import ConversationType, MessageCreate, MessageType, UserLocationUpdate
from infrastructure.database import (
    SupabaseChatRepository,
    SupabaseLeagueRepository,
    SupabasePlayerRepository,
    SupabaseTeamRepository,
    SupabaseUserRepository,
)

MESSAGE_ROW = {
    "id": "m-1",
    "conversation_id": "c-1",
    "sender_id": "u-2",
    "content": "Game at 7",
    "message_type": "text",
    "image_url": None,
    "metadata": None,
    "created_at": "2024-05-01T18:00:00+00:00",
}


class TestSupabaseUserRepository:

    @pytest.mark.asyncio
    async def test_get_by_id(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([{
            "id": "u-1", "email": "a@b.c", "full_name": "Ann",
            "location_latitude": 0.0, "location_longitude": 0.0, "search_radius_miles": 25,
        }])
        repo = SupabaseUserRepository(supabase_client)

        user = await repo.get_by_id("u-1")

        supabase_client.table.assert_called_with("users")
        supabase_client.query.eq.assert_called_with("id", "u-1")
        assert user.full_name == "Ann"
        assert user.coordinate is not None
        assert user.search_radius_miles == 25

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([])
        assert await SupabaseUserRepository(supabase_client).get_by_id("ghost") is None

    @pytest.mark.asyncio
    async def test_update_location(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([{
            "id": "u-1", "email": "a@b.c", "full_name": "Ann",
            "location_latitude": 40.6, "location_longitude": -73.9, "search_radius_miles": 10,
        }])
        repo = SupabaseUserRepository(supabase_client)

        user = await repo.update_location("u-1", UserLocationUpdate(
            location_latitude=40.6, location_longitude=-73.9, search_radius_miles=10,
        ))

        supabase_client.query.update.assert_called_once_with({
            "location_latitude": 40.6, "location_longitude": -73.9, "search_radius_miles": 10.0,
        })
        assert user.location_latitude == 40.6


class TestSupabaseLeagueRepository:

    @pytest.mark.asyncio
    async def test_list_leagues_defaults(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([
            {"id": "l-1", "name": "Spring", "skill_level": None, "location": None, "status": None},
        ])

        leagues = await SupabaseLeagueRepository(supabase_client).list_leagues()

        supabase_client.query.order.assert_called_with("created_at", desc=True)
        assert leagues[0].skill_level.value == "beginner"
        assert leagues[0].status.value == "open"
        assert leagues[0].location == ""
        assert leagues[0].coordinate is None

    @pytest.mark.asyncio
    async def test_list_missing_coordinates_filters(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([])

        await SupabaseLeagueRepository(supabase_client).list_missing_coordinates()

        supabase_client.query.is_.assert_called_with("location_latitude", "null")
        supabase_client.query.neq.assert_called_with("location", "")

    @pytest.mark.asyncio
    async def test_update_coordinates(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([])

        await SupabaseLeagueRepository(supabase_client).update_coordinates("l-1", 40.7, -74.0)

        supabase_client.query.update.assert_called_once_with(
            {"location_latitude": 40.7, "location_longitude": -74.0}
        )
        supabase_client.query.eq.assert_called_with("id", "l-1")


class TestSupabaseTeamRepository:

    @pytest.mark.asyncio
    async def test_team_located_at_its_league(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([{
            "id": "t-1", "name": "Bolts", "league_id": "l-1", "manager_id": "mgr",
            "leagues": {
                "name": "Spring", "skill_level": "advanced",
                "location_latitude": 40.78, "location_longitude": -73.96,
            },
        }])

        teams = await SupabaseTeamRepository(supabase_client).list_teams()

        supabase_client.query.neq.assert_called_with("status", "inactive")
        team = teams[0]
        assert team.league_name == "Spring"
        assert team.skill_level.value == "advanced"
        assert team.coordinate.latitude == 40.78

    @pytest.mark.asyncio
    async def test_team_without_league(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([
            {"id": "t-2", "name": "Loners", "leagues": None},
        ])

        team = await SupabaseTeamRepository(supabase_client).get_by_id("t-2")

        assert team.league_name is None
        assert team.coordinate is None

    @pytest.mark.asyncio
    async def test_member_ids(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([{"user_id": "p-1"}, {"user_id": "p-2"}])

        ids = await SupabaseTeamRepository(supabase_client).get_member_ids("t-1")

        supabase_client.table.assert_called_with("players")
        assert ids == ["p-1", "p-2"]


class TestSupabasePlayerRepository:

    @pytest.mark.asyncio
    async def test_free_agents(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([{
            "id": "pl-1", "user_id": "u-9", "bio": "Fast",
            "experience_level": "advanced", "position": "Pitcher, Catcher ,",
            "users": {"full_name": "David", "location_latitude": 40.75, "location_longitude": -73.99},
        }])

        agents = await SupabasePlayerRepository(supabase_client).list_free_agents()

        supabase_client.query.eq.assert_called_with("is_free_agent", True)
        supabase_client.query.is_.assert_called_with("team_id", "null")
        agent = agents[0]
        assert agent.name == "David"
        assert agent.preferred_positions == ["Pitcher", "Catcher"]
        assert agent.coordinate is not None


class TestSupabaseChatRepository:

    @pytest.mark.asyncio
    async def test_conversation_ids(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([
            {"conversation_id": "c-1"}, {"conversation_id": "c-2"},
        ])

        ids = await SupabaseChatRepository(supabase_client).get_conversation_ids("u-1")

        supabase_client.table.assert_called_with("conversation_participants")
        assert ids == ["c-1", "c-2"]

    @pytest.mark.asyncio
    async def test_conversations_with_team_name(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([
            {"id": "c-1", "type": "team", "team_id": "t-1", "teams": {"name": "Bolts"}},
            {"id": "c-2", "type": "direct", "teams": None},
        ])

        rows = await SupabaseChatRepository(supabase_client).get_conversations(["c-1", "c-2"])

        supabase_client.query.in_.assert_called_with("id", ["c-1", "c-2"])
        supabase_client.query.order.assert_called_with("last_message_at", desc=True)
        assert rows[0][0].type == ConversationType.TEAM
        assert rows[0][1] == "Bolts"
        assert rows[1][1] is None

    @pytest.mark.asyncio
    async def test_unread_count_rpc(self, supabase_client, make_response):
        supabase_client.rpc.return_value.execute.return_value = make_response(3)

        count = await SupabaseChatRepository(supabase_client).get_unread_count("c-1", "u-1")

        supabase_client.rpc.assert_called_once_with(
            "get_unread_count", {"p_conversation_id": "c-1", "p_user_id": "u-1"}
        )
        assert count == 3

    @pytest.mark.asyncio
    async def test_unread_count_null_is_zero(self, supabase_client, make_response):
        supabase_client.rpc.return_value.execute.return_value = make_response(None)
        assert await SupabaseChatRepository(supabase_client).get_unread_count("c-1", "u-1") == 0

    @pytest.mark.asyncio
    async def test_mark_read_rpc(self, supabase_client, make_response):
        supabase_client.rpc.return_value.execute.return_value = make_response(None)

        await SupabaseChatRepository(supabase_client).mark_messages_read("c-1", "u-1")

        supabase_client.rpc.assert_called_once_with(
            "mark_messages_read", {"p_conversation_id": "c-1", "p_user_id": "u-1"}
        )

    @pytest.mark.asyncio
    async def test_direct_conversation_rpc(self, supabase_client, make_response):
        supabase_client.rpc.return_value.execute.return_value = make_response("c-77")

        conversation_id = await SupabaseChatRepository(supabase_client).get_or_create_direct_conversation("u-1", "u-2")

        supabase_client.rpc.assert_called_once_with(
            "get_or_create_direct_conversation", {"p_user1_id": "u-1", "p_user2_id": "u-2"}
        )
        assert conversation_id == "c-77"

    @pytest.mark.asyncio
    async def test_messages_with_senders(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([
            {**MESSAGE_ROW, "users": {"id": "u-2", "full_name": "Sam", "avatar_url": None}},
            {**MESSAGE_ROW, "id": "m-2", "users": None},
        ])

        rows = await SupabaseChatRepository(supabase_client).get_messages("c-1")

        supabase_client.query.order.assert_called_with("created_at", desc=False)
        assert rows[0][1].full_name == "Sam"
        assert rows[0][0].metadata == {}
        assert rows[1][1] is None

    @pytest.mark.asyncio
    async def test_insert_message_omits_empty_fields(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([MESSAGE_ROW])

        message = await SupabaseChatRepository(supabase_client).insert_message(MessageCreate(
            conversation_id="c-1", sender_id="u-2", content="Game at 7",
        ))

        supabase_client.query.insert.assert_called_once_with({
            "conversation_id": "c-1", "sender_id": "u-2", "content": "Game at 7", "message_type": "text",
        })
        assert message.id == "m-1"
        assert message.message_type == MessageType.TEXT

    @pytest.mark.asyncio
    async def test_find_team_conversation(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([{"id": "c-team"}])
        assert await SupabaseChatRepository(supabase_client).find_team_conversation("t-1") == "c-team"

        supabase_client.query.execute.return_value = make_response([])
        assert await SupabaseChatRepository(supabase_client).find_team_conversation("t-1") is None

    @pytest.mark.asyncio
    async def test_create_conversation(self, supabase_client, make_response):
        supabase_client.query.execute.return_value = make_response([
            {"id": "c-new", "type": "team", "title": "Bolts Team Chat", "team_id": "t-1"},
        ])

        conversation = await SupabaseChatRepository(supabase_client).create_conversation(
            "team", "Bolts Team Chat", team_id="t-1",
        )

        supabase_client.query.insert.assert_called_once_with(
            {"type": "team", "title": "Bolts Team Chat", "team_id": "t-1"}
        )
        assert conversation.id == "c-new"

    @pytest.mark.asyncio
    async def test_add_participants(self, supabase_client, make_response):
        repo = SupabaseChatRepository(supabase_client)

        await repo.add_participants("c-1", [])
        supabase_client.table.assert_not_called()

        supabase_client.query.execute.return_value = make_response([])
        await repo.add_participants("c-1", ["u-1", "u-2"])
        supabase_client.query.insert.assert_called_once_with([
            {"conversation_id": "c-1", "user_id": "u-1"},
            {"conversation_id": "c-1", "user_id": "u-2"},
        ])

    @pytest.mark.asyncio
    async def test_participants_and_sender(self, supabase_client, make_response):
        repo = SupabaseChatRepository(supabase_client)

        supabase_client.query.execute.return_value = make_response([
            {"user_id": "u-2", "users": {"id": "u-2", "full_name": "Sam", "avatar_url": None}},
        ])
        participants = await repo.get_participants("c-1")
        assert participants[0].full_name == "Sam"

        supabase_client.query.execute.return_value = make_response([])
        assert await repo.get_sender("ghost") is None

    def test_parse_message(self):
        message = SupabaseChatRepository(client=object()).parse_message(MESSAGE_ROW)
        assert message.conversation_id == "c-1"
        assert message.created_at.year == 2024
