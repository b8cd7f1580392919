"""Tests for live message delivery (Supabase Realtime and the demo bus)."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from core.domain.models import MessageCreate
from infrastructure.database.chat_repository import SupabaseChatRepository
from infrastructure.realtime.supabase_realtime import SupabaseMessageSubscriber, extract_record

ROW = {"id": "m-1", "conversation_id": "c-1", "sender_id": "u-2", "content": "hey"}


@pytest.fixture
def async_client():
    client = MagicMock()
    channel = MagicMock()
    channel.subscribe = AsyncMock()
    client.channel.return_value = channel
    client.remove_channel = AsyncMock()
    return client


@pytest.fixture
def subscriber(async_client):
    parse = SupabaseChatRepository(client=object()).parse_message
    return SupabaseMessageSubscriber(parse_message=parse, client=async_client)


def _registered_callback(async_client):
    return async_client.channel.return_value.on_postgres_changes.call_args.kwargs["callback"]


class TestExtractRecord:

    def test_nested_data_record(self):
        assert extract_record({"data": {"record": ROW, "type": "INSERT"}}) == ROW

    def test_new_key(self):
        assert extract_record({"new": ROW}) == ROW

    def test_flat_record(self):
        assert extract_record({"record": ROW}) == ROW

    def test_unrecognised(self):
        assert extract_record({"data": {}}) is None
        assert extract_record("INSERT") is None


class TestSupabaseMessageSubscriber:

    @pytest.mark.asyncio
    async def test_subscribes_to_conversation_inserts(self, subscriber, async_client):
        await subscriber.subscribe("c-1", AsyncMock())

        async_client.channel.assert_called_once_with("conversation:c-1")
        channel = async_client.channel.return_value
        args, kwargs = channel.on_postgres_changes.call_args
        assert args == ("INSERT",)
        assert kwargs["table"] == "messages"
        assert kwargs["schema"] == "public"
        assert kwargs["filter"] == "conversation_id=eq.c-1"
        channel.subscribe.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_insert_payload_reaches_callback(self, subscriber, async_client):
        received = []

        async def callback(message):
            received.append(message)

        await subscriber.subscribe("c-1", callback)
        _registered_callback(async_client)({"data": {"record": ROW}})
        await asyncio.sleep(0)

        assert [m.id for m in received] == ["m-1"]
        assert received[0].content == "hey"

    @pytest.mark.asyncio
    async def test_bad_payload_is_ignored(self, subscriber, async_client):
        callback = AsyncMock()

        await subscriber.subscribe("c-1", callback)
        _registered_callback(async_client)({"data": {"record": {"id": "m-1"}}})
        _registered_callback(async_client)({"unexpected": True})
        await asyncio.sleep(0)

        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_failed_callback_is_logged(self, subscriber, async_client, caplog):
        async def callback(message):
            raise ConnectionResetError("socket closed")

        subscription = await subscriber.subscribe("c-1", callback)
        _registered_callback(async_client)({"data": {"record": ROW}})
        for _ in range(3):
            await asyncio.sleep(0)

        assert "[REALTIME] Message callback failed on c-1: socket closed" in caplog.text
        assert not subscription._tasks

    @pytest.mark.asyncio
    async def test_unsubscribe_removes_channel(self, subscriber, async_client):
        subscription = await subscriber.subscribe("c-1", AsyncMock())

        await subscription.unsubscribe()

        async_client.remove_channel.assert_awaited_once_with(async_client.channel.return_value)

    @pytest.mark.asyncio
    async def test_missing_credentials(self, monkeypatch):
        from config.settings import settings

        monkeypatch.setattr(settings, "supabase_url", "")
        subscriber = SupabaseMessageSubscriber(parse_message=lambda row: row)

        with pytest.raises(RuntimeError):
            await subscriber.subscribe("c-1", AsyncMock())


class TestDemoMessageSubscriber:

    @pytest.mark.asyncio
    async def test_inserted_message_is_published(self, demo_repos):
        received = []

        async def callback(message):
            received.append(message.content)

        subscription = await demo_repos["subscriber"].subscribe("demo-conv-team-1", callback)
        await demo_repos["chat"].insert_message(MessageCreate(
            conversation_id="demo-conv-team-1", sender_id="demo-player", content="On my way",
        ))
        await subscription.unsubscribe()
        await demo_repos["chat"].insert_message(MessageCreate(
            conversation_id="demo-conv-team-1", sender_id="demo-player", content="Parking now",
        ))

        assert received == ["On my way"]

    @pytest.mark.asyncio
    async def test_other_conversations_not_delivered(self, demo_repos):
        callback = AsyncMock()

        await demo_repos["subscriber"].subscribe("demo-conv-league-1", callback)
        await demo_repos["chat"].insert_message(MessageCreate(
            conversation_id="demo-conv-team-1", sender_id="demo-player", content="hi",
        ))

        callback.assert_not_called()

    @pytest.mark.asyncio
    async def test_failing_subscriber_does_not_block_others(self, demo_repos):
        healthy = AsyncMock()
        broken = AsyncMock(side_effect=RuntimeError("socket closed"))

        await demo_repos["subscriber"].subscribe("demo-conv-team-1", broken)
        await demo_repos["subscriber"].subscribe("demo-conv-team-1", healthy)
        await demo_repos["chat"].insert_message(MessageCreate(
            conversation_id="demo-conv-team-1", sender_id="demo-player", content="hi",
        ))

        healthy.assert_awaited_once()
