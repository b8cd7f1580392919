"""
Realtime interfaces - live message delivery for an open conversation.
"""

from abc import ABC, abstractmethod
from typing import Awaitable, Callable

from core.domain.models import Message

MessageCallback = Callable[[Message], Awaitable[None]]


class ISubscription(ABC):
    """Handle for an active conversation subscription"""

    @abstractmethod
    async def unsubscribe(self) -> None:
        pass


class IMessageSubscriber(ABC):
    """Interface for subscribing to new messages in a conversation"""

    @abstractmethod
    async def subscribe(self, conversation_id: str, callback: MessageCallback) -> ISubscription:
        """Call ``callback`` for every message inserted into the conversation"""
        pass
