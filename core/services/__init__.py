from core.services.chat_service import ChatService
from core.services.discovery_service import DiscoveryService
from core.services.location_service import LocationService, LocationUpdateResult

__all__ = [
    "ChatService",
    "DiscoveryService",
    "LocationService",
    "LocationUpdateResult",
]
