"""
Geocoding interface - resolve a typed place (city, ZIP code) to a coordinate.
"""

from abc import ABC, abstractmethod
from typing import Optional

from core.domain.models import Coordinate


class IGeocoder(ABC):

    @abstractmethod
    async def geocode(self, query: str) -> Optional[Coordinate]:
        """Best match for the query, None when nothing was found or the lookup failed"""
        pass
