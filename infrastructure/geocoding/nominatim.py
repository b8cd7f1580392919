"""
Nominatim (OpenStreetMap) geocoder.
Usage policy requires an identifying User-Agent and at most ~1 request/second.
"""

import logging
from typing import Optional

import httpx

from config.settings import settings
from core.domain.models import Coordinate
from core.interfaces.geocoding import IGeocoder

logger = logging.getLogger(__name__)


class NominatimGeocoder(IGeocoder):

    def __init__(
        self,
        base_url: Optional[str] = None,
        user_agent: Optional[str] = None,
        country_codes: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.geocoder_url
        self.user_agent = user_agent or settings.geocoder_user_agent
        self.country_codes = settings.geocoder_country_codes if country_codes is None else country_codes
        self.timeout = timeout or settings.geocoder_timeout
        self._transport = transport

    async def geocode(self, query: str) -> Optional[Coordinate]:
        params = {"format": "json", "q": query, "limit": 1}
        if self.country_codes:
            params["countrycodes"] = self.country_codes

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(
                    self.base_url,
                    params=params,
                    headers={"User-Agent": self.user_agent},
                )
                response.raise_for_status()
                results = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"[GEO] Geocoding '{query}' failed: {e}")
            return None

        if not results:
            return None

        try:
            best = results[0]
            return Coordinate(latitude=float(best["lat"]), longitude=float(best["lon"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"[GEO] Unexpected geocoder result for '{query}': {e}")
            return None
