"""
Location service - resolve a typed city / ZIP code and save it on the user profile.

Every failure comes back as a user-facing message in LocationUpdateResult;
nothing here raises for bad input or lookup problems.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from core.domain.constants import MIN_SEARCH_RADIUS, MAX_SEARCH_RADIUS
from core.domain.models import User, UserLocationUpdate
from core.interfaces.geocoding import IGeocoder
from core.interfaces.repositories import IUserRepository
from locales import t

logger = logging.getLogger(__name__)


@dataclass
class LocationUpdateResult:
    ok: bool
    user: Optional[User] = None
    error: Optional[str] = None


class LocationService:

    def __init__(self, user_repo: IUserRepository, geocoder: Optional[IGeocoder]):
        self.user_repo = user_repo
        self.geocoder = geocoder

    @staticmethod
    def validate(query: str, search_radius) -> Optional[str]:
        """Return an error message, or None when the input is usable."""
        if not query or not query.strip():
            return t("location_required")

        try:
            radius = float(search_radius)
        except (TypeError, ValueError):
            radius = None
        if radius is None or not (MIN_SEARCH_RADIUS <= radius <= MAX_SEARCH_RADIUS):
            return t("location_radius_invalid", min=MIN_SEARCH_RADIUS, max=MAX_SEARCH_RADIUS)
        return None

    async def set_location(self, user_id: str, query: str, search_radius) -> LocationUpdateResult:
        error = self.validate(query, search_radius)
        if error:
            return LocationUpdateResult(ok=False, error=error)

        if self.geocoder is None:
            return LocationUpdateResult(ok=False, error=t("location_geocoding_disabled"))

        coordinate = await self.geocoder.geocode(query.strip())
        if coordinate is None:
            logger.info(f"[GEO] No match for '{query.strip()}'")
            return LocationUpdateResult(ok=False, error=t("location_not_found"))

        try:
            user = await self.user_repo.update_location(user_id, UserLocationUpdate(
                location_latitude=coordinate.latitude,
                location_longitude=coordinate.longitude,
                search_radius_miles=float(search_radius),
            ))
        except Exception as e:
            logger.error(f"[GEO] Saving location for {user_id} failed: {e}")
            return LocationUpdateResult(ok=False, error=t("location_failed"))

        if user is None:
            return LocationUpdateResult(ok=False, error=t("location_failed"))

        logger.info(f"[GEO] User {user_id} location set, radius {search_radius} mi")
        return LocationUpdateResult(ok=True, user=user)
