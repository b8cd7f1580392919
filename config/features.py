"""
Feature Flags - Easy on/off toggle for features.
Change values here to enable/disable functionality.
"""

import os


class Features:
    """Feature toggles - set via env vars or defaults"""

    # === CHAT ===
    # Live message delivery over realtime channels
    REALTIME_ENABLED: bool = os.getenv("REALTIME_ENABLED", "true").lower() == "true"

    # === LOCATION ===
    GEOCODING_ENABLED: bool = os.getenv("GEOCODING_ENABLED", "true").lower() == "true"
    DEFAULT_SEARCH_RADIUS: int = int(os.getenv("DEFAULT_SEARCH_RADIUS", "25"))  # miles

    # === DEBUG ===
    DEBUG_MODE: bool = os.getenv("DEBUG", "false").lower() == "true"

    @classmethod
    def to_dict(cls) -> dict:
        """Get all features as dict (useful for logging)"""
        return {
            "realtime_enabled": cls.REALTIME_ENABLED,
            "geocoding_enabled": cls.GEOCODING_ENABLED,
            "default_search_radius": cls.DEFAULT_SEARCH_RADIUS,
            "debug_mode": cls.DEBUG_MODE,
        }


# Shortcut
features = Features()
