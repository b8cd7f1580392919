"""English strings for user-facing messages."""

EN_STRINGS = {
    # === DISTANCE ===
    "distance_unknown": "Distance unknown",
    "distance_feet": "{feet} ft away",
    "distance_miles": "{miles} mi away",

    # === LOCATION SETUP ===
    "location_required": "Please enter a city or zip code",
    "location_radius_invalid": "Search radius must be between {min} and {max} miles",
    "location_not_found": "Location not found. Please try a different city or zip code.",
    "location_failed": "Failed to set location. Please try again.",
    "location_geocoding_disabled": "Location search is currently unavailable.",

    # === CHAT ===
    "team_chat_title": "{team_name} Team Chat",
}
