"""
Domain constants - distance math, search radius options and limits.
Centralized here for easy modification and future localization.
"""

# === Distance ===
EARTH_RADIUS_MILES = 3959  # mean radius
FEET_PER_MILE = 5280

# Search radius choices offered to users (None = no limit)
RADIUS_OPTIONS = [
    {"value": 5, "label": "5 miles"},
    {"value": 10, "label": "10 miles"},
    {"value": 15, "label": "15 miles"},
    {"value": 25, "label": "25 miles"},
    {"value": 50, "label": "50 miles"},
    {"value": 100, "label": "100 miles"},
    {"value": None, "label": "No limit"},
]

# Limits
MIN_SEARCH_RADIUS = 1
MAX_SEARCH_RADIUS = 500
MAX_MESSAGE_LENGTH = 4000

