"""
Seed rows for the in-memory demo data source.
Read-only: DemoStore copies these on construction.
"""

DEMO_USERS = [
    {
        "id": "demo-player",
        "email": "player@demo.com",
        "full_name": "Demo Player",
        "role": "player",
        "location_latitude": 40.7128,
        "location_longitude": -74.0060,
        "search_radius_miles": 25,
    },
    {
        "id": "demo-manager",
        "email": "manager@demo.com",
        "full_name": "Sarah Johnson",
        "role": "manager",
        "location_latitude": 40.7580,
        "location_longitude": -73.9855,
        "search_radius_miles": 10,
    },
    {
        "id": "demo-director",
        "email": "director@demo.com",
        "full_name": "Demo Director",
        "role": "director",
    },
    {
        "id": "demo-agent-maria",
        "email": "maria@demo.com",
        "full_name": "Maria Garcia",
        "role": "player",
        "location_latitude": 40.7831,
        "location_longitude": -73.9712,
    },
    {
        "id": "demo-agent-david",
        "email": "david@demo.com",
        "full_name": "David Kim",
        "role": "player",
        "location_latitude": 40.7505,
        "location_longitude": -73.9934,
    },
    {
        "id": "demo-agent-alex",
        "email": "alex@demo.com",
        "full_name": "Alex Rodriguez",
        "role": "player",
    },
]

DEMO_LEAGUES = [
    {
        "id": "demo-league-1",
        "name": "Spring Recreation League",
        "description": "Casual co-ed softball for all skill levels",
        "skill_level": "beginner",
        "location": "Central Park Complex",
        "location_latitude": 40.7829,
        "location_longitude": -73.9654,
        "season_start": "2024-03-01",
        "season_end": "2024-05-31",
        "registration_deadline": "2024-02-15",
        "base_fee": 150,
        "max_teams": 12,
        "current_teams": 8,
        "status": "open",
        "director_id": "demo-director",
    },
    {
        "id": "demo-league-2",
        "name": "Competitive Summer League",
        "description": "High-level play with playoffs and championships",
        "skill_level": "advanced",
        "location": "Riverside Sports Complex",
        "location_latitude": 40.7589,
        "location_longitude": -73.9851,
        "season_start": "2024-06-01",
        "season_end": "2024-08-31",
        "registration_deadline": "2024-05-15",
        "base_fee": 200,
        "max_teams": 10,
        "current_teams": 10,
        "status": "full",
        "director_id": "demo-director",
    },
    {
        "id": "demo-league-3",
        "name": "Corporate League",
        "description": "After-work games for company teams",
        "skill_level": "intermediate",
        "location": "Downtown Athletic Center",
        "location_latitude": 40.7505,
        "location_longitude": -73.9934,
        "base_fee": 120,
        "max_teams": 16,
        "current_teams": 6,
        "status": "open",
        "director_id": "demo-director",
    },
    {
        "id": "demo-league-4",
        "name": "Fall Classic League",
        "description": "Traditional softball with autumn vibes",
        "skill_level": "intermediate",
        "location": "Memorial Field Complex",
        "location_latitude": 40.7282,
        "location_longitude": -74.0776,
        "base_fee": 180,
        "max_teams": 14,
        "current_teams": 3,
        "status": "open",
        "director_id": "demo-director",
    },
    {
        "id": "demo-league-5",
        "name": "Lakeside Weekend League",
        "description": "Weekend doubleheaders by the lake",
        "skill_level": "competitive",
        "location": "Lakeside Fields",
        "base_fee": 160,
        "max_teams": 8,
        "current_teams": 2,
        "status": "open",
        "director_id": "demo-director",
    },
]

DEMO_TEAMS = [
    {
        "id": "demo-team-1",
        "name": "Thunder Bolts",
        "league_id": "demo-league-1",
        "league_name": "Spring Recreation League",
        "manager_id": "demo-manager",
        "description": "Looking for enthusiastic players who love to have fun and play competitive softball.",
        "skill_level": "intermediate",
        "current_players": 12,
        "max_players": 15,
        "total_fee": 150,
        "location_latitude": 40.7829,
        "location_longitude": -73.9654,
    },
    {
        "id": "demo-team-2",
        "name": "Base Crushers",
        "league_id": "demo-league-2",
        "league_name": "Competitive Summer League",
        "manager_id": "demo-manager",
        "description": "Serious competitive team seeking skilled players for tournament play.",
        "skill_level": "advanced",
        "current_players": 14,
        "max_players": 16,
        "total_fee": 40,
        "location_latitude": 40.7589,
        "location_longitude": -73.9851,
    },
    {
        "id": "demo-team-3",
        "name": "Office Sluggers",
        "league_id": "demo-league-3",
        "league_name": "Corporate League",
        "manager_id": "demo-manager",
        "description": "Corporate team looking for coworkers and friends to join our team.",
        "skill_level": "beginner",
        "current_players": 8,
        "max_players": 15,
        "total_fee": 40,
        "location_latitude": 40.7505,
        "location_longitude": -73.9934,
    },
]

# team_id -> user IDs on the roster
DEMO_ROSTERS = {
    "demo-team-1": ["demo-player"],
    "demo-team-2": [],
    "demo-team-3": [],
}

DEMO_FREE_AGENTS = [
    {
        "id": "demo-fa-1",
        "user_id": "demo-agent-alex",
        "name": "Alex Rodriguez",
        "experience_level": "intermediate",
        "preferred_positions": ["Shortstop", "Second Base"],
        "bio": "Played college softball, looking for a competitive team.",
    },
    {
        "id": "demo-fa-2",
        "user_id": "demo-agent-maria",
        "name": "Maria Garcia",
        "experience_level": "beginner",
        "preferred_positions": ["Left Field", "Right Field", "Center Field"],
        "bio": "New to softball but eager to learn and contribute.",
        "location_latitude": 40.7831,
        "location_longitude": -73.9712,
    },
    {
        "id": "demo-fa-3",
        "user_id": "demo-agent-david",
        "name": "David Kim",
        "experience_level": "advanced",
        "preferred_positions": ["Pitcher", "Catcher"],
        "bio": "15 years experience, former semi-pro player.",
        "location_latitude": 40.7505,
        "location_longitude": -73.9934,
    },
]

DEMO_CONVERSATIONS = [
    {
        "id": "demo-conv-team-1",
        "type": "team",
        "title": "Thunder Bolts Team Chat",
        "team_id": "demo-team-1",
        "participants": ["demo-player", "demo-manager"],
    },
    {
        "id": "demo-conv-league-1",
        "type": "league",
        "title": "Spring Recreation League",
        "participants": ["demo-manager", "demo-director"],
    },
]

DEMO_MESSAGES = [
    {
        "conversation_id": "demo-conv-team-1",
        "sender_id": "demo-manager",
        "content": "Practice moved to Tuesday 6pm at Central Park.",
    },
    {
        "conversation_id": "demo-conv-team-1",
        "sender_id": "demo-player",
        "content": "See you there!",
    },
    {
        "conversation_id": "demo-conv-league-1",
        "sender_id": "demo-director",
        "content": "Registration closes Feb 15. Team fees due by opening day.",
        "message_type": "system",
    },
]
