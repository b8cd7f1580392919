"""
Backfill coordinates for leagues that have a location text but no lat/lon.
Run after importing leagues so distance sorting covers every league.
"""

import argparse
import asyncio
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from infrastructure.database.league_repository import SupabaseLeagueRepository
from infrastructure.geocoding.nominatim import NominatimGeocoder

# Nominatim usage policy: max 1 request per second
REQUEST_DELAY = 1.1


async def backfill(dry_run: bool = False):
    league_repo = SupabaseLeagueRepository()
    geocoder = NominatimGeocoder()

    leagues = await league_repo.list_missing_coordinates()
    print(f"Found {len(leagues)} leagues without coordinates")

    success = 0
    failed = 0

    for league in leagues:
        coordinate = await geocoder.geocode(league.location)
        if coordinate is None:
            print(f"  FAIL {league.name} - no match for '{league.location}'")
            failed += 1
        elif dry_run:
            print(f"  DRY {league.name} -> ({coordinate.latitude}, {coordinate.longitude})")
            success += 1
        else:
            await league_repo.update_coordinates(league.id, coordinate.latitude, coordinate.longitude)
            print(f"  OK {league.name} -> ({coordinate.latitude}, {coordinate.longitude})")
            success += 1

        await asyncio.sleep(REQUEST_DELAY)

    print(f"\nDone: {success} success, {failed} failed, {len(leagues)} total")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--dry-run", action="store_true", help="Geocode but do not write")
    args = parser.parse_args()
    asyncio.run(backfill(dry_run=args.dry_run))
