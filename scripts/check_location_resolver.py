"""
Smoke check for the location resolver against the live Google Maps APIs.

Uses one Geocoding request and one Elevation request per place.

Run: python scripts/check_location_resolver.py "Nidaros Cathedral, Trondheim" ["Another place" ...]
"""

import argparse
import logging
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from core.config import settings
from services.location import LocationResolver, LocationResolverError


def main() -> int:
    parser = argparse.ArgumentParser(description="Resolve places to coordinates and elevation")
    parser.add_argument("places", nargs="+", help="Free-text place descriptions")
    parser.add_argument("--timeout", type=float, default=None, help="Per-place timeout in seconds")
    args = parser.parse_args()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    if not settings.GOOGLE_MAPS_API_KEY:
        print("⚠️  GOOGLE_MAPS_API_KEY not set in .env")
        return 2

    failures = 0
    with LocationResolver.from_settings() as resolver:
        for place in args.places:
            try:
                fix = resolver.resolve(place, timeout=args.timeout)
            except LocationResolverError as e:
                print(f"✗ {place}: {type(e).__name__}: {e}")
                failures += 1
                continue

            if fix is None:
                print(f"✗ {place}: not found")
                continue

            print(f"✓ {place}")
            print(f"  - Coordinates: {fix.coordinates.latitude}, {fix.coordinates.longitude}")
            print(f"  - Elevation: {fix.elevation.meters:.1f} MASL")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
