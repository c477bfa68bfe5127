#!/usr/bin/env python3
# =============================================================================
# scripts/seed_brands.py - Default Brand Seeding
# =============================================================================
# Inserts the default brands and lists what the brands table holds.
# Safe to re-run: a brand whose slug already exists is reported and skipped.
#
# Usage:
#   poetry run python scripts/seed_brands.py
#
# Prerequisites:
#   - scripts/sql/brand_assets.sql applied to the database
#   - SUPABASE_URL / SUPABASE_SERVICE_KEY set (.env file)
#   - A public "brand-assets" storage bucket
# =============================================================================

import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from app.exceptions import BrandSlugConflictError
from core.services.brand_service import BrandService
from lib.supabase_client import SupabaseClientError

DEFAULT_BRANDS = [
    ("Berelvant", "AI automation and growth systems"),
    ("CVRedi", "Conversion rate optimization tools"),
    ("FastTrack Hub", "Community and mentorship platform"),
]


def main() -> int:
    """Seed default brands; returns a process exit code."""
    print("=" * 60)
    print("Brand Assets Manager - default brands")
    print("=" * 60)
    print()

    service = BrandService()

    try:
        for name, description in DEFAULT_BRANDS:
            try:
                brand = service.create_brand(name, description)
                print(f"  + {brand['name']} ({brand['slug']})")
            except BrandSlugConflictError:
                print(f"  = {name} already exists")

        brands = service.list_brands()
    except SupabaseClientError as e:
        print(f"Error: {e.message}")
        if e.suggestion:
            print(f"  {e.suggestion}")
        print("If the tables don't exist yet, run scripts/sql/brand_assets.sql first.")
        return 1

    print()
    print(f"Found {len(brands)} brands:")
    for brand in brands:
        print(f"  - {brand['name']} ({brand['slug']})")

    print()
    print("Next: make sure the storage bucket is public.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
