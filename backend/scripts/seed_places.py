#!/usr/bin/env python3
"""
Load the starter places into the database. Run from backend/:
  python scripts/seed_places.py          # add seed places whose name is not present yet
  python scripts/seed_places.py --reset  # delete every place first
"""
import argparse
import sys
from pathlib import Path

backend_dir = Path(__file__).resolve().parent.parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

from dotenv import load_dotenv

load_dotenv(backend_dir / ".env")

from local_places.data.seed_places import get_seed_places
from local_places.db.session import SessionLocal, create_tables
from local_places.models.place import Place
from local_places.services.place_service import add_place


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the places table.")
    parser.add_argument("--reset", action="store_true", help="Delete all places before seeding")
    args = parser.parse_args()

    create_tables()
    db = SessionLocal()
    try:
        if args.reset:
            deleted = db.query(Place).delete()
            db.commit()
            print(f"Deleted {deleted} place(s)")
        existing = {name for (name,) in db.query(Place.name).all()}
        added = 0
        for place in get_seed_places():
            if place.name in existing:
                continue
            add_place(db, place)
            added += 1
        print(f"Added {added} place(s); {len(existing) + added} total")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
