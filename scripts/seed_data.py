"""
Seed script to populate the database with sample data.
Run this script to create:
- Candidates (vote section) with empty tallies
- Professor directory entries
- The home page banner image
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from campusvote import create_app, get_services, shutdown_app
from campusvote.models.candidate import Candidate
from campusvote.models.home_banner import HomeBanner
from campusvote.models.professor import Professor


CANDIDATES = [
    {'enrollment_number': '22CS001', 'name': 'Aarav Mehta', 'image_url': '/images/aarav.jpg'},
    {'enrollment_number': '22CS014', 'name': 'Diya Sharma', 'image_url': '/images/diya.jpg'},
    {'enrollment_number': '22EC007', 'name': 'Kabir Singh', 'image_url': '/images/kabir.jpg'},
    {'enrollment_number': '22ME021', 'name': 'Ananya Iyer', 'image_url': '/images/ananya.jpg'},
    {'enrollment_number': '22IT003', 'name': 'Rohan Das', 'image_url': '/images/rohan.jpg'},
]

PROFESSORS = [
    {'name': 'Dr. Meera Nair', 'role': 'Head of Department', 'image_url': '/images/meera.jpg'},
    {'name': 'Prof. Arjun Rao', 'role': 'Election Coordinator', 'image_url': '/images/arjun.jpg'},
    {'name': 'Dr. Sana Qureshi', 'role': 'Faculty Advisor', 'image_url': '/images/sana.jpg'},
]

HOME_IMAGE_URL = '/images/home-banner.jpg'


def seed_candidates(db):
    """Create candidates with zero votes."""
    db[Candidate.collection_name].delete_many({})
    for c in CANDIDATES:
        candidate = Candidate.create(db, **c)
        print(f"  Created candidate: {candidate.name} ({candidate.enrollment_number})")


def seed_professors(db):
    """Replace the professor directory."""
    db[Professor.collection_name].delete_many({})
    for p in PROFESSORS:
        db[Professor.collection_name].insert_one(Professor(**p).to_dict())
        print(f"  Created professor: {p['name']}")


def clear_votes(db):
    """Clear votes for fresh testing."""
    db.votes.delete_many({})
    print("  Cleared all votes")


def main():
    """Run all seed functions."""
    print("=" * 60)
    print("Seeding Campus Vote Database")
    print("=" * 60)

    app = create_app()

    try:
        with app.app_context():
            db = get_services().store.db

            print("\n1. Creating candidates...")
            seed_candidates(db)

            print("\n2. Creating professor directory...")
            seed_professors(db)

            print("\n3. Setting home banner...")
            HomeBanner.set(db, HOME_IMAGE_URL)
            print(f"  Banner: {HOME_IMAGE_URL}")

            print("\n4. Clearing votes (fresh start)...")
            clear_votes(db)
    finally:
        shutdown_app(app)

    print("\n" + "=" * 60)
    print("Database seeding complete!")
    print("=" * 60)


if __name__ == '__main__':
    main()
