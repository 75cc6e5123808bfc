"""
Recount every candidate's tally from the votes collection.

Run this after a crash or a failed tally update left the candidate counts
out of step with the recorded votes.

Usage:
    python scripts/rebuild_tallies.py
"""

import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from campusvote import create_app, get_services, shutdown_app


def main():
    app = create_app()

    try:
        with app.app_context():
            result = get_services().votes.rebuild_tallies()
    finally:
        shutdown_app(app)

    print(f"Total votes counted: {result['total_votes']}")
    print(f"Candidates updated: {result['candidates_updated']}")


if __name__ == '__main__':
    main()
