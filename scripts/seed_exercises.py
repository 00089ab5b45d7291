"""Create tables and seed the default exercise catalog.

Usage:
    python scripts/seed_exercises.py [--skip-create-tables]
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
_project_root = Path(__file__).parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from loguru import logger

from fitfeed.db.models import Base
from fitfeed.db.seed import seed_exercises
from fitfeed.db.session import get_engine, get_session


def run(create_tables: bool = True) -> int:
    """Seed the catalog, optionally creating tables first. Returns the number inserted."""
    if create_tables:
        Base.metadata.create_all(bind=get_engine())
        logger.info("[SEED] Database tables created")

    with get_session() as session:
        return seed_exercises(session)


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the default exercise catalog")
    parser.add_argument("--skip-create-tables", action="store_true", help="Assume tables already exist")
    args = parser.parse_args()

    created = run(create_tables=not args.skip_create_tables)
    print(f"Seed completed: {created} new exercises")


if __name__ == "__main__":
    main()
