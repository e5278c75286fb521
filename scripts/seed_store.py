#!/usr/bin/env python
"""Create the database schema and seed store defaults.

This script:
1. Creates every table (idempotent)
2. Loads config/store_defaults.yaml into settings, materials, colors
   and complexity tiers

Usage:
    # Local SQLite database
    DB_URL_OVERRIDE=sqlite+aiosqlite:///./printshop.db python scripts/seed_store.py

    # Use another defaults file and overwrite edited settings
    python scripts/seed_store.py --defaults ./my_store.yaml --overwrite

    # Only show what the defaults file contains
    python scripts/seed_store.py --show
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from printshop.core.store_defaults import load_store_defaults
from printshop.infra.database import close_db_engine, get_db_session, get_engine
from printshop.infra.logging import get_logger, setup_logging
from printshop.services.store_seeder import create_tables, seed_store

setup_logging()
logger = get_logger(__name__)


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Create tables and seed print shop defaults",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--defaults",
        type=str,
        help="Path to a store defaults YAML file (default: settings.store_defaults_path)",
    )
    parser.add_argument(
        "--overwrite",
        action="store_true",
        help="Overwrite settings that already exist",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the defaults file contents and exit",
    )
    return parser.parse_args()


async def main() -> int:
    """Main entry point."""
    args = parse_args()

    try:
        defaults = load_store_defaults(args.defaults)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    if args.show:
        print(f"\nStore defaults v{defaults.version}")
        print("-" * 40)
        for key, value in sorted(defaults.settings.items()):
            print(f"  {key}: {value}")
        print(f"\nMaterials: {', '.join(m.name for m in defaults.materials)}")
        print(f"Colors: {', '.join(c.name for c in defaults.colors)}")
        print(f"Complexity tiers: {', '.join(t.tier for t in defaults.complexity_tiers)}")
        return 0

    try:
        await create_tables(get_engine())
        async with get_db_session() as session:
            report = await seed_store(session, defaults, overwrite=args.overwrite)
    except Exception as e:
        logger.error("Seeding failed", error=str(e))
        print(f"Seeding failed: {e}")
        return 1
    finally:
        await close_db_engine()

    print("\nStore seeded:")
    print(f"  Settings: {report.settings}")
    print(f"  Materials: {report.materials}")
    print(f"  Colors: {report.colors}")
    print(f"  Complexity tiers: {report.complexity_tiers}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
