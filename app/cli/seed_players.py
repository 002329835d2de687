"""Seed the player store outside the web server.

Runs the same seed-if-empty check the API performs on startup. Useful for
populating the database ahead of a deploy.

Usage:
    python -m app.cli.seed_players [--dry-run] [--url URL]

Exit codes:
    0 - Success
    1 - Failure (check logs for details)
"""

import argparse
import asyncio
import logging
import sys
from typing import Optional, Sequence

from app.models.players import PlayerCreate
from app.services.player_scraper import get_player_data
from app.services.seed_service import check_and_seed
from app.utils.db_async import SessionLocal, dispose_engine, init_db

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("seed_players")


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch and parse the source but do not write to the database",
    )
    parser.add_argument("--url", default=None, help="Override the scrape source URL")
    return parser.parse_args(argv)


async def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    async def fetch() -> Sequence[PlayerCreate]:
        return await get_player_data(url=args.url)

    try:
        if args.dry_run:
            players = await fetch()
            logger.info(f"Dry run: fetched {len(players)} players, nothing written")
            return 0

        await init_db()
        async with SessionLocal() as db:
            inserted = await check_and_seed(db, fetch=fetch)
        logger.info(f"Seed complete: {inserted} players inserted")
        return 0

    except Exception as e:
        logger.error(f"Seed failed: {e}", exc_info=True)
        return 1

    finally:
        await dispose_engine()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
