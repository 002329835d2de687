"""Populate an empty player store from the external source."""

import logging
from typing import Awaitable, Callable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.players import PlayerCreate
from app.services.player_scraper import get_player_data
from app.services.player_service import add_all_players, count_players

logger = logging.getLogger(__name__)

PlayerFetcher = Callable[[], Awaitable[Sequence[PlayerCreate]]]


async def check_and_seed(
    db: AsyncSession,
    fetch: PlayerFetcher = get_player_data,
) -> int:
    """Seed the store once if it holds no players.

    The fetcher is only called when the store is empty. Any error from the
    count, fetch or insert step is raised unchanged.

    Returns:
        Number of players inserted (0 if the store was already populated)
    """
    player_count = await count_players(db)
    if player_count > 0:
        logger.info(f"Player store already holds {player_count} players; skipping seed")
        return 0

    logger.info("Player store is empty; adding players to database")
    players = await fetch()
    return await add_all_players(db, players)
