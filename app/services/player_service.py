"""Player store operations.

All reads and the seed-time bulk insert go through these functions; the
table is never updated or deleted from by the application.
"""

import logging
from typing import List, Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.players import PlayerCreate
from app.schemas.players import PlayerTable

logger = logging.getLogger(__name__)

# Largest value a 64-bit INTEGER primary key can hold
MAX_PLAYER_ID = 2**63 - 1


class StoreError(Exception):
    """A query or insert against the player store failed."""


class PlayerNotFoundError(StoreError):
    """No player row matched the lookup."""


async def count_players(db: AsyncSession) -> int:
    """Return the total number of stored players."""
    try:
        result = await db.execute(select(func.count()).select_from(PlayerTable))
    except SQLAlchemyError as exc:
        raise StoreError(f"failed to count players: {exc}") from exc
    return int(result.scalar_one())


async def get_all_players(db: AsyncSession) -> List[PlayerTable]:
    """Return every stored player, ordered by id."""
    try:
        result = await db.execute(select(PlayerTable).order_by(PlayerTable.id))  # type: ignore[arg-type]
    except SQLAlchemyError as exc:
        raise StoreError(f"failed to list players: {exc}") from exc
    return list(result.scalars().all())


async def get_player_by_id(db: AsyncSession, player_id: int) -> PlayerTable:
    """Fetch one player by primary key.

    Raises:
        ValueError: if ``player_id`` is negative
        PlayerNotFoundError: if no row has that id
    """
    if player_id < 0:
        raise ValueError(f"player id must be non-negative, got {player_id}")
    try:
        player = await db.get(PlayerTable, player_id)
    except SQLAlchemyError as exc:
        raise StoreError(f"failed to get player {player_id}: {exc}") from exc
    if player is None:
        raise PlayerNotFoundError(f"no player with id {player_id}")
    return player


async def get_random_player(db: AsyncSession) -> PlayerTable:
    """Return one player chosen uniformly at random by the database."""
    stmt = select(PlayerTable).order_by(func.random()).limit(1)
    try:
        result = await db.execute(stmt)
    except SQLAlchemyError as exc:
        raise StoreError(f"failed to get random player: {exc}") from exc
    player = result.scalars().first()
    if player is None:
        raise PlayerNotFoundError("player store is empty")
    return player


async def add_all_players(db: AsyncSession, players: Sequence[PlayerCreate]) -> int:
    """Insert ``players`` in a single transaction.

    Either every record is committed or none are; on failure the
    transaction is rolled back and ``StoreError`` is raised.

    Returns:
        Number of rows inserted
    """
    rows = [PlayerTable.model_validate(p) for p in players]
    try:
        db.add_all(rows)
        await db.commit()
    except SQLAlchemyError as exc:
        await db.rollback()
        raise StoreError(f"failed to insert {len(rows)} players: {exc}") from exc
    logger.info(f"Inserted {len(rows)} players")
    return len(rows)
