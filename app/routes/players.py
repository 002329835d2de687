import logging
import re
from typing import List, Union

from fastapi import APIRouter, Depends, Response
from fastapi.responses import PlainTextResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.players import PlayerRead
from app.services.player_service import (
    MAX_PLAYER_ID,
    StoreError,
    get_all_players,
    get_player_by_id,
    get_random_player,
)
from app.schemas.players import PlayerTable
from app.utils.db_async import get_session

logger = logging.getLogger(__name__)

router = APIRouter(tags=["players"])

_PLAYER_ID_RE = re.compile(r"[0-9]+")


def _valid_player_id(raw: str) -> bool:
    """ASCII digits only, within the 64-bit range of the id column."""
    if not _PLAYER_ID_RE.fullmatch(raw):
        return False
    # int() rejects digit strings longer than sys.get_int_max_str_digits()
    return len(raw) <= 19 and int(raw) <= MAX_PLAYER_ID


@router.get("/hello", response_class=PlainTextResponse)
async def hello() -> str:
    """Liveness check."""
    return "Hello World"


@router.get("/player", response_model=List[PlayerRead])
async def list_players(
    db: AsyncSession = Depends(get_session),
) -> Union[List[PlayerTable], Response]:
    """List all players."""
    try:
        return await get_all_players(db)
    except StoreError:
        logger.exception("Failed to get players")
        return Response(status_code=500)


@router.get("/player/{player_id}", response_model=PlayerRead)
async def get_player(
    player_id: str,
    db: AsyncSession = Depends(get_session),
) -> Union[PlayerTable, Response]:
    """Fetch a single player by numeric id.

    A missing player is reported as 500, the same as any other store failure.
    """
    if not _valid_player_id(player_id):
        logger.warning(f"Bad request, invalid ID: {player_id!r}")
        return Response(status_code=400)

    try:
        return await get_player_by_id(db, int(player_id))
    except StoreError:
        logger.exception(f"Failed to get player by ID {player_id}")
        return Response(status_code=500)


@router.get("/random", response_model=PlayerRead)
async def random_player(
    db: AsyncSession = Depends(get_session),
) -> Union[PlayerTable, Response]:
    """Return one player picked at random."""
    try:
        return await get_random_player(db)
    except StoreError:
        logger.exception("Failed to get random player")
        return Response(status_code=500)
