"""
SQLModels for players, to be stored in the database.
"""
from typing import Optional
from sqlmodel import Field as SQLField

from app.models.players import PlayerBase


class PlayerTable(PlayerBase, table=True):  # type: ignore[call-arg]
    __tablename__ = "players"

    id: Optional[int] = SQLField(default=None, primary_key=True)
    # Source-side player key (e.g. "jamesle01")
    source_slug: Optional[str] = SQLField(default=None, unique=True, index=True)
