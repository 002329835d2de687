from typing import Optional

from pydantic import field_validator
from sqlmodel import SQLModel, Field as SQLField


class PlayerBase(SQLModel):
    name: str = SQLField(index=True)
    position: Optional[str] = None
    age: Optional[int] = None
    team: Optional[str] = SQLField(default=None, description="Team abbreviation")
    games: Optional[int] = SQLField(default=None, description="Games played")
    points: Optional[float] = SQLField(default=None, description="Points per game")
    rebounds: Optional[float] = SQLField(default=None, description="Rebounds per game")
    assists: Optional[float] = SQLField(default=None, description="Assists per game")

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be blank")
        return v


class PlayerRead(PlayerBase):
    id: int


class PlayerCreate(PlayerBase):
    source_slug: Optional[str] = None
