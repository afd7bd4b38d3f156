from datetime import datetime, UTC
from typing import Optional
from sqlmodel import SQLModel, Field, UniqueConstraint


class Point(SQLModel, table=True):
    """Per-league scoring record for a single game."""
    __tablename__ = "points"
    __table_args__ = (UniqueConstraint("game_id", "league_id", name="unique_game_league"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    game_id: int = Field(foreign_key="games.id", index=True)
    league_id: int = Field(foreign_key="leagues.id", index=True)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
