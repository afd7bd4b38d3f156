from datetime import datetime, UTC
from typing import Optional
from sqlmodel import SQLModel, Field


class Game(SQLModel, table=True):
    __tablename__ = "games"

    id: Optional[int] = Field(default=None, primary_key=True)
    home_team: str
    away_team: str
    kickoff_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    # Final score (filled once the game is played)
    home_score: Optional[int] = Field(default=None)
    away_score: Optional[int] = Field(default=None)

    status: str = Field(default="scheduled")  # scheduled, in_progress, completed

    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
