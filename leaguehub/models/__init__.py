from .user import User
from .session import Session
from .game import Game
from .league import League, LeagueMembership
from .point import Point

__all__ = [
    "User",
    "Session",
    "Game",
    "League",
    "LeagueMembership",
    "Point",
]
