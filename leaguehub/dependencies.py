from typing import Optional
from fastapi import Request, Depends, HTTPException, status
from sqlmodel import Session

from .database import get_session
from .models.user import User
from .models.league import League
from .services.auth import get_user_by_session_token
from .services.leagues import get_membership
from .config import SESSION_COOKIE_NAME


async def get_current_user(
    request: Request,
    db: Session = Depends(get_session)
) -> Optional[User]:
    """Get the current logged-in user from session cookie."""
    session_token = request.cookies.get(SESSION_COOKIE_NAME)
    if not session_token:
        return None

    return get_user_by_session_token(db, session_token)


async def require_user(
    current_user: Optional[User] = Depends(get_current_user)
) -> User:
    """Require a logged-in user."""
    if not current_user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return current_user


async def require_league_member(
    league_id: int,
    current_user: User = Depends(require_user),
    db: Session = Depends(get_session)
) -> League:
    """Load the league in the path, rejecting callers who are not members."""
    league = db.get(League, league_id)
    if not league:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="League not found"
        )

    if not get_membership(db, league.id, current_user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not a member of this league"
        )
    return league
