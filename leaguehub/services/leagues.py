import logging
from datetime import datetime, UTC
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from .. import config
from ..models.game import Game
from ..models.league import League, LeagueMembership
from ..models.point import Point
from ..models.user import User

logger = logging.getLogger(__name__)


def get_league_by_invite_key(db: Session, invite_key: str) -> Optional[League]:
    statement = select(League).where(League.invite_key == invite_key)
    return db.exec(statement).first()


def get_membership(db: Session, league_id: int, user_id: int) -> Optional[LeagueMembership]:
    statement = select(LeagueMembership).where(
        LeagueMembership.league_id == league_id,
        LeagueMembership.user_id == user_id
    )
    return db.exec(statement).first()


def get_memberships(db: Session, league_id: int) -> List[LeagueMembership]:
    statement = (
        select(LeagueMembership)
        .where(LeagueMembership.league_id == league_id)
        .order_by(LeagueMembership.id)
    )
    return list(db.exec(statement).all())


def get_member_ids(db: Session, league_id: int) -> List[int]:
    """Member user ids in the order they joined."""
    return [membership.user_id for membership in get_memberships(db, league_id)]


def get_members(db: Session, league_id: int) -> List[User]:
    statement = (
        select(User)
        .join(LeagueMembership, LeagueMembership.user_id == User.id)
        .where(LeagueMembership.league_id == league_id)
        .order_by(LeagueMembership.id)
    )
    return list(db.exec(statement).all())


def get_user_leagues(db: Session, user_id: int) -> List[League]:
    """All leagues the user is a member of, in creation order."""
    statement = (
        select(League)
        .join(LeagueMembership, LeagueMembership.league_id == League.id)
        .where(LeagueMembership.user_id == user_id)
        .order_by(League.id)
    )
    return list(db.exec(statement).all())


def find_unknown_users(db: Session, user_ids: List[int]) -> List[int]:
    """Return the ids in ``user_ids`` that do not belong to any user."""
    if not user_ids:
        return []
    existing = set(db.exec(select(User.id).where(User.id.in_(user_ids))).all())
    return [user_id for user_id in user_ids if user_id not in existing]


def seed_league_points(db: Session, league_id: int) -> int:
    """Add one Point per existing game for the league. Does not commit."""
    game_ids = db.exec(select(Game.id)).all()
    db.add_all([Point(game_id=game_id, league_id=league_id) for game_id in game_ids])
    return len(game_ids)


def create_league(
    db: Session,
    owner: User,
    name: str,
    description: Optional[str] = None,
    image_url: Optional[str] = None
) -> League:
    """
    Create a league with the owner as its only member.

    The league row, its invite key, the owner's membership and the seeded
    points are committed together.
    """
    league = League(name=name, description=description, image_url=image_url)
    try:
        db.add(league)
        db.flush()

        # The league id doubles as its invite key
        league.invite_key = str(league.id)
        db.add(LeagueMembership(league_id=league.id, user_id=owner.id))
        points_created = seed_league_points(db, league.id)

        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(league)
    logger.info(
        "League %s created by user %s with %d points",
        league.id, owner.id, points_created
    )
    return league


def update_league(
    db: Session,
    league: League,
    name: Optional[str] = None,
    description: Optional[str] = None,
    member_ids: Optional[List[int]] = None,
    image_url: Optional[str] = None
) -> League:
    """Apply only the fields that were supplied. ``member_ids`` replaces the member list."""
    if name is not None:
        league.name = name
    if description is not None:
        league.description = description
    if image_url is not None:
        league.image_url = image_url

    try:
        if member_ids is not None:
            for membership in get_memberships(db, league.id):
                db.delete(membership)
            db.flush()
            db.add_all([
                LeagueMembership(league_id=league.id, user_id=user_id)
                for user_id in member_ids
            ])

        league.updated_at = datetime.now(UTC)
        db.add(league)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(league)

    logger.info("League %s updated", league.id)
    return league


def add_member(db: Session, league: League, user: User) -> bool:
    """Add the user to the league. Returns False if they were already a member."""
    if get_membership(db, league.id, user.id):
        return False

    db.add(LeagueMembership(league_id=league.id, user_id=user.id))
    try:
        db.commit()
    except IntegrityError:
        # A concurrent join for the same user committed first
        db.rollback()
        return False

    logger.info("User %s joined league %s", user.id, league.id)
    return True


def remove_member(db: Session, league: League, user: User) -> None:
    membership = get_membership(db, league.id, user.id)
    if membership:
        db.delete(membership)
        db.commit()
        logger.info("User %s left league %s", user.id, league.id)


def delete_league(db: Session, league: League) -> None:
    league_id = league.id

    for membership in get_memberships(db, league_id):
        db.delete(membership)

    points = db.exec(select(Point).where(Point.league_id == league_id)).all()
    if config.DELETE_POINTS_WITH_LEAGUE:
        for point in points:
            db.delete(point)

    db.delete(league)
    db.commit()

    logger.info("League %s deleted", league_id)
    if points and not config.DELETE_POINTS_WITH_LEAGUE:
        logger.warning("League %s left %d point records behind", league_id, len(points))
