from datetime import datetime
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Form, File, UploadFile, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import Session

from ..database import get_session
from ..dependencies import require_user, require_league_member
from ..models.user import User
from ..models.league import League
from ..services import leagues as league_service
from ..services.images import ImageHost, get_image_host

router = APIRouter(prefix="/leagues", tags=["leagues"])


class MemberResponse(BaseModel):
    """Public view of a league member."""
    id: int
    display_name: str


class LeagueResponse(BaseModel):
    """A league with its members as user ids."""
    id: int
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    invite_key: Optional[str] = None
    members: List[int]
    created_at: datetime
    updated_at: datetime


class LeagueWithMembersResponse(LeagueResponse):
    """A league with its members expanded to user records."""
    members: List[MemberResponse]


class LeagueListResponse(BaseModel):
    leagues: List[LeagueWithMembersResponse]


class CreatedLeagueResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    new_league_doc: LeagueResponse = Field(alias="newLeagueDoc")


class UpdatedLeagueResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    updated_league_doc: LeagueResponse = Field(alias="updatedLeagueDoc")


class JoinedLeagueResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    joined_league: LeagueResponse = Field(alias="joinedLeague")


class JoinLeagueBody(BaseModel):
    """Schema for joining a league by invite key."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    invite_key: str = Field(alias="inviteKey")


def league_response(db: Session, league: League) -> LeagueResponse:
    return LeagueResponse(
        id=league.id,
        name=league.name,
        description=league.description,
        image_url=league.image_url,
        invite_key=league.invite_key,
        members=league_service.get_member_ids(db, league.id),
        created_at=league.created_at,
        updated_at=league.updated_at
    )


@router.get("", response_model=LeagueListResponse)
async def list_leagues(
    current_user: User = Depends(require_user),
    db: Session = Depends(get_session)
):
    """Leagues the logged user is part of, with members expanded."""
    leagues = league_service.get_user_leagues(db, current_user.id)

    return LeagueListResponse(leagues=[
        LeagueWithMembersResponse(
            id=league.id,
            name=league.name,
            description=league.description,
            image_url=league.image_url,
            invite_key=league.invite_key,
            members=[
                MemberResponse(id=member.id, display_name=member.display_name)
                for member in league_service.get_members(db, league.id)
            ],
            created_at=league.created_at,
            updated_at=league.updated_at
        )
        for league in leagues
    ])


@router.post("", response_model=CreatedLeagueResponse, status_code=status.HTTP_201_CREATED)
async def create_league(
    name: str = Form(...),
    description: Optional[str] = Form(None),
    cover_picture: Optional[UploadFile] = File(None, alias="coverPicture"),
    current_user: User = Depends(require_user),
    db: Session = Depends(get_session),
    image_host: ImageHost = Depends(get_image_host)
):
    """Create a league with the logged user as its first member."""
    public_id = None
    image_url = None
    if cover_picture is not None:
        public_id = await image_host.store(cover_picture)
        image_url = image_host.cover_picture_url(public_id)

    try:
        league = league_service.create_league(
            db,
            owner=current_user,
            name=name,
            description=description,
            image_url=image_url
        )
    except Exception:
        if public_id:
            await image_host.delete(public_id)
        raise
    return CreatedLeagueResponse(new_league_doc=league_response(db, league))


@router.patch("/join", response_model=JoinedLeagueResponse)
async def join_league(
    body: JoinLeagueBody,
    current_user: User = Depends(require_user),
    db: Session = Depends(get_session)
):
    """Add the logged user to the league owning the invite key."""
    league = league_service.get_league_by_invite_key(db, body.invite_key)
    if not league:
        raise HTTPException(status_code=404, detail="No league for this invite key")

    league_service.add_member(db, league, current_user)
    return JoinedLeagueResponse(joined_league=league_response(db, league))


@router.put("/{league_id}", response_model=UpdatedLeagueResponse)
async def edit_league(
    name: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    members: Optional[List[int]] = Form(None),
    clear_members: bool = Form(False),
    cover_picture: Optional[UploadFile] = File(None, alias="coverPicture"),
    league: League = Depends(require_league_member),
    db: Session = Depends(get_session),
    image_host: ImageHost = Depends(get_image_host)
):
    """
    Edit league fields; only the ones sent are changed.

    ``members`` replaces the member list. A form cannot carry an empty list,
    so ``clear_members`` empties it instead.
    """
    member_ids = None
    if clear_members:
        if members:
            raise HTTPException(
                status_code=400,
                detail="Send either members or clear_members, not both"
            )
        member_ids = []
    elif members is not None:
        # Order kept, repeats dropped
        member_ids = list(dict.fromkeys(members))
        unknown = league_service.find_unknown_users(db, member_ids)
        if unknown:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown users: {', '.join(str(user_id) for user_id in unknown)}"
            )

    old_public_id = image_host.public_id_from_url(league.image_url)
    public_id = None
    image_url = None
    if cover_picture is not None:
        public_id = await image_host.store(cover_picture)
        image_url = image_host.cover_picture_url(public_id)

    try:
        league = league_service.update_league(
            db,
            league,
            name=name,
            description=description,
            member_ids=member_ids,
            image_url=image_url
        )
    except Exception:
        if public_id:
            await image_host.delete(public_id)
        raise

    if public_id and old_public_id and old_public_id != public_id:
        await image_host.delete(old_public_id)
    return UpdatedLeagueResponse(updated_league_doc=league_response(db, league))


@router.patch("/{league_id}/leave", response_class=PlainTextResponse)
async def leave_league(
    league: League = Depends(require_league_member),
    current_user: User = Depends(require_user),
    db: Session = Depends(get_session)
):
    league_service.remove_member(db, league, current_user)
    return PlainTextResponse("Successfully left the league")


@router.delete("/{league_id}", response_class=PlainTextResponse)
async def delete_league(
    league: League = Depends(require_league_member),
    db: Session = Depends(get_session)
):
    league_service.delete_league(db, league)
    return PlainTextResponse("Successfully deleted the league")
