from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlmodel import Session

from ..config import SESSION_COOKIE_NAME, SESSION_EXPIRE_DAYS
from ..database import get_session
from ..dependencies import require_user
from ..models.user import User
from ..services.auth import (
    authenticate_user,
    create_session,
    create_user,
    delete_session,
    get_user_by_email,
)

router = APIRouter(prefix="/auth", tags=["auth"])


class RegisterBody(BaseModel):
    email: str
    password: str
    display_name: str


class LoginBody(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    id: int
    email: str
    display_name: str


def session_response(user: User, session_token: str, status_code: int = 200) -> JSONResponse:
    response = JSONResponse(
        UserResponse(id=user.id, email=user.email, display_name=user.display_name).model_dump(),
        status_code=status_code
    )
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=session_token,
        httponly=True,
        max_age=SESSION_EXPIRE_DAYS * 24 * 60 * 60,
        samesite="lax"
    )
    return response


@router.post("/register")
async def register(
    body: RegisterBody,
    db: Session = Depends(get_session)
):
    """Create an account and log it in."""
    if get_user_by_email(db, body.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already exists"
        )

    if len(body.password) < 6:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password must be at least 6 characters"
        )

    user = create_user(db, body.email, body.password, body.display_name)
    session_token = create_session(db, user.id)
    return session_response(user, session_token, status_code=status.HTTP_201_CREATED)


@router.post("/login")
async def login(
    body: LoginBody,
    db: Session = Depends(get_session)
):
    user = authenticate_user(db, body.email, body.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    session_token = create_session(db, user.id)
    return session_response(user, session_token)


@router.post("/logout")
async def logout(
    request: Request,
    db: Session = Depends(get_session)
):
    session_token: Optional[str] = request.cookies.get(SESSION_COOKIE_NAME)
    if session_token:
        delete_session(db, session_token)

    response = JSONResponse({"status": "logged_out"})
    response.delete_cookie(key=SESSION_COOKIE_NAME)
    return response


@router.get("/me", response_model=UserResponse)
async def me(current_user: User = Depends(require_user)):
    return UserResponse(
        id=current_user.id,
        email=current_user.email,
        display_name=current_user.display_name
    )
