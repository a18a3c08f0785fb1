# shopfront/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from shopfront.core.auth import require_auth
from shopfront.database import get_session
from shopfront.models.user import User
from shopfront.repositories.user_repo import UserRepository
from shopfront.schemas.user import LoginRequest, TokenRead, UserRead, UserRegister
from shopfront.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["Auth"])

repo = UserRepository()
service = UserService(repo)


@router.post(
    "/register",
    response_model=UserRead,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: UserRegister,
    session: Session = Depends(get_session),
):
    """
    Create a customer or seller account.

    409 if the email or username is taken.
    """
    return service.register(session, payload)


@router.post("/login", response_model=TokenRead)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
):
    """
    Exchange an account email for a bearer token.
    """
    return service.login(session, payload)


@router.get("/me", response_model=UserRead)
def read_me(current_user: User = Depends(require_auth)):
    """
    Return the authenticated user's profile.
    """
    return current_user
