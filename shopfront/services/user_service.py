# shopfront/services/user_service.py
import logging

from sqlmodel import Session

from shopfront.core.auth import create_access_token
from shopfront.core.errors import AuthenticationRequired, ConflictError
from shopfront.models.user import User
from shopfront.repositories.user_repo import UserRepository
from shopfront.schemas.user import LoginRequest, TokenRead, UserRead, UserRegister

logger = logging.getLogger(__name__)


class UserService:
    """
    Business logic for accounts.

    Responsibilities:
      - enforce unique email / username
      - issue access tokens

    Password storage and verification are handled outside this service;
    login here is the demo flow: a known email receives a token.
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def register(self, session: Session, payload: UserRegister) -> User:
        if self.repo.get_by_email(session, payload.email) is not None:
            raise ConflictError("Email already registered")
        if self.repo.get_by_username(session, payload.username) is not None:
            raise ConflictError("Username already taken")

        user = User(
            username=payload.username,
            email=payload.email,
            full_name=payload.full_name,
            role=payload.role,
        )
        user = self.repo.create(session, user)
        logger.info("Registered user %s (%s)", user.id, user.role)
        return user

    def login(self, session: Session, payload: LoginRequest) -> TokenRead:
        user = self.repo.get_by_email(session, payload.email)
        if user is None:
            raise AuthenticationRequired("Invalid email or password")

        return TokenRead(
            access_token=create_access_token(user),
            user=UserRead.model_validate(user),
        )
