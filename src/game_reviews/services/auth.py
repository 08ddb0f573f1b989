"""Registration, login and token issuing."""

import logging
import uuid
from datetime import UTC, datetime
from typing import NamedTuple

from sqlalchemy.ext.asyncio import AsyncSession

from game_reviews.authorization import Role
from game_reviews.config import Settings, get_settings
from game_reviews.models.user import User
from game_reviews.repositories.base import WriteOutcome
from game_reviews.repositories.users import UserRepository
from game_reviews.utils.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

CREDENTIALS_REQUIRED = "Username and password are required."
USERNAME_TAKEN = "Username already exists."
INVALID_CREDENTIALS = "Invalid username or password."


class AuthResult(NamedTuple):
    """Outcome of a register or login attempt."""

    success: bool
    token: str
    message: str


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class AuthService:
    """Credential store operations bound to one request's session."""

    def __init__(self, session: AsyncSession, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self.users = UserRepository(session)

    def issue_token(self, user: User) -> str:
        """Signed token asserting the user's id, username and role."""
        return create_access_token(
            data={"sub": user.id, "name": user.username, "role": user.role}
        )

    async def _find(self, username: str) -> User | None:
        return await self.users.find_by_username(
            username, case_sensitive=self.settings.username_case_sensitive
        )

    async def _create_user(self, username: str, password: str, role: Role) -> User | None:
        """Persist a new account, or return None if the username got taken."""
        user = User(
            id=str(uuid.uuid4()),
            username=username,
            password_hash=hash_password(password),
            role=role.value,
            created_at=datetime.now(UTC),
        )
        if await self.users.add(user) is WriteOutcome.CONFLICT:
            return None
        return user

    async def register(self, username: str, password: str) -> AuthResult:
        """Create a regular user account and sign them in."""
        if _is_blank(username) or _is_blank(password):
            return AuthResult(False, "", CREDENTIALS_REQUIRED)

        if await self._find(username) is not None:
            return AuthResult(False, "", USERNAME_TAKEN)

        user = await self._create_user(username, password, Role.USER)
        if user is None:
            # Lost a race against a concurrent registration
            return AuthResult(False, "", USERNAME_TAKEN)

        logger.info("Registered user %s", user.username)
        return AuthResult(True, self.issue_token(user), "Registration successful.")

    async def login(self, username: str, password: str) -> AuthResult:
        """Check credentials and issue a token.

        Unknown usernames and wrong passwords produce the same message.
        """
        if _is_blank(username) or _is_blank(password):
            return AuthResult(False, "", CREDENTIALS_REQUIRED)

        user = await self._find(username)
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Failed login attempt for username %r", username)
            return AuthResult(False, "", INVALID_CREDENTIALS)

        return AuthResult(True, self.issue_token(user), "Login successful.")

    async def ensure_admin(self, username: str, password: str) -> User:
        """Create the bootstrap administrator unless the username already exists.

        An existing account keeps its role and password; roles never change
        after creation.
        """
        existing = await self._find(username)
        if existing is not None:
            if existing.role != Role.ADMIN.value:
                logger.warning(
                    "Bootstrap admin username %s belongs to a %s account", username, existing.role
                )
            return existing

        user = await self._create_user(username, password, Role.ADMIN)
        if user is None:
            raise RuntimeError(f"Could not create admin account {username}")

        logger.info("Created admin account %s", username)
        return user
