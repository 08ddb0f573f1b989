"""Authentication API endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from game_reviews.database import get_db
from game_reviews.errors import UnauthenticatedError, ValidationError
from game_reviews.schemas.auth import AuthResponse, Credentials, IdentityResponse
from game_reviews.services.auth import AuthService
from game_reviews.utils.security import CurrentIdentity

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthResponse)
async def register(
    credentials: Credentials,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Register a new user.

    Creates an account with the ``User`` role and returns a token for it,
    so the caller is signed in straight away.

    Raises:
        ValidationError 400: If a field is blank or the username is taken
    """
    result = await AuthService(db).register(credentials.username, credentials.password)
    if not result.success:
        raise ValidationError(result.message)

    return AuthResponse(token=result.token, message=result.message)


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: Credentials,
    db: AsyncSession = Depends(get_db),
) -> AuthResponse:
    """Authenticate user and return JWT token.

    Raises:
        UnauthenticatedError 401: If credentials are missing or invalid
    """
    result = await AuthService(db).login(credentials.username, credentials.password)
    if not result.success:
        raise UnauthenticatedError(result.message)

    return AuthResponse(token=result.token, message=result.message)


@router.get("/me", response_model=IdentityResponse)
async def get_current_identity_info(identity: CurrentIdentity) -> IdentityResponse:
    """Get the caller's identity as carried by their token.

    ``userId`` is the numeric id stored as owner on the caller's reviews.
    """
    return IdentityResponse(
        user_id=identity.user_id,
        username=identity.username,
        role=identity.role.value,
    )
