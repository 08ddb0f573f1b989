"""Pydantic schemas for authentication API endpoints."""

from pydantic import Field

from game_reviews.schemas.common import CamelModel


class Credentials(CamelModel):
    """Username and password for register and login.

    Blank values are rejected by the endpoint with a 400 rather than by
    schema validation.
    """

    username: str = Field(default="", description="Username")
    password: str = Field(default="", description="Password")


class AuthResponse(CamelModel):
    """Successful register or login response."""

    token: str = Field(description="JWT access token")
    message: str = Field(description="Outcome message")


class IdentityResponse(CamelModel):
    """The authenticated caller as seen by the API."""

    user_id: int = Field(description="Numeric id used as review owner")
    username: str = Field(description="Username")
    role: str = Field(description="Role (User or Admin)")
