"""Security utilities for password hashing and JWT handling."""

import base64
import hashlib
import logging
from datetime import UTC, datetime, timedelta
from typing import Annotated

import bcrypt
from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt

from game_reviews.authorization import Identity, Role
from game_reviews.config import get_settings
from game_reviews.errors import UnauthenticatedError

logger = logging.getLogger(__name__)

# OAuth2 scheme for Bearer token authentication. Missing tokens are not an
# error at this level: public endpoints accept anonymous callers.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def legacy_hash_password(password: str) -> str:
    """Unsalted SHA-256 digest of the UTF-8 password, base64 encoded.

    Deterministic: the same password always yields the same digest.
    """
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest).decode("ascii")


def hash_password(password: str) -> str:
    """Hash a plain text password with the configured scheme."""
    settings = get_settings()
    if settings.password_scheme == "sha256":
        return legacy_hash_password(password)

    password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode("utf-8")


def is_bcrypt_hash(hashed_password: str) -> bool:
    return hashed_password.startswith(("$2a$", "$2b$", "$2y$"))


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain text password against a stored hash.

    Both bcrypt hashes and legacy SHA-256 digests are accepted, whatever
    scheme is currently configured for new passwords.
    """
    if not hashed_password:
        return False

    if is_bcrypt_hash(hashed_password):
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError:
            logger.warning("Stored bcrypt hash is malformed")
            return False

    return legacy_hash_password(plain_password) == hashed_password


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token.

    Args:
        data: Payload data to encode in the token. The "sub" (subject) claim
              must be the user's string identifier.
        expires_delta: Optional custom expiration time. Defaults to settings value.

    Returns:
        Encoded JWT token string carrying issuer, audience, issued-at and
        expiration claims in addition to ``data``.
    """
    settings = get_settings()
    to_encode = data.copy()

    now = datetime.now(UTC)
    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.jwt_expiration_minutes)

    to_encode.update(
        {
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": now,
            "exp": expire,
        }
    )
    encoded_jwt = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode and validate a JWT access token.

    Signature, expiration, issuer and audience are all checked, with no
    clock skew allowance.

    Args:
        token: The JWT token string to decode

    Returns:
        Decoded token payload if valid, None if invalid or expired
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
            options={
                "leeway": 0,
                "require_exp": True,
                "require_iss": True,
                "require_aud": True,
                "require_sub": True,
            },
        )
        return payload
    except JWTError:
        return None


def identity_from_token(token: str) -> Identity | None:
    """Resolve the caller identity carried by a token, or None if unusable."""
    payload = decode_access_token(token)
    if payload is None:
        return None

    subject = payload.get("sub")
    if not subject:
        return None

    try:
        role = Role(payload.get("role"))
    except ValueError:
        return None

    return Identity(subject=subject, username=payload.get("name", ""), role=role)


async def get_optional_identity(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Identity | None:
    """Get the caller identity if a valid token was presented.

    Used by public endpoints whose output depends on who is asking. A
    missing, invalid or expired token simply means an anonymous caller.
    """
    if not token:
        return None
    return identity_from_token(token)


async def get_current_identity(
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> Identity:
    """Get the authenticated caller from the JWT bearer token.

    Raises:
        UnauthenticatedError: If the token is missing, invalid or expired
    """
    if not token:
        raise UnauthenticatedError("Not authenticated.")

    identity = identity_from_token(token)
    if identity is None:
        raise UnauthenticatedError()
    return identity


# Type aliases for use in route dependencies
CurrentIdentity = Annotated[Identity, Depends(get_current_identity)]
OptionalIdentity = Annotated[Identity | None, Depends(get_optional_identity)]
