"""Role and ownership checks for mutating requests.

Handlers call these functions at the top of each protected operation; a
failed check raises before any repository write happens.
"""

from dataclasses import dataclass
from enum import StrEnum

from game_reviews.errors import ForbiddenError
from game_reviews.identity import map_identity


class Role(StrEnum):
    """User roles carried in the token's ``role`` claim."""

    USER = "User"
    ADMIN = "Admin"


@dataclass(frozen=True)
class Identity:
    """Authenticated caller resolved from a validated token."""

    subject: str
    username: str
    role: Role

    @property
    def user_id(self) -> int:
        """Numeric id used as the owner of the caller's reviews."""
        return map_identity(self.subject)

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def require_role(identity: Identity, *roles: Role) -> Identity:
    """Ensure the caller holds one of ``roles``."""
    if identity.role not in roles:
        raise ForbiddenError("You do not have permission to perform this action.")
    return identity


def require_admin(identity: Identity) -> Identity:
    """Ensure the caller is an administrator."""
    if not identity.is_admin:
        raise ForbiddenError("Only administrators can perform this action.")
    return identity


def is_owner(identity: Identity | None, owner_id: int) -> bool:
    """Whether ``identity`` owns a row attributed to ``owner_id``.

    Anonymous callers and callers without a usable identity own nothing.
    """
    if identity is None:
        return False
    user_id = identity.user_id
    return user_id > 0 and user_id == owner_id


def ensure_can_modify(identity: Identity, owner_id: int, message: str) -> None:
    """Allow administrators and the row's owner, reject everyone else."""
    if identity.is_admin:
        return
    if identity.user_id <= 0:
        raise ForbiddenError("Unable to determine user identity.")
    if identity.user_id != owner_id:
        raise ForbiddenError(message)


def resolve_owner(identity: Identity, requested_user_id: int | None) -> int:
    """Decide which user id a newly created row is attributed to.

    Regular users always own what they create, whatever the request claims.
    Administrators may attribute a row to another user by passing a
    positive id, and own it themselves otherwise.
    """
    if identity.is_admin and requested_user_id is not None and requested_user_id > 0:
        return requested_user_id

    owner_id = identity.user_id
    if owner_id <= 0:
        raise ForbiddenError("Unable to determine user identity.")
    return owner_id
