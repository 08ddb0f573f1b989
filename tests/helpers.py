"""Shared test helpers."""

import uuid
from typing import NamedTuple

from game_reviews.identity import map_identity
from game_reviews.utils.security import create_access_token


class Caller(NamedTuple):
    """A test user identified by a token subject."""

    subject: str
    username: str
    role: str
    token: str

    @property
    def user_id(self) -> int:
        return map_identity(self.subject)

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def make_caller(username: str, role: str = "User") -> Caller:
    """Build a caller with a fresh subject and a signed token."""
    subject = str(uuid.uuid4())
    token = create_access_token(data={"sub": subject, "name": username, "role": role})
    return Caller(subject=subject, username=username, role=role, token=token)
