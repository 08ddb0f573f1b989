"""User account storage."""

from sqlalchemy import func, select

from game_reviews.models.user import User
from game_reviews.repositories.base import Repository, WriteOutcome


class UserRepository(Repository):
    model = User

    async def get(self, user_id: str) -> User | None:
        return await self.session.get(User, user_id)

    async def find_by_username(self, username: str, case_sensitive: bool = True) -> User | None:
        """Look up a user by username.

        With ``case_sensitive`` off, ``Alice`` and ``alice`` are the same user.
        """
        if case_sensitive:
            query = select(User).where(User.username == username)
        else:
            query = select(User).where(func.lower(User.username) == username.lower())
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none()

    async def add(self, user: User) -> WriteOutcome:
        self.session.add(user)
        return await self._flush()
