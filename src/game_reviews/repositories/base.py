"""Shared repository plumbing on top of an async SQLAlchemy session."""

import logging
from enum import Enum

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from game_reviews.errors import StorageError, ValidationError
from game_reviews.identity import INT32_MAX

logger = logging.getLogger(__name__)


class WriteOutcome(Enum):
    """Result of pushing pending changes to the store."""

    OK = "ok"
    CONFLICT = "conflict"


def require_positive(value: int | None, message: str) -> int:
    """Return ``value`` if it is a positive 32-bit integer, else raise ValidationError."""
    if value is None or not 0 < value <= INT32_MAX:
        raise ValidationError(message)
    return value


def require_text(value: str | None, message: str) -> str:
    """Return ``value`` if it has non-whitespace content, else raise ValidationError."""
    if value is None or not value.strip():
        raise ValidationError(message)
    return value


class Repository:
    """Base class for repositories.

    A repository is built per request around the request's session and owns
    the rows of a single table. Subclasses set ``model``.
    """

    model: type

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _flush(self) -> WriteOutcome:
        """Flush pending changes.

        Integrity violations (for example two concurrent inserts passing the
        same uniqueness pre-check) are reported as ``WriteOutcome.CONFLICT``
        instead of raising, so callers decide how to describe the conflict.
        Any other storage failure is logged and raised as StorageError.
        """
        try:
            await self.session.flush()
        except IntegrityError as e:
            logger.info("Write to %s rejected by a constraint: %s", self.model.__tablename__, e.orig)
            return WriteOutcome.CONFLICT
        except SQLAlchemyError as e:
            logger.exception("Unexpected storage failure writing %s", self.model.__tablename__)
            raise StorageError() from e
        return WriteOutcome.OK

    async def _next_id(self) -> int:
        """One greater than the current maximum id (1 for an empty table).

        Not safe against concurrent writers; a clash surfaces as a conflict
        when the insert is flushed.
        """
        result = await self.session.execute(select(func.max(self.model.id)))
        current = result.scalar_one_or_none()
        return (current or 0) + 1

    async def exists(self, entity_id: int) -> bool:
        return await self.session.get(self.model, entity_id) is not None
