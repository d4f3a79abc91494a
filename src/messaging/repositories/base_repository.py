"""
Base repository shared by the messaging read repositories.

It holds the two things every query needs: the async session the caller
owns, and the EntityMapping that says which ORM classes back each role.
Repositories only read; they never flush, commit or roll back.

Unlike abstract base classes, `BaseRepository` does not enforce any required
methods; it provides shared helpers that the concrete repositories use.
"""
import logging
import time
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from .mapping import DEFAULT_MAPPING, DEFAULT_PLAN, EntityMapping, FetchPlan


def identity_of(ref: Any) -> Any:
    """
    Return the identifier of an entity reference.

    Callers may pass either an entity (anything with an `id` attribute) or the
    bare id itself; both resolve to the same value.
    """
    return getattr(ref, "id", ref)


def tag_name_of(tag: Any) -> str:
    """Return the name of a tag reference (a Tag-like object or a plain string)."""
    return tag if isinstance(tag, str) else tag.name


class BaseRepository:
    """
    Common state and helpers for read repositories.

    Args:
        db: The async database session (owned and closed by the caller).
        mapping: Concrete entity classes to query. Defaults to the bundled models.
    """

    def __init__(self, db: AsyncSession, mapping: EntityMapping | None = None):
        self.db = db
        self.mapping = mapping or DEFAULT_MAPPING

    @staticmethod
    def _plan(plan: FetchPlan | None) -> FetchPlan:
        return plan or DEFAULT_PLAN

    @staticmethod
    def _started() -> float:
        return time.perf_counter()

    def _log_success(self, operation: str, started: float, **context: Any) -> None:
        # DEBUG: reads are high volume; keep ids and counts, never row contents.
        logging.getLogger(type(self).__module__).debug(
            f"repo.{operation}.success",
            extra={
                "operation": operation,
                "duration_ms": int((time.perf_counter() - started) * 1000),
                **context,
            },
        )
