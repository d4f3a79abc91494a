"""
Map SQLAlchemy failures raised on the read path to what callers should see.

Only one store-level error is translated: `MultipleResultsFound` on a lookup
that must be unique becomes `IntegrityViolationError`. Every other
`SQLAlchemyError` (connectivity, malformed SQL, unsupported construct) is
logged and re-raised unchanged; there is no retry and no rollback here
because the caller owns the session and its transaction.
"""
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import MultipleResultsFound, SQLAlchemyError

from .base import IntegrityViolationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def query_error_handler(operation: str, model_name: str | None = None,
                              fields: list[str] | None = None) -> AsyncIterator[None]:
    """
    Usage:
        async with query_error_handler("find_participant", "ConversationParticipant", ["conversation_id", "person_id"]):
            result = await self.db.execute(query)
            return result.scalar_one_or_none()
    """
    try:
        yield
    except MultipleResultsFound as exc:
        # ERROR: a unique lookup returned several rows; upstream data is broken.
        logger.error(
            "mapper.integrity_violation",
            extra={"model": model_name, "operation": operation, "fields": fields},
        )
        raise IntegrityViolationError(
            f"Expected at most one {model_name or 'row'} for {operation}, found several",
            fields=fields,
        ) from exc
    except SQLAlchemyError:
        # Store failures are surfaced untouched; the stack trace goes to the logs.
        logger.exception(
            "mapper.query_failed",
            extra={"model": model_name, "operation": operation},
        )
        raise
