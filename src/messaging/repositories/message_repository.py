"""
Message repository: paginated message reads for one conversation.
"""

from typing import Any

from sqlalchemy import func, select

from messaging.exceptions.mapper import query_error_handler
from messaging.validators.pagination_validators import (
    SortDirection,
    coerce_sort_direction,
    validate_page_window,
)
from .base_repository import BaseRepository, identity_of
from .mapping import FetchPlan


class MessageRepository(BaseRepository):
    """Read operations on messages."""

    async def find_messages(
        self,
        conversation: Any,
        offset: int = 0,
        limit: int = 20,
        sort_direction: SortDirection | str = SortDirection.ASC,
        *,
        plan: FetchPlan | None = None
    ) -> list[Any]:
        """
        Retrieve one page of a conversation's messages.

        Messages are ordered by (date, id), both keys in `sort_direction`, so
        messages sharing a timestamp still have a total order. The window is
        applied after ordering: skip `offset` rows, return at most `limit`.

        Args:
            conversation: Conversation (or conversation id).
            offset: Rows to skip. Must be >= 0.
            limit: Maximum rows to return. Must be >= 0; 0 yields an empty page.
            sort_direction: SortDirection.ASC/DESC or "ASC"/"DESC" in any case.
            plan: Relations to eager-load; the sender by default.

        Returns:
            list[Message]: The page (empty when offset is past the end).

        Raises:
            InvalidArgumentError: On negative/non-integer offset or limit, or an
                unknown sort direction. Raised before any query is built.
            SQLAlchemyError: Propagated unchanged if the store fails.
        """
        offset, limit = validate_page_window(offset, limit)
        direction = coerce_sort_direction(sort_direction)

        conversation_id = identity_of(conversation)
        m = self.mapping.message
        started = self._started()

        if direction is SortDirection.DESC:
            ordering = (m.date.desc(), m.id.desc())
        else:
            ordering = (m.date.asc(), m.id.asc())

        query = (
            select(m)
            .where(m.conversation_id == conversation_id)
            .options(*self._plan(plan).message_options(self.mapping))
            .order_by(*ordering)
            .offset(offset)
            .limit(limit)
        )

        async with query_error_handler("find_messages", m.__name__):
            result = await self.db.execute(query)
            messages = list(result.scalars().all())

        self._log_success(
            "find_messages",
            started,
            conversation_id=conversation_id,
            offset=offset,
            limit=limit,
            sort_direction=direction.value,
            count=len(messages),
        )
        return messages

    async def count_messages(self, conversation: Any) -> int:
        """
        Count the messages of a conversation (for page counts in UIs).

        Args:
            conversation: Conversation (or conversation id).

        Returns:
            int: Number of messages; 0 for an unknown conversation.
        """
        conversation_id = identity_of(conversation)
        m = self.mapping.message
        started = self._started()

        query = select(func.count(m.id)).where(m.conversation_id == conversation_id)

        async with query_error_handler("count_messages", m.__name__):
            result = await self.db.execute(query)
            total = result.scalar_one()

        self._log_success("count_messages", started, conversation_id=conversation_id, count=total)
        return total
