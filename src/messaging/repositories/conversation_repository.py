"""
Conversation repository: the conversation list and conversation detail reads.

The list query is the interesting one. For a viewer it returns every
conversation they take part in (optionally only those they tagged with a
given name), most recently read first, with participants, tags, messages and
senders loaded in the same call.
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.sql import Select, Subquery

from messaging.exceptions.base import NotFoundError
from messaging.exceptions.mapper import query_error_handler
from .base_repository import BaseRepository, identity_of, tag_name_of
from .mapping import FetchPlan, describe_plan

logger = logging.getLogger(__name__)


class ConversationRepository(BaseRepository):
    """
    Read operations on the conversation graph.

    Inherits the session/mapping plumbing from BaseRepository and adds:
      - find_person_conversations: a viewer's inbox ordered by last activity
      - find_conversation: one conversation with the same eager-loaded graph
    """

    # =================================================================================================================
    # Query building blocks
    # =================================================================================================================

    def last_activity_subquery(self, viewer_id: Any) -> Subquery:
        """
        Per-conversation MAX(read) over the viewer's recipient rows.

            SELECT m.conversation_id, MAX(r.read) AS last_activity
            FROM message_recipients r JOIN messages m ON r.message_id = m.id
            WHERE r.person_id = :viewer
            GROUP BY m.conversation_id

        MAX ignores NULLs, so a conversation whose messages the viewer has never
        read gets NULL here, exactly like one with no recipient rows at all.
        """
        m, r = self.mapping.message, self.mapping.recipient
        return (
            select(
                m.conversation_id.label("conversation_id"),
                func.max(r.read).label("last_activity"),
            )
            .select_from(r)
            .join(m, r.message_id == m.id)
            .where(r.person_id == viewer_id)
            .group_by(m.conversation_id)
            .subquery("last_activity")
        )

    def membership_subquery(self, viewer_id: Any, tag_name: str | None = None) -> Select:
        """
        Ids of conversations the viewer participates in, optionally narrowed to
        those where the viewer's own participant row carries `tag_name`.

        Used as `conversation.id IN (...)` so participant and tag rows never
        multiply the primary result set.
        """
        p, t = self.mapping.participant, self.mapping.tag
        query = select(p.conversation_id).where(p.person_id == viewer_id)
        if tag_name is not None:
            # Exact, case-sensitive name match
            query = query.join(p.tags).where(t.name == tag_name)
        return query

    def conversation_query(self, plan: FetchPlan | None = None) -> Select:
        """Base SELECT for conversations with the plan's eager loads attached."""
        c = self.mapping.conversation
        return select(c).options(*self._plan(plan).conversation_options(self.mapping))

    # =================================================================================================================
    # Read Operations (Multiple Entities)
    # =================================================================================================================

    async def find_person_conversations(
        self,
        viewer: Any,
        tag: Any | None = None,
        *,
        plan: FetchPlan | None = None
    ) -> list[Any]:
        """
        Retrieve the conversations of a viewer, most recent read activity first.

        Args:
            viewer: Person (or person id) whose conversations to list. No existence
                check is made; an unknown id simply yields an empty list.
            tag: Optional Tag (or tag name). Only conversations the viewer tagged
                with exactly this name are returned.
            plan: Relations to eager-load; defaults to participants (+person, tags)
                and messages (+sender).

        Returns:
            list[Conversation]: Ordered by the viewer's latest read timestamp,
            descending. Conversations without any read timestamp come last; the
            conversation id (descending) breaks ties.

        Raises:
            SQLAlchemyError: Propagated unchanged if the store fails.
        """
        viewer_id = identity_of(viewer)
        tag_name = tag_name_of(tag) if tag is not None else None
        c = self.mapping.conversation
        started = self._started()

        activity = self.last_activity_subquery(viewer_id)
        query = (
            self.conversation_query(plan)
            .outerjoin(activity, activity.c.conversation_id == c.id)
            .where(c.id.in_(self.membership_subquery(viewer_id, tag_name)))
            .order_by(activity.c.last_activity.desc().nulls_last(), c.id.desc())
        )

        async with query_error_handler("find_person_conversations", c.__name__):
            result = await self.db.execute(query)
            conversations = list(result.scalars().all())

        self._log_success(
            "find_person_conversations",
            started,
            viewer_id=viewer_id,
            tag=tag_name,
            count=len(conversations),
            plan=describe_plan(self._plan(plan)),
        )
        return conversations

    # =================================================================================================================
    # Read Operations (Single Entity)
    # =================================================================================================================

    async def find_conversation(self, conversation_id: Any, *, plan: FetchPlan | None = None) -> Any | None:
        """
        Retrieve one conversation with the same graph as the list query.

        Args:
            conversation_id: Conversation id (or a Conversation).
            plan: Relations to eager-load.

        Returns:
            The conversation, or None if no row matches.
        """
        conversation_id = identity_of(conversation_id)
        c = self.mapping.conversation
        started = self._started()

        query = self.conversation_query(plan).where(c.id == conversation_id)

        async with query_error_handler("find_conversation", c.__name__, ["id"]):
            result = await self.db.execute(query)
            conversation = result.scalar_one_or_none()

        self._log_success(
            "find_conversation",
            started,
            conversation_id=conversation_id,
            found=conversation is not None,
        )
        return conversation

    async def find_conversation_or_raise(self, conversation_id: Any, *, plan: FetchPlan | None = None) -> Any:
        """
        Same as find_conversation but raises NotFoundError instead of returning None.
        """
        conversation = await self.find_conversation(conversation_id, plan=plan)
        if conversation is None:
            logger.info(
                "repo.find_conversation.not_found",
                extra={"conversation_id": identity_of(conversation_id)},
            )
            raise NotFoundError(
                f"{self.mapping.conversation.__name__} with ID {identity_of(conversation_id)} not found",
                fields=["conversation_id"],
            )
        return conversation
