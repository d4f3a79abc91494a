"""
Participant repository: resolve the (conversation, person) participant row.
"""

from typing import Any

from sqlalchemy import and_, select

from messaging.exceptions.mapper import query_error_handler
from .base_repository import BaseRepository, identity_of
from .mapping import FetchPlan


class ParticipantRepository(BaseRepository):
    """Lookups of ConversationParticipant rows."""

    async def find_participant(
        self,
        conversation: Any,
        person: Any,
        *,
        plan: FetchPlan | None = None
    ) -> Any | None:
        """
        Retrieve the participant row binding `person` to `conversation`.

        The conversation, the person and the participant's tags are eagerly loaded.

        Args:
            conversation: Conversation (or conversation id).
            person: Person (or person id).
            plan: Controls whether person and tags are loaded; the conversation
                is always loaded.

        Returns:
            The participant, or None if the person does not take part.

        Raises:
            IntegrityViolationError: If several rows match, i.e. the
                one-participant-per-(conversation, person) invariant is broken.
            SQLAlchemyError: Propagated unchanged if the store fails.
        """
        conversation_id = identity_of(conversation)
        person_id = identity_of(person)
        p = self.mapping.participant
        started = self._started()

        # LIMIT 2: enough to tell "one" from "several" without scanning corrupt data
        query = (
            select(p)
            .where(
                and_(
                    p.conversation_id == conversation_id,
                    p.person_id == person_id
                )
            )
            .options(*self._plan(plan).participant_options(self.mapping))
            .limit(2)
        )

        async with query_error_handler("find_participant", p.__name__, ["conversation_id", "person_id"]):
            result = await self.db.execute(query)
            # scalar_one_or_none() raises MultipleResultsFound on a second row;
            # query_error_handler turns it into IntegrityViolationError.
            participant = result.scalar_one_or_none()

        self._log_success(
            "find_participant",
            started,
            conversation_id=conversation_id,
            person_id=person_id,
            found=participant is not None,
        )
        return participant
