"""
SQLAlchemy driver and the driver registry.

`SQLAlchemyDriver` composes the four read repositories behind the
MessagingDriver contract. `get_driver()` picks a registered driver class by
name (the MESSAGING_DRIVER setting) and hands it the session and mapping.
"""
import logging
from typing import Any, Callable

from sqlalchemy.ext.asyncio import AsyncSession

from messaging.exceptions.base import InvalidArgumentError
from messaging.validators.pagination_validators import SortDirection
from .contract import MessagingDriver
from .conversation_repository import ConversationRepository
from .mapping import DEFAULT_MAPPING, EntityMapping, FetchPlan
from .message_repository import MessageRepository
from .participant_repository import ParticipantRepository
from .tag_repository import TagRepository

logger = logging.getLogger(__name__)


class SQLAlchemyDriver:
    """
    MessagingDriver implementation over an AsyncSession.

    All repositories share the same session and mapping, so a caller that
    wraps several reads in one transaction gets one consistent snapshot.
    """

    def __init__(self, db: AsyncSession, mapping: EntityMapping | None = None):
        self.db = db
        self.mapping = mapping or DEFAULT_MAPPING
        self.conversations = ConversationRepository(db, self.mapping)
        self.participants = ParticipantRepository(db, self.mapping)
        self.messages = MessageRepository(db, self.mapping)
        self.tags = TagRepository(db, self.mapping)

    async def find_person_conversations(
        self, viewer: Any, tag: Any | None = None, *, plan: FetchPlan | None = None
    ) -> list[Any]:
        return await self.conversations.find_person_conversations(viewer, tag, plan=plan)

    async def find_participant(
        self, conversation: Any, person: Any, *, plan: FetchPlan | None = None
    ) -> Any | None:
        return await self.participants.find_participant(conversation, person, plan=plan)

    async def find_conversation(self, conversation_id: Any, *, plan: FetchPlan | None = None) -> Any | None:
        return await self.conversations.find_conversation(conversation_id, plan=plan)

    async def find_conversation_or_raise(self, conversation_id: Any, *, plan: FetchPlan | None = None) -> Any:
        return await self.conversations.find_conversation_or_raise(conversation_id, plan=plan)

    async def find_messages(
        self,
        conversation: Any,
        offset: int = 0,
        limit: int = 20,
        sort_direction: SortDirection | str = SortDirection.ASC,
        *,
        plan: FetchPlan | None = None,
    ) -> list[Any]:
        return await self.messages.find_messages(conversation, offset, limit, sort_direction, plan=plan)

    async def count_messages(self, conversation: Any) -> int:
        return await self.messages.count_messages(conversation)

    async def find_tags(self) -> list[Any]:
        return await self.tags.find_tags()


# name -> factory(db, mapping) returning a MessagingDriver
DriverFactory = Callable[[AsyncSession, EntityMapping], MessagingDriver]

_DRIVERS: dict[str, DriverFactory] = {
    "sqlalchemy": SQLAlchemyDriver,
}


def register_driver(name: str, factory: DriverFactory) -> None:
    """Make a back-end available to get_driver() under `name` (case-insensitive)."""
    _DRIVERS[name.lower()] = factory
    logger.debug("driver.registered", extra={"driver": name.lower()})


def available_drivers() -> list[str]:
    return sorted(_DRIVERS)


def get_driver(
    db: AsyncSession,
    *,
    backend: str = "sqlalchemy",
    mapping: EntityMapping | None = None
) -> MessagingDriver:
    """
    Build the driver registered under `backend` for this session.

    Raises:
        InvalidArgumentError: If no driver is registered under that name.
    """
    factory = _DRIVERS.get(backend.lower())
    if factory is None:
        raise InvalidArgumentError(
            f"Unknown messaging driver {backend!r}; available: {', '.join(available_drivers())}",
            fields=["backend"],
        )
    return factory(db, mapping or DEFAULT_MAPPING)
