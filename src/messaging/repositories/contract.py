"""
The read contract every messaging driver satisfies.

A driver is anything exposing these coroutines; it does not have to inherit
from a base class. Back-ends are told which entity classes to use through an
EntityMapping at construction time.
"""
from typing import Any, Protocol, runtime_checkable

from messaging.validators.pagination_validators import SortDirection
from .mapping import EntityMapping, FetchPlan


@runtime_checkable
class MessagingDriver(Protocol):
    mapping: EntityMapping

    async def find_person_conversations(
        self, viewer: Any, tag: Any | None = None, *, plan: FetchPlan | None = None
    ) -> list[Any]: ...

    async def find_participant(
        self, conversation: Any, person: Any, *, plan: FetchPlan | None = None
    ) -> Any | None: ...

    async def find_conversation(
        self, conversation_id: Any, *, plan: FetchPlan | None = None
    ) -> Any | None: ...

    async def find_messages(
        self,
        conversation: Any,
        offset: int = 0,
        limit: int = 20,
        sort_direction: SortDirection | str = SortDirection.ASC,
        *,
        plan: FetchPlan | None = None,
    ) -> list[Any]: ...

    async def count_messages(self, conversation: Any) -> int: ...

    async def find_tags(self) -> list[Any]: ...
