"""
Read endpoints over the messaging driver.

Pagination input is checked by the driver. Its InvalidArgumentError becomes
a 422 payload through the registered exception handlers.
"""
from fastapi import APIRouter, Depends

from messaging.config import Settings
from messaging.core.dependencies import get_app_settings, get_messaging_driver
from messaging.exceptions.base import NotFoundError
from messaging.repositories import MessagingDriver
from messaging.validators.pagination_validators import coerce_sort_direction
from .schemas import ConversationOut, MessageOut, MessagePage, ParticipantOut, TagOut

router = APIRouter(prefix="/api/v1", tags=["messaging"])


@router.get("/persons/{person_id}/conversations", response_model=list[ConversationOut])
async def list_person_conversations(
    person_id: int,
    tag: str | None = None,
    driver: MessagingDriver = Depends(get_messaging_driver),
):
    return await driver.find_person_conversations(person_id, tag)


@router.get("/conversations/{conversation_id}", response_model=ConversationOut)
async def get_conversation(
    conversation_id: int,
    driver: MessagingDriver = Depends(get_messaging_driver),
):
    conversation = await driver.find_conversation(conversation_id)
    if conversation is None:
        raise NotFoundError(f"Conversation {conversation_id} not found", fields=["conversation_id"])
    return conversation


@router.get("/conversations/{conversation_id}/messages", response_model=MessagePage)
async def list_messages(
    conversation_id: int,
    offset: int = 0,
    limit: int | None = None,
    sort: str = "ASC",
    driver: MessagingDriver = Depends(get_messaging_driver),
    settings: Settings = Depends(get_app_settings),
):
    limit = settings.DEFAULT_PAGE_SIZE if limit is None else limit
    direction = coerce_sort_direction(sort)
    messages = await driver.find_messages(conversation_id, offset, limit, direction)
    total = await driver.count_messages(conversation_id)
    return MessagePage(
        items=[MessageOut.model_validate(m) for m in messages],
        offset=offset,
        limit=limit,
        sort=direction.value,
        total=total,
    )


@router.get(
    "/conversations/{conversation_id}/participants/{person_id}",
    response_model=ParticipantOut,
)
async def get_participant(
    conversation_id: int,
    person_id: int,
    driver: MessagingDriver = Depends(get_messaging_driver),
):
    participant = await driver.find_participant(conversation_id, person_id)
    if participant is None:
        raise NotFoundError(
            f"Person {person_id} does not take part in conversation {conversation_id}",
            fields=["conversation_id", "person_id"],
        )
    return participant


@router.get("/tags", response_model=list[TagOut])
async def list_tags(driver: MessagingDriver = Depends(get_messaging_driver)):
    return await driver.find_tags()
