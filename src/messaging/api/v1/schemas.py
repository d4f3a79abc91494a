"""
Response models for the read endpoints. Built straight from ORM objects
(`from_attributes=True`); only relations the driver eager-loaded are touched.
"""
from datetime import datetime

from pydantic import BaseModel, ConfigDict


class TagOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class ParticipantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    conversation_id: int
    person_id: int
    tags: list[TagOut] = []


class MessageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    conversation_id: int
    sender_id: int | None
    body: str
    date: datetime


class ConversationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    participants: list[ParticipantOut] = []
    messages: list[MessageOut] = []


class MessagePage(BaseModel):
    """One window of a conversation's messages plus the total for pagers."""
    items: list[MessageOut]
    offset: int
    limit: int
    sort: str
    total: int
