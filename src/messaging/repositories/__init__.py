"""
Repository layer of the messaging read path.

Usage:
    from messaging.repositories import get_driver

    driver = get_driver(session)
    inbox = await driver.find_person_conversations(viewer_id, tag="important")
"""

from .base_repository import BaseRepository
from .mapping import EntityMapping, FetchPlan
from .contract import MessagingDriver
from .conversation_repository import ConversationRepository
from .participant_repository import ParticipantRepository
from .message_repository import MessageRepository
from .tag_repository import TagRepository
from .driver import SQLAlchemyDriver, get_driver, register_driver, available_drivers

__all__ = [
    "BaseRepository",
    "EntityMapping",
    "FetchPlan",
    "MessagingDriver",
    "ConversationRepository",
    "ParticipantRepository",
    "MessageRepository",
    "TagRepository",
    "SQLAlchemyDriver",
    "get_driver",
    "register_driver",
    "available_drivers",
]
