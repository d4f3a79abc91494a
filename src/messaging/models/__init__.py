r"""
Centralized access to all database models of the messaging read layer.

Example:

    from messaging.models import Conversation, ConversationParticipant, Message
"""

from .person import Person
from .tag import Tag
from .conversation import Conversation, ConversationParticipant, participant_tags
from .message import Message, MessageRecipient

__all__ = [
    "Person",
    "Tag",
    "Conversation",
    "ConversationParticipant",
    "participant_tags",
    "Message",
    "MessageRecipient",
]
