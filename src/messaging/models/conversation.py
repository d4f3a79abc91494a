from sqlalchemy import Column, ForeignKey, Table, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from messaging.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .message import Message
    from .person import Person
    from .tag import Tag


# Many-to-Many: tags a participant put on a conversation
participant_tags = Table(
    "conversation_participant_tags",
    Base.metadata,
    Column("participant_id", ForeignKey("conversation_participants.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Conversation(Base):
    """
    SQLAlchemy model for a Conversation.

    A thread grouping participants and messages. It has no columns of its own
    beyond identity; everything interesting hangs off its two collections.
    """
    __tablename__ = "conversations"

    id: Mapped[int] = mapped_column(primary_key=True)

    # --- Relationships ---

    # One-to-Many: the people taking part, each with their own tags
    participants: Mapped[list["ConversationParticipant"]] = relationship(
        "ConversationParticipant",
        back_populates="conversation",
        lazy="select"
    )

    # One-to-Many: chronological message list; id breaks ties between equal dates
    messages: Mapped[list["Message"]] = relationship(
        "Message",
        back_populates="conversation",
        lazy="select",
        order_by="[Message.date, Message.id]"
    )

    def __repr__(self) -> str:
        return f"<Conversation(id={self.id!r})>"


class ConversationParticipant(Base):
    """
    Join entity binding one Conversation to one Person.

    Carries the tags that person applied to that conversation. There is at
    most one participant row per (conversation, person).
    """
    __tablename__ = "conversation_participants"
    __table_args__ = (
        UniqueConstraint("conversation_id", "person_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    conversation_id: Mapped[int] = mapped_column(
        ForeignKey("conversations.id"),
        nullable=False,
        index=True
    )

    person_id: Mapped[int] = mapped_column(
        ForeignKey("persons.id"),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    conversation: Mapped["Conversation"] = relationship(
        "Conversation",
        back_populates="participants"
    )

    person: Mapped["Person"] = relationship("Person")

    tags: Mapped[list["Tag"]] = relationship(
        "Tag",
        secondary=participant_tags,
        lazy="select",
        order_by="Tag.name"
    )

    def __repr__(self) -> str:
        return (
            f"<ConversationParticipant(id={self.id!r}, conversation_id={self.conversation_id!r}, "
            f"person_id={self.person_id!r})>"
        )
