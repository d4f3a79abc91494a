from sqlalchemy import DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from datetime import datetime
from messaging.database.base import Base
from typing import TYPE_CHECKING

# Avoid circular import issues when using type hints for related models
if TYPE_CHECKING:
    from .conversation import Conversation
    from .person import Person


class Message(Base):
    """
    SQLAlchemy model representing a message in a conversation.

    Each message belongs to exactly one conversation. The sender is a weak
    reference: removing the person keeps the message with a NULL sender.
    """
    __tablename__ = "messages"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Foreign key reference to parent conversation
    conversation_id: Mapped[int] = mapped_column(
        ForeignKey("conversations.id"),
        nullable=False,
        index=True
    )

    sender_id: Mapped[int | None] = mapped_column(
        ForeignKey("persons.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default=""
    )

    # Sent date; pagination orders on (date, id)
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        index=True
    )

    # --- Relationships ---

    conversation: Mapped["Conversation"] = relationship(
        "Conversation",
        back_populates="messages"
    )

    sender: Mapped["Person | None"] = relationship("Person")

    recipients: Mapped[list["MessageRecipient"]] = relationship(
        "MessageRecipient",
        back_populates="message",
        lazy="select"
    )

    def __repr__(self) -> str:
        return (
            f"<Message(id={self.id!r}, conversation_id={self.conversation_id!r}, "
            f"sender_id={self.sender_id!r}, date={self.date!r})>"
        )


class MessageRecipient(Base):
    """
    Join entity binding one Message to one recipient Person.

    `read` is NULL while the message is unread and holds the moment the
    recipient read it afterwards. One row per (message, person).
    """
    __tablename__ = "message_recipients"
    __table_args__ = (
        UniqueConstraint("message_id", "person_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    message_id: Mapped[int] = mapped_column(
        ForeignKey("messages.id"),
        nullable=False,
        index=True
    )

    person_id: Mapped[int] = mapped_column(
        ForeignKey("persons.id"),
        nullable=False,
        index=True
    )

    read: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True
    )

    # --- Relationships ---

    message: Mapped["Message"] = relationship(
        "Message",
        back_populates="recipients"
    )

    person: Mapped["Person"] = relationship("Person")

    @property
    def is_read(self) -> bool:
        return self.read is not None

    def __repr__(self) -> str:
        return (
            f"<MessageRecipient(message_id={self.message_id!r}, person_id={self.person_id!r}, "
            f"read={self.read!r})>"
        )
