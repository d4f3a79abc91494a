from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column
from messaging.database.base import Base


class Tag(Base):
    """
    SQLAlchemy model for a Tag.

    A named label a participant attaches to a conversation ("archived",
    "important", ...). The name is the externally meaningful key: filters
    match on it, never on the id.
    """
    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(primary_key=True)

    # Unique, case-sensitive label
    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        index=True,
        nullable=False
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id!r}, name={self.name!r})>"
