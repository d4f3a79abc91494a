from sqlalchemy.orm import Mapped, mapped_column
from messaging.database.base import Base


class Person(Base):
    """
    SQLAlchemy model for a Person.

    Identity only: people are owned by the surrounding system (accounts,
    profiles) and the messaging tables just reference them by id.
    """
    __tablename__ = "persons"

    id: Mapped[int] = mapped_column(primary_key=True)

    def __repr__(self) -> str:
        return f"<Person(id={self.id!r})>"
