"""
Notes Service: Note SQLAlchemy Model
====================================

What:  ORM model for the `notes` table.
Who:   Queried by SQLNoteStorage; read by Alembic autogenerate.

Table layout (matches alembic revision 001):
    header   TEXT NOT NULL
    content  TEXT NOT NULL DEFAULT ''
    id       INTEGER PRIMARY KEY AUTOINCREMENT

sqlite_autoincrement makes SQLite track the highest id ever issued, so an id
freed by a delete is never handed out again.
"""

from sqlalchemy import Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from notes_api.database import Base


class Note(Base):
    """A single note: a required header and free-form content."""

    __tablename__ = "notes"
    __table_args__ = {"sqlite_autoincrement": True}

    header: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, header='{self.header}')>"
