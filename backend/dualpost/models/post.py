"""
DualPost Backend — Post SQLAlchemy Model
=========================================

What:  ORM model representing the `posts` table in PostgreSQL.
Why:   Maps Python objects to rows for PostgresPostStore's statements.
How:   Inherits from the shared DeclarativeBase; create_tables() reads it.

Table layout:
    posts(id SERIAL PRIMARY KEY, title TEXT NOT NULL,
          author TEXT NOT NULL, content TEXT NOT NULL)

    - Integer id: generated by the database sequence, so newest-first is
      simply ORDER BY id DESC.
    - NOT NULL on every content column: this constraint is the only thing
      that rejects a post with a missing field.
    - No timestamp columns; the relational variant does not record them.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from dualpost.database import Base


class Post(Base):
    """A post row. Fully replaced on update, hard-deleted on delete."""

    __tablename__ = "posts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}', author='{self.author}')>"
