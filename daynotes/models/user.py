"""
DayNotes Backend — User SQLAlchemy Model
==========================================

Read-only from the service's point of view: rows are provisioned out of band
and only looked up by POST /login. `password` holds a passlib hash string.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from daynotes.database import Base


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    username: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        unique=True,
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="passlib hash; never returned by the API",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
