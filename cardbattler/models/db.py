"""
SQLAlchemy ORM models for persistent storage.

Two logical tables: each player's card collection and each player's
active deck.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    JSON,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardDB(Base):
    """
    A card in a player's collection.

    Cards are never edited after they are saved.
    """

    __tablename__ = "cards"
    __table_args__ = (UniqueConstraint("user_id", "card_id", name="uq_user_card"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    card_id: Mapped[str] = mapped_column(String(64), index=True)

    name: Mapped[str] = mapped_column(String(255))
    attack: Mapped[int] = mapped_column(Integer)
    health: Mapped[int] = mapped_column(Integer)
    element: Mapped[str] = mapped_column(String(16))
    keywords: Mapped[list[Any]] = mapped_column(JSON, default=list)
    cost: Mapped[int] = mapped_column(Integer)
    explanation: Mapped[str] = mapped_column(Text, default="")
    image_url: Mapped[str] = mapped_column(Text, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<CardDB(card_id={self.card_id}, name={self.name})>"


class ActiveDeckDB(Base):
    """
    A player's active deck.

    Stored as an ordered list of card ids; replaced wholesale on save.
    """

    __tablename__ = "active_decks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    card_ids: Mapped[list[Any]] = mapped_column(JSON, default=list)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<ActiveDeckDB(user_id={self.user_id}, cards={len(self.card_ids)})>"
