"""SQLAlchemy 2.0 ORM models for players feature."""

import uuid
from datetime import datetime

from sqlalchemy import (
    DateTime as SQLDateTime,
    Index,
    LargeBinary,
    String,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from players_api.core.models import Base


class PlayerORM(Base):
    """Stored player record.

    Email and nickname carry unique constraints, which are the authoritative
    guard against duplicates created concurrently.
    """

    __tablename__ = "players"
    __table_args__ = (Index("idx_players_country_created", "country", "date_created"),)

    # Primary key generated by the domain, never by the database
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        comment="Player identifier",
    )

    first_name: Mapped[str] = mapped_column(
        "firstname",
        String(128),
        nullable=False,
    )

    last_name: Mapped[str] = mapped_column(
        "lastname",
        String(128),
        nullable=False,
    )

    nickname: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        comment="Public player nickname (unique)",
    )

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="Player email address (unique)",
    )

    password: Mapped[bytes] = mapped_column(
        "usrpwd",
        LargeBinary,
        nullable=False,
        comment="Password hash, never plaintext",
    )

    country: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        index=True,
    )

    date_created: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        comment="When the player was created (UTC)",
    )

    date_updated: Mapped[datetime] = mapped_column(
        SQLDateTime(timezone=True),
        nullable=False,
        comment="When the player was last updated (UTC)",
    )

    def __repr__(self) -> str:
        return f"<PlayerORM(id='{self.id}', nickname='{self.nickname}')>"
