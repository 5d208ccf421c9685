"""matches table model."""

from __future__ import annotations

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import TimestampMixin


class MatchRow(TimestampMixin, Base):
    """One ingested game for one player (upserted on player_id + game_id)."""

    __tablename__ = "matches"
    __table_args__ = (
        UniqueConstraint("player_id", "game_id", name="uq_matches_player_game"),
        CheckConstraint("result IN ('win', 'loss')", name="ck_matches_result"),
        Index("idx_matches_player_timestamp", "player_id", "timestamp"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player_id: Mapped[int] = mapped_column(ForeignKey("players.id"), nullable=False)
    game_id: Mapped[str] = mapped_column(String(64), nullable=False)
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False)
    champion: Mapped[str] = mapped_column(String(64), nullable=False)
    champion_id: Mapped[int] = mapped_column(Integer, nullable=False)
    result: Mapped[str] = mapped_column(String(8), nullable=False)
    kills: Mapped[int] = mapped_column(Integer, nullable=False)
    deaths: Mapped[int] = mapped_column(Integer, nullable=False)
    assists: Mapped[int] = mapped_column(Integer, nullable=False)
    kda: Mapped[float] = mapped_column(Float, nullable=False)
    cs: Mapped[int] = mapped_column(Integer, nullable=False)
    cs_per_min: Mapped[float] = mapped_column(Float, nullable=False)
    vision: Mapped[int] = mapped_column(Integer, nullable=False)
    gold: Mapped[int] = mapped_column(Integer, nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    role: Mapped[str | None] = mapped_column(String(16), nullable=True)
