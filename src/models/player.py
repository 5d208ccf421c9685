"""players table model."""

from __future__ import annotations

from sqlalchemy import Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.mixins import TimestampMixin


class PlayerRow(TimestampMixin, Base):
    """Roster member plus the last synced solo-queue standing."""

    __tablename__ = "players"
    __table_args__ = (Index("idx_players_summoner_name", "summoner_name"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    role: Mapped[str] = mapped_column(String(16), nullable=False)
    summoner_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    summoner_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    profile_icon_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    tier: Mapped[str | None] = mapped_column(String(32), nullable=True)
    rank: Mapped[str | None] = mapped_column(String(8), nullable=True)
    league_points: Mapped[int | None] = mapped_column(Integer, nullable=True)
    wins: Mapped[int | None] = mapped_column(Integer, nullable=True)
    losses: Mapped[int | None] = mapped_column(Integer, nullable=True)
