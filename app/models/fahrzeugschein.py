from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base

if TYPE_CHECKING:
    from models.auto import Auto


class Fahrzeugschein(Base):
    """Vehicle registration, created together with its auto."""
    __tablename__ = "fahrzeugschein"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True
    )

    identifikations_nummer: Mapped[str] = mapped_column(
        String(10),
        index=True
    )  # e.g. AB-CD1234

    erstzulassung: Mapped[date | None] = mapped_column(
        Date,
        nullable=True
    )

    gueltig_bis: Mapped[date | None] = mapped_column(
        Date,
        nullable=True
    )

    auto_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("auto.id", ondelete="CASCADE"),
        unique=True
    )

    auto: Mapped[Auto] = relationship(
        back_populates="fahrzeugschein"
    )
