from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base

if TYPE_CHECKING:
    from models.auto import Auto


class Ausstattung(Base):
    __tablename__ = "ausstattung"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True
    )

    bezeichnung: Mapped[str] = mapped_column(
        String(32)
    )

    beschreibung: Mapped[str] = mapped_column(
        String(128)
    )

    preis: Mapped[Decimal] = mapped_column(
        Numeric(14, 6)
    )

    auto_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("auto.id", ondelete="CASCADE"),
        index=True
    )

    auto: Mapped[Auto] = relationship(
        back_populates="ausstattungen"
    )
