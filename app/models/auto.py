from __future__ import annotations

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import List, TYPE_CHECKING

from sqlalchemy import Boolean, Date, DateTime, Enum, Integer, Numeric, String, func
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base

if TYPE_CHECKING:
    from models.ausstattung import Ausstattung
    from models.auto_file import AutoFile
    from models.fahrzeugschein import Fahrzeugschein


class Autoart(str, enum.Enum):
    SUV = "SUV"
    CABRIO = "CABRIO"
    LIMOUSINE = "LIMOUSINE"
    E_AUTO = "E_AUTO"
    KOMBI = "KOMBI"
    PICKUP = "PICKUP"
    CROSSOVER = "CROSSOVER"


class Auto(Base):
    __tablename__ = "auto"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True
    )

    # Optimistic concurrency, incremented by every update
    version: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )

    fin: Mapped[str] = mapped_column(
        String(17),
        unique=True,
        index=True
    )

    rating: Mapped[int] = mapped_column(
        Integer
    )  # 0..5

    art: Mapped[Autoart | None] = mapped_column(
        Enum(Autoart, name="autoart"),
        nullable=True
    )

    preis: Mapped[Decimal] = mapped_column(
        Numeric(14, 6)
    )

    rabatt: Mapped[Decimal] = mapped_column(
        Numeric(5, 4),
        default=Decimal("0")
    )  # 0 <= rabatt < 1

    verfuegbar: Mapped[bool] = mapped_column(
        Boolean,
        default=False
    )

    baujahr: Mapped[date | None] = mapped_column(
        Date,
        nullable=True
    )

    homepage: Mapped[str | None] = mapped_column(
        String,
        nullable=True
    )

    schlagwoerter: Mapped[List[str] | None] = mapped_column(
        ARRAY(String),
        nullable=True
    )

    erzeugt: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now()
    )

    aktualisiert: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    fahrzeugschein: Mapped[Fahrzeugschein] = relationship(
        back_populates="auto",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    ausstattungen: Mapped[List[Ausstattung]] = relationship(
        back_populates="auto",
        cascade="all, delete-orphan",
        passive_deletes=True
    )

    file: Mapped[AutoFile | None] = relationship(
        back_populates="auto",
        uselist=False,
        cascade="all, delete-orphan",
        passive_deletes=True
    )
