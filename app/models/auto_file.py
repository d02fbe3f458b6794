from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Integer, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.db import Base

if TYPE_CHECKING:
    from models.auto import Auto


class AutoFile(Base):
    """Binary attachment, at most one per auto."""
    __tablename__ = "auto_file"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True
    )

    filename: Mapped[str] = mapped_column(
        String
    )

    data: Mapped[bytes] = mapped_column(
        LargeBinary
    )

    # Sniffed from the bytes, None if the type is unknown
    mimetype: Mapped[str | None] = mapped_column(
        String,
        nullable=True
    )

    auto_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("auto.id", ondelete="CASCADE"),
        unique=True
    )

    auto: Mapped[Auto] = relationship(
        back_populates="file"
    )
