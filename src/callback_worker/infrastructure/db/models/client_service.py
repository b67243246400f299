from __future__ import annotations

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from callback_worker.infrastructure.db.base import Base


class ClientServiceModel(Base):
    """Partner routing row; owned by the partner admin, read-only here."""

    __tablename__ = "client_services"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    shortcode: Mapped[str] = mapped_column(String(32), nullable=False)
    # Stored as a string even though the values are numeric codes.
    telcoid: Mapped[str] = mapped_column(String(8), nullable=False)
    dn_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    postback_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    postback_counter: Mapped[int | None] = mapped_column(Integer, nullable=True)

    __table_args__ = (
        Index("ix_client_services_shortcode_telcoid", "shortcode", "telcoid"),
    )
