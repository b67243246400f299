from __future__ import annotations

from sqlalchemy import BigInteger, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from callback_worker.infrastructure.db.base import Base


class TransactionLogModel(Base):
    __tablename__ = "tmvh_transaction_logs"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    code: Mapped[str] = mapped_column(Text, nullable=False, default="")
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    msisdn: Mapped[str] = mapped_column(Text, nullable=False, default="")
    operator: Mapped[str] = mapped_column(Text, nullable=False, default="")
    short_code: Mapped[str] = mapped_column(Text, nullable=False, default="")
    tran_ref: Mapped[str] = mapped_column(Text, nullable=False, default="")
    timestamp: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    cyberus_return: Mapped[str] = mapped_column(Text, nullable=False, default="")
