from sqlalchemy import Column, Integer, String, Float, DateTime, Enum, Index
from sqlalchemy.sql import func
from blocktix.database import Base
import enum


class LedgerEntryType(str, enum.Enum):
    PURCHASE = "purchase"
    RESELL = "resell"
    TRANSFER = "transfer"


class LedgerEntry(Base):
    """Append-only record of a purchase, resale or transfer."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(Enum(LedgerEntryType), nullable=False)
    event_id = Column(String(120), nullable=False, index=True)
    from_wallet = Column(String(320), nullable=True)
    to_wallet = Column(String(320), nullable=True)
    to_wallet_key = Column(String(320), nullable=True)
    amount = Column(Float, nullable=True)
    quantity = Column(Integer, nullable=True)
    category_name = Column(String(200), nullable=True)
    timestamp = Column(DateTime, server_default=func.now(), index=True)
    order_id = Column(String(64), nullable=True, unique=True, index=True)

    __table_args__ = (
        Index("ix_transactions_wallet_purchases", "type", "to_wallet_key", "event_id"),
    )
