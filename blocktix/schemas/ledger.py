from pydantic import Field
from datetime import datetime
from typing import Optional

from blocktix.models.ledger import LedgerEntryType
from blocktix.schemas.base import CamelModel


class LedgerEntry(CamelModel):
    id: Optional[int] = None
    type: LedgerEntryType
    event_id: str
    from_wallet: Optional[str] = Field(default=None, alias="from")
    to_wallet: Optional[str] = Field(default=None, alias="to")
    amount: Optional[float] = None
    quantity: Optional[int] = None
    category_name: Optional[str] = None
    timestamp: Optional[datetime] = None
    order_id: Optional[str] = None


class PurchaseRequest(CamelModel):
    event_id: str = Field(min_length=1)
    wallet: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    price: Optional[float] = Field(default=None, ge=0)
    category_name: Optional[str] = None


class PurchaseResponse(CamelModel):
    success: bool = True
    order_id: str


class ResellRequest(CamelModel):
    event_id: str = Field(min_length=1)
    seller: str = Field(min_length=1)
    buyer: str = Field(min_length=1)
    price: float = Field(ge=0)
    category_name: Optional[str] = None


class TransferRequest(CamelModel):
    event_id: str = Field(min_length=1)
    from_wallet: str = Field(alias="from", min_length=1)
    to_wallet: str = Field(alias="to", min_length=1)


class CategoryBreakdown(CamelModel):
    event_id: str
    category_name: Optional[str] = None
    purchases: int = 0
    resales: int = 0
    total_amount: float = 0


class AnalyticsSummary(CamelModel):
    total_tickets: int
    sold_tickets: int
    remaining_tickets: int
    events: int
